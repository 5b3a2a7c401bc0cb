"""
Redaction of audit snapshots.

Snapshots are arbitrary JSON-like values (None, bool, numbers,
strings, lists, dicts). Before anything reaches the audit table,
values under sensitive keys are replaced with a sentinel and
oversized strings are truncated so a single entry cannot bloat
the database.
"""

from typing import Any, Iterable

DEFAULT_REDACT_KEYS = ("password", "token", "ssn")
DEFAULT_MAX_STRING_LENGTH = 10000

REDACTED = "[REDACTED]"
TRUNCATION_MARKER = "...(truncated)"
CIRCULAR = "[CIRCULAR]"


def redact(
    value: Any,
    redact_keys: Iterable[str] = DEFAULT_REDACT_KEYS,
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH,
) -> Any:
    """
    Return a redacted copy of ``value``.

    - dict keys matching ``redact_keys`` (case-insensitive) get their
      value replaced by ``[REDACTED]``; the key itself is kept
    - strings longer than ``max_string_length`` are cut and suffixed
      with ``...(truncated)``
    - lists and tuples are redacted element by element
    - everything else is returned unchanged

    The input is never mutated. A container that contains itself is
    replaced by ``[CIRCULAR]`` where the cycle closes.
    """
    keys = frozenset(k.lower() for k in redact_keys)
    return _redact(value, keys, max_string_length, set())


def _redact(value: Any, keys: frozenset, max_len: int, path: set) -> Any:
    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_len:
            return value[:max_len] + TRUNCATION_MARKER
        return value

    if isinstance(value, (list, tuple, dict)):
        if id(value) in path:
            return CIRCULAR
        path.add(id(value))
        try:
            if isinstance(value, dict):
                out = {}
                for k, v in value.items():
                    if str(k).lower() in keys:
                        out[k] = REDACTED
                    else:
                        out[k] = _redact(v, keys, max_len, path)
                return out
            return [_redact(v, keys, max_len, path) for v in value]
        finally:
            path.discard(id(value))

    return value
