"""
Human-readable summaries of what changed between two snapshots.

This is a summary for reviewers, not a complete diff:
- at most ``max_fields`` changes are reported, in sorted key order
- nested dicts are inspected one level deep, first three keys only
- lists are compared as a whole, never element by element
- added, removed and changed fields all read as "changed"

Two values redacted to the same sentinel compare equal, so a change
to a sensitive field is not reported.
"""

import json
import re
from typing import Any, NamedTuple


class _Missing:
    """Marker for a key present on only one side."""

    def __repr__(self) -> str:
        return "undefined"


MISSING = _Missing()

NESTED_KEY_LIMIT = 3

_NEWLINES = re.compile(r"\n+")


class Change(NamedTuple):
    key_path: str
    before: Any
    after: Any


def stringify_value(value: Any, max_length: int = 200) -> str:
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, str):
        s = _NEWLINES.sub(" ", value)
        if len(s) <= max_length:
            return f'"{s}"'
        return f'"{s[:max_length]}... (truncated)"'
    try:
        s = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        s = str(value)
    return f"{s[:max_length]}..." if len(s) > max_length else s


def deep_equal(a: Any, b: Any) -> bool:
    """
    Structural equality over JSON-like values.

    Unlike ``==``, booleans never equal numbers (``True != 1``),
    matching how the values serialize.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(deep_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, (dict, list, tuple)) or isinstance(b, (dict, list, tuple)):
        return False
    return a == b


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def _union_keys(a: dict, b: dict) -> list:
    return list(dict.fromkeys([*a.keys(), *b.keys()]))


def collect_changes(before: Any, after: Any, max_fields: int = 3) -> list[Change]:
    """Return up to ``max_fields`` raw changes between two snapshots."""
    if (before is None and after is None) or max_fields < 1:
        return []

    b = before if isinstance(before, dict) else {}
    a = after if isinstance(after, dict) else {}

    changes: list[Change] = []

    for key in sorted(_union_keys(b, a), key=str):
        vb = b.get(key, MISSING)
        va = a.get(key, MISSING)

        if deep_equal(vb, va):
            continue

        if isinstance(vb, dict) and isinstance(va, dict):
            nested_found = False
            for nested_key in _union_keys(vb, va)[:NESTED_KEY_LIMIT]:
                nb = vb.get(nested_key, MISSING)
                na = va.get(nested_key, MISSING)
                if not deep_equal(nb, na):
                    changes.append(Change(f"{key}.{nested_key}", nb, na))
                    nested_found = True
                if len(changes) >= max_fields:
                    break
            if nested_found:
                if len(changes) >= max_fields:
                    break
                continue

        changes.append(Change(str(key), vb, va))

        if len(changes) >= max_fields:
            break

    return changes


def format_audit_changes(
    before: Any,
    after: Any,
    max_fields: int = 3,
    max_value_length: int = 200,
) -> list[str]:
    """
    Describe the differences between two snapshots, one line each.

    >>> format_audit_changes({"status": "Open"}, {"status": "Closed"})
    ['Status: "Open" changed to "Closed"']
    """
    lines = []
    for change in collect_changes(before, after, max_fields):
        head, _, tail = change.key_path.partition(".")
        path = _capitalize(head) + (f".{tail}" if tail else "")
        left = stringify_value(change.before, max_value_length)
        right = stringify_value(change.after, max_value_length)
        lines.append(f"{path}: {left} changed to {right}")
    return lines
