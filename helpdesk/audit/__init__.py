"""Pure helpers for the audit trail: redaction, diffs, labels, paging."""

from helpdesk.audit.redaction import redact, REDACTED, DEFAULT_REDACT_KEYS
from helpdesk.audit.diff import format_audit_changes
from helpdesk.audit.labels import format_action

__all__ = [
    "redact",
    "REDACTED",
    "DEFAULT_REDACT_KEYS",
    "format_audit_changes",
    "format_action",
]
