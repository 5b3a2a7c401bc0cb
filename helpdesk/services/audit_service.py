"""
Audit writer — records one audit entry per tracked action.

Where the entry goes is decided by the caller through a sink:

- TransactionalAuditSink writes through the caller's session.
  The entry commits or rolls back together with the business
  change, and a failed insert aborts the caller's transaction.
  Use it whenever an entry must never exist without its change.

- FireAndForgetAuditSink writes in its own session and commits
  immediately. Failures are logged and swallowed: the caller's
  operation never fails because of the audit trail, at the cost
  of possible gaps in it.

Snapshots are redacted before the row is built, so unredacted
data never reaches the session in either mode.
"""

import logging
from typing import Any, Callable, Iterable, Protocol

from sqlalchemy.orm import Session

from helpdesk.audit.redaction import redact
from helpdesk.config import get_settings
from helpdesk.models.audit_log import AuditLog
from helpdesk.models.base import SessionLocal

logger = logging.getLogger("helpdesk.audit")


class AuditSink(Protocol):
    def write(self, entry: AuditLog) -> AuditLog | None:
        ...


class TransactionalAuditSink:
    """Adds the entry to an open session. The caller commits."""

    def __init__(self, db: Session):
        self.db = db

    def write(self, entry: AuditLog) -> AuditLog:
        self.db.add(entry)
        self.db.flush()
        return entry


class FireAndForgetAuditSink:
    """
    Commits the entry in a session of its own.

    Any error (database down, value not serializable) is logged on
    the ``helpdesk.audit`` logger and ``None`` is returned.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def write(self, entry: AuditLog) -> AuditLog | None:
        # Read up front: after a failed commit or refresh the entry may be detached
        action, resource_type, resource_id = (
            entry.action, entry.resource_type, entry.resource_id
        )
        try:
            # Closing the session rolls back anything left uncommitted
            with self.session_factory() as db:
                db.add(entry)
                db.commit()
                db.refresh(entry)
            return entry
        except Exception:
            logger.exception(
                "Failed to write audit log action=%s resource_type=%s resource_id=%s",
                action,
                resource_type,
                resource_id,
            )
            return None


class AuditWriter:
    """
    Builds redacted audit entries and hands them to a sink.

    The writer holds no state besides its sink and settings, so one
    instance may serve any number of operations.
    """

    def __init__(
        self,
        sink: AuditSink,
        redact_keys: Iterable[str] | None = None,
        max_string_length: int | None = None,
    ):
        settings = get_settings()
        self.sink = sink
        self.redact_keys = tuple(
            redact_keys if redact_keys is not None else settings.AUDIT_REDACT_KEYS
        )
        self.max_string_length = (
            max_string_length
            if max_string_length is not None
            else settings.AUDIT_MAX_STRING_LENGTH
        )

    @classmethod
    def transactional(cls, db: Session, **kwargs) -> "AuditWriter":
        return cls(TransactionalAuditSink(db), **kwargs)

    @classmethod
    def standalone(
        cls, session_factory: Callable[[], Session] = SessionLocal, **kwargs
    ) -> "AuditWriter":
        return cls(FireAndForgetAuditSink(session_factory), **kwargs)

    def _redact(self, value: Any) -> Any:
        if value is None:
            return None
        return redact(value, self.redact_keys, self.max_string_length)

    def build_entry(
        self,
        *,
        action: str,
        resource_type: str,
        resource_id: str | int | None,
        user_id: str | None = None,
        before: Any = None,
        after: Any = None,
        metadata: dict | None = None,
    ) -> AuditLog:
        """Create the (unsaved) row with redacted snapshots."""
        return AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id is not None else None,
            before=self._redact(before),
            after=self._redact(after),
            metadata_=self._redact(metadata),
        )

    def record(self, **fields: Any) -> AuditLog | None:
        """
        Record one audit entry.

        Accepts the keyword arguments of ``build_entry``. Returns
        the persisted entry, or ``None`` when a fire-and-forget
        write was dropped.
        """
        entry = self.build_entry(**fields)
        return self.sink.write(entry)
