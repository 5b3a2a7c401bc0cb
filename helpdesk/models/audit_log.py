"""
Audit log model.

Records every state-changing action together with redacted
before/after snapshots of the affected resource.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, String, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from helpdesk.models.base import Base


# JSONB on PostgreSQL, plain JSON (text) elsewhere
JSONValue = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class AuditLog(Base):
    """
    Immutable record of a single tracked action.

    Audit logs are append-only. Nothing in the application
    updates or deletes an audit record. Snapshots are always
    redacted before the row is built.
    """

    __tablename__ = "audit_logs"
    __table_args__ = (
        Index("ix_audit_logs_resource", "resource_type", "resource_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, index=True
    )
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    resource_type: Mapped[str] = mapped_column(String(100), nullable=False)
    resource_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    before: Mapped[Any] = mapped_column(JSONValue, nullable=True)
    after: Mapped[Any] = mapped_column(JSONValue, nullable=True)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[Any] = mapped_column(
        "metadata", JSONValue, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )

    user: Mapped["User | None"] = relationship()

    def __repr__(self) -> str:
        return (
            f"<AuditLog {self.action} "
            f"{self.resource_type}#{self.resource_id}>"
        )
