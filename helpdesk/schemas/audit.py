"""
Pydantic schemas for the audit history.

Filters arrive as raw query-string values; the query service
decides how to interpret them (bad dates are ignored, page
numbers are clamped), so every field here is an optional string.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class AuditLogFilter(BaseModel):
    user_id: str | None = None
    action: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    start: str | None = None
    end: str | None = None


class AuditLogResponse(BaseModel):
    """A stored audit entry, as exposed over the API."""
    id: int
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    before: Any = None
    after: Any = None
    metadata: Any = None
    created_at: datetime

    @classmethod
    def from_entry(cls, entry) -> "AuditLogResponse":
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            action=entry.action,
            resource_type=entry.resource_type,
            resource_id=entry.resource_id,
            before=entry.before,
            after=entry.after,
            metadata=entry.metadata_,
            created_at=entry.created_at,
        )


# --- Rendered history ---

class PageLink(BaseModel):
    """One slot in the page navigation; ``ellipsis`` marks a gap."""
    number: int | None = None
    href: str | None = None
    current: bool = False
    ellipsis: bool = False


class Navigation(BaseModel):
    previous: str | None
    next: str | None
    pages: list[PageLink]


class AuditRow(BaseModel):
    number: int
    date: str
    time: str
    user: str
    action: str
    changes: list[str]


class AuditPageResponse(BaseModel):
    rows: list[AuditRow]
    summary: str
    total: int
    page: int
    page_size: int
    navigation: Navigation


class AuditHistoryItem(BaseModel):
    """An entry of a single resource's history, with its changes."""
    id: int
    action: str
    label: str
    user: str
    created_at: datetime
    changes: list[str]
