"""
Audit query service — reads the audit trail for display.

Filtering rules:
- user_id, resource_type, resource_id match exactly
- action matches as a case-insensitive substring
- start/end bound created_at inclusively; end covers its whole
  calendar day (up to 23:59:59.999); unparseable dates are ignored

Results are always newest first. Page numbers are forgiving:
page is floored at 1 and page_size clamped to [1, 100].
"""

from dataclasses import dataclass
from datetime import datetime, time, timezone

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from helpdesk.config import get_settings
from helpdesk.models.audit_log import AuditLog
from helpdesk.schemas.audit import AuditLogFilter

MAX_PAGE_SIZE = 100
END_OF_DAY = time(23, 59, 59, 999000)


@dataclass
class AuditLogPage:
    entries: list[AuditLog]
    total: int
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


def parse_date(raw: str | None) -> datetime | None:
    """Parse an ISO date or datetime; return None if it isn't one."""
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if value.tzinfo is not None:
        # created_at is stored as naive UTC
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_page(raw, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def normalize_paging(page=None, page_size=None) -> tuple[int, int]:
    settings = get_settings()
    page = max(parse_page(page, 1), 1)
    page_size = parse_page(page_size, settings.AUDIT_DEFAULT_PAGE_SIZE)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page, page_size


def _escape_like(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class AuditQueryService:
    """Read-only access to audit entries. The caller owns the session."""

    def __init__(self, db: Session):
        self.db = db

    def _conditions(self, filters: AuditLogFilter) -> list:
        conditions = []
        if filters.user_id:
            conditions.append(AuditLog.user_id == filters.user_id)
        if filters.action:
            conditions.append(
                AuditLog.action.ilike(
                    f"%{_escape_like(filters.action)}%", escape="\\"
                )
            )
        if filters.resource_type:
            conditions.append(AuditLog.resource_type == filters.resource_type)
        if filters.resource_id:
            conditions.append(AuditLog.resource_id == filters.resource_id)

        start = parse_date(filters.start)
        if start is not None:
            conditions.append(AuditLog.created_at >= start)

        end = parse_date(filters.end)
        if end is not None:
            end = datetime.combine(end.date(), END_OF_DAY)
            conditions.append(AuditLog.created_at <= end)

        return conditions

    def query(
        self, filters: AuditLogFilter | None = None, page=None, page_size=None
    ) -> AuditLogPage:
        """
        Return one page of matching entries plus the total match count.

        ``page`` and ``page_size`` may be ints or raw query-string values.
        """
        filters = filters or AuditLogFilter()
        page, page_size = normalize_paging(page, page_size)
        conditions = self._conditions(filters)

        entries = self.db.execute(
            select(AuditLog)
            .where(*conditions)
            .options(selectinload(AuditLog.user))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        ).scalars().all()

        total = self.db.execute(
            select(func.count(AuditLog.id)).where(*conditions)
        ).scalar_one()

        return AuditLogPage(
            entries=list(entries),
            total=total,
            page=page,
            page_size=page_size,
        )

    def get_entry(self, entry_id: int) -> AuditLog:
        """Get a single audit entry by ID."""
        entry = self.db.get(AuditLog, entry_id)
        if not entry:
            raise ValueError(f"Audit entry {entry_id} not found")
        return entry

    def history(
        self, resource_type: str, resource_id: str | int, limit: int = 50
    ) -> list[AuditLog]:
        """All recorded actions on one resource, newest first."""
        entries = self.db.execute(
            select(AuditLog)
            .where(
                AuditLog.resource_type == resource_type,
                AuditLog.resource_id == str(resource_id),
            )
            .options(selectinload(AuditLog.user))
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(entries)
