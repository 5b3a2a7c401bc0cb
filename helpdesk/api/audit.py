"""
Audit history endpoint for administrators.

Non-admins get a 404 so the page's existence is not revealed.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from helpdesk.api.deps import get_current_user
from helpdesk.audit.presenter import render_audit_page
from helpdesk.models.base import get_db
from helpdesk.models.user import User
from helpdesk.schemas.audit import (
    AuditLogFilter,
    AuditLogResponse,
    AuditPageResponse,
)
from helpdesk.services.audit_query_service import AuditQueryService

router = APIRouter(prefix="/admin", tags=["Audit"])


@router.get("/audit", response_model=AuditPageResponse)
def audit_log_page(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    action: str | None = None,
    resource_type: str | None = Query(default=None, alias="resourceType"),
    resource_id: str | None = Query(default=None, alias="resourceId"),
    start: str | None = None,
    end: str | None = None,
    page: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """
    One page of the audit trail, newest first.

    All parameters are optional strings. Bad dates are ignored,
    page is floored at 1 and pageSize clamped to [1, 100].
    """
    if user is None or not user.is_admin:
        raise HTTPException(status_code=404, detail="Not found")

    filters = AuditLogFilter(
        user_id=user_id,
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        start=start,
        end=end,
    )
    result = AuditQueryService(db).query(filters, page, page_size)
    return render_audit_page(result, dict(request.query_params))


@router.get("/audit/{entry_id}", response_model=AuditLogResponse)
def get_audit_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """A single stored entry with its redacted snapshots."""
    if user is None or not user.is_admin:
        raise HTTPException(status_code=404, detail="Not found")

    try:
        entry = AuditQueryService(db).get_entry(entry_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AuditLogResponse.from_entry(entry)
