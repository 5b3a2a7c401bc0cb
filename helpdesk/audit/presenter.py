"""
Turns stored audit entries into the rows shown on the history pages.
"""

from typing import Mapping

from helpdesk.audit.diff import format_audit_changes
from helpdesk.audit.labels import format_action
from helpdesk.audit.pagination import build_navigation, showing_summary
from helpdesk.models.audit_log import AuditLog
from helpdesk.schemas.audit import AuditRow, AuditPageResponse, AuditHistoryItem

ANONYMOUS = "Anonymous"


def display_name(entry: AuditLog) -> str:
    return entry.user.name if entry.user is not None else ANONYMOUS


def label_for(entry: AuditLog) -> str:
    return format_action(entry.action, entry.resource_type, entry.resource_id)


def render_audit_page(result, params: Mapping[str, str]) -> AuditPageResponse:
    """
    Build the paged history view.

    ``result`` is an AuditLogPage; ``params`` are the request's query
    parameters, reused so that page links keep the active filters.
    """
    rows = []
    for i, entry in enumerate(result.entries):
        rows.append(AuditRow(
            number=result.skip + i + 1,
            date=entry.created_at.strftime("%Y-%m-%d"),
            time=entry.created_at.strftime("%H:%M:%S"),
            user=display_name(entry),
            action=label_for(entry),
            changes=format_audit_changes(entry.before, entry.after),
        ))

    return AuditPageResponse(
        rows=rows,
        summary=showing_summary(result.page, result.page_size, result.total),
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        navigation=build_navigation(
            params, result.page, result.page_size, result.total
        ),
    )


def render_history(entries: list[AuditLog]) -> list[AuditHistoryItem]:
    return [
        AuditHistoryItem(
            id=entry.id,
            action=entry.action,
            label=label_for(entry),
            user=display_name(entry),
            created_at=entry.created_at,
            changes=format_audit_changes(entry.before, entry.after),
        )
        for entry in entries
    ]
