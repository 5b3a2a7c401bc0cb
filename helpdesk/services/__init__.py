"""Business logic services."""

from helpdesk.services.audit_service import (
    AuditWriter,
    TransactionalAuditSink,
    FireAndForgetAuditSink,
)
from helpdesk.services.audit_query_service import AuditQueryService
from helpdesk.services.ticket_service import TicketService

__all__ = [
    "AuditWriter",
    "TransactionalAuditSink",
    "FireAndForgetAuditSink",
    "AuditQueryService",
    "TicketService",
]
