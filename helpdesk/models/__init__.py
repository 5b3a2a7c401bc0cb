"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from helpdesk.models.base import Base
from helpdesk.models.enums import UserRole, TicketPriority, TicketStatus
from helpdesk.models.user import User
from helpdesk.models.ticket import Ticket
from helpdesk.models.audit_log import AuditLog

__all__ = [
    "Base",
    "UserRole",
    "TicketPriority",
    "TicketStatus",
    "User",
    "Ticket",
    "AuditLog",
]
