"""
Ticket service — create, update, close and delete tickets.

Every mutation is audited:
- creation is committed first and then recorded fire-and-forget,
  so a broken audit trail never prevents a ticket from being raised
- update, close and delete record their entry in the same session;
  the caller's commit persists both or neither

Only the ticket's owner or an admin may modify a ticket.
"""

from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from helpdesk.models.enums import TicketStatus
from helpdesk.models.ticket import Ticket
from helpdesk.models.user import User
from helpdesk.schemas.ticket import TicketCreate, TicketUpdate, TicketResponse
from helpdesk.services.audit_service import AuditWriter


def ticket_snapshot(ticket: Ticket) -> dict[str, Any]:
    """JSON-safe copy of a ticket's fields for before/after snapshots."""
    return TicketResponse.model_validate(ticket).model_dump(mode="json")


class TicketService:

    def __init__(
        self,
        db: Session,
        audit_session_factory: Callable[[], Session] | None = None,
    ):
        self.db = db
        # Standalone audit writes go to the same database in a new session
        if audit_session_factory is None:
            audit_session_factory = sessionmaker(
                bind=db.get_bind(), autocommit=False, autoflush=False
            )
        self.audit_session_factory = audit_session_factory

    def _check_can_modify(self, ticket: Ticket, actor: User | None) -> None:
        if actor is None:
            raise PermissionError("Authentication required")
        if ticket.user_id != actor.id and not actor.is_admin:
            raise PermissionError(f"Not allowed to modify ticket {ticket.id}")

    def get_ticket(self, ticket_id: int) -> Ticket:
        """Get a ticket by ID."""
        ticket = self.db.get(Ticket, ticket_id)
        if not ticket:
            raise ValueError(f"Ticket {ticket_id} not found")
        return ticket

    def list_tickets(self) -> list[Ticket]:
        """All tickets, newest first."""
        tickets = self.db.execute(
            select(Ticket).order_by(Ticket.created_at.desc(), Ticket.id.desc())
        ).scalars().all()
        return list(tickets)

    def create_ticket(
        self, request: TicketCreate, actor: User | None = None
    ) -> Ticket:
        """
        Create a ticket and commit it.

        The audit entry is written afterwards in its own session.
        If that write fails the ticket still exists and the failure
        is only logged.
        """
        ticket = Ticket(
            subject=request.subject,
            description=request.description,
            priority=request.priority,
            user_id=actor.id if actor else None,
        )
        self.db.add(ticket)
        self.db.commit()

        AuditWriter.standalone(self.audit_session_factory).record(
            user_id=actor.id if actor else None,
            action="ticket.create",
            resource_type="Ticket",
            resource_id=ticket.id,
            after=ticket_snapshot(ticket),
        )
        return ticket

    def update_ticket(
        self, ticket_id: int, request: TicketUpdate, actor: User | None
    ) -> Ticket:
        """
        Apply a partial update.

        The audit entry joins the caller's transaction. The caller
        is responsible for calling db.commit().
        """
        ticket = self.get_ticket(ticket_id)
        self._check_can_modify(ticket, actor)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise ValueError("No fields to update")

        before = ticket_snapshot(ticket)
        for field, value in changes.items():
            setattr(ticket, field, value)
        self.db.flush()

        AuditWriter.transactional(self.db).record(
            user_id=actor.id,
            action="ticket.update",
            resource_type="Ticket",
            resource_id=ticket.id,
            before=before,
            after=ticket_snapshot(ticket),
            metadata={"fields": sorted(changes)},
        )
        return ticket

    def close_ticket(self, ticket_id: int, actor: User | None) -> Ticket:
        """Close an open ticket. Closed is terminal."""
        ticket = self.get_ticket(ticket_id)
        self._check_can_modify(ticket, actor)

        if ticket.status == TicketStatus.CLOSED:
            raise ValueError(f"Ticket {ticket_id} is already closed")

        before = ticket_snapshot(ticket)
        ticket.status = TicketStatus.CLOSED
        self.db.flush()

        AuditWriter.transactional(self.db).record(
            user_id=actor.id,
            action="ticket.close",
            resource_type="Ticket",
            resource_id=ticket.id,
            before=before,
            after=ticket_snapshot(ticket),
        )
        return ticket

    def delete_ticket(self, ticket_id: int, actor: User | None) -> None:
        """Delete a ticket, keeping its last state in the audit trail."""
        ticket = self.get_ticket(ticket_id)
        self._check_can_modify(ticket, actor)

        before = ticket_snapshot(ticket)
        self.db.delete(ticket)
        self.db.flush()

        AuditWriter.transactional(self.db).record(
            user_id=actor.id,
            action="ticket.delete",
            resource_type="Ticket",
            resource_id=ticket_id,
            before=before,
        )
