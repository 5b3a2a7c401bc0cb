"""
Ticket API endpoints.

The API layer is thin: it maps service errors to HTTP status codes
and owns the commit. A failed audit write on update, close or delete
fails the whole request, since the entry shares the transaction.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from helpdesk.api.deps import get_current_user
from helpdesk.audit.presenter import render_history
from helpdesk.models.base import get_db
from helpdesk.models.user import User
from helpdesk.schemas.audit import AuditHistoryItem
from helpdesk.schemas.ticket import TicketCreate, TicketUpdate, TicketResponse
from helpdesk.services.audit_query_service import AuditQueryService
from helpdesk.services.ticket_service import TicketService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["Tickets"])


def _raise_for(error: Exception):
    if isinstance(error, PermissionError):
        raise HTTPException(status_code=403, detail=str(error))
    if "not found" in str(error):
        raise HTTPException(status_code=404, detail=str(error))
    raise HTTPException(status_code=400, detail=str(error))


@router.post("", response_model=TicketResponse, status_code=201)
def create_ticket(
    request: TicketCreate,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """Create a ticket. Its audit entry is best-effort."""
    service = TicketService(db)
    return service.create_ticket(request, user)


@router.get("", response_model=list[TicketResponse])
def list_tickets(db: Session = Depends(get_db)):
    """All tickets, newest first."""
    return TicketService(db).list_tickets()


@router.get("/{ticket_id}", response_model=TicketResponse)
def get_ticket(ticket_id: int, db: Session = Depends(get_db)):
    """Get ticket details."""
    service = TicketService(db)
    try:
        return service.get_ticket(ticket_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{ticket_id}", response_model=TicketResponse)
def update_ticket(
    ticket_id: int,
    request: TicketUpdate,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """Update subject, description or priority."""
    service = TicketService(db)
    try:
        ticket = service.update_ticket(ticket_id, request, user)
        db.commit()
        return ticket
    except (ValueError, PermissionError) as e:
        db.rollback()
        _raise_for(e)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Ticket update failed ticket_id=%s", ticket_id)
        raise HTTPException(status_code=500, detail="Ticket update failed")


@router.post("/{ticket_id}/close", response_model=TicketResponse)
def close_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """Close an open ticket."""
    service = TicketService(db)
    try:
        ticket = service.close_ticket(ticket_id, user)
        db.commit()
        return ticket
    except (ValueError, PermissionError) as e:
        db.rollback()
        _raise_for(e)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Ticket close failed ticket_id=%s", ticket_id)
        raise HTTPException(status_code=500, detail="Ticket close failed")


@router.delete("/{ticket_id}", status_code=204)
def delete_ticket(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """Delete a ticket. Its history stays in the audit trail."""
    service = TicketService(db)
    try:
        service.delete_ticket(ticket_id, user)
        db.commit()
    except (ValueError, PermissionError) as e:
        db.rollback()
        _raise_for(e)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Ticket delete failed ticket_id=%s", ticket_id)
        raise HTTPException(status_code=500, detail="Ticket delete failed")


@router.get("/{ticket_id}/history", response_model=list[AuditHistoryItem])
def ticket_history(
    ticket_id: int,
    db: Session = Depends(get_db),
    user: User | None = Depends(get_current_user),
):
    """
    Recorded actions on a ticket with a summary of what changed.

    Works for deleted tickets too, since audit entries outlive them.
    """
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    entries = AuditQueryService(db).history("Ticket", ticket_id)
    return render_history(entries)
