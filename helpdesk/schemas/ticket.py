"""
Pydantic schemas for ticket operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from helpdesk.models.enums import TicketPriority, TicketStatus


class TicketCreate(BaseModel):
    subject: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    priority: TicketPriority


class TicketUpdate(BaseModel):
    """Partial update; only supplied fields change."""
    subject: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    priority: TicketPriority | None = None


class TicketResponse(BaseModel):
    id: int
    subject: str
    description: str
    priority: TicketPriority
    status: TicketStatus
    user_id: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
