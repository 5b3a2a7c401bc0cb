"""
Shared enumerations for database models.

Python enums mapped to database enums, so only known values
can be stored.
"""

import enum


class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class TicketPriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TicketStatus(str, enum.Enum):
    """Lifecycle of a ticket. Closed is terminal."""
    OPEN = "Open"
    CLOSED = "Closed"
