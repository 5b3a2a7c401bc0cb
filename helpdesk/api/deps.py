"""
Shared API dependencies.

The acting user is established by the session layer in front of
this service and arrives in the ``X-User-Id`` header. A missing or
unknown id means the request is anonymous.
"""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from helpdesk.models.base import get_db
from helpdesk.models.user import User


def get_current_user(
    x_user_id: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User | None:
    if not x_user_id:
        return None
    return db.get(User, x_user_id)
