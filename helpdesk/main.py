"""
Helpdesk — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from helpdesk.config import get_settings
from helpdesk.logging import configure_logging
from helpdesk.api.health import router as health_router
from helpdesk.api.tickets import router as tickets_router
from helpdesk.api.audit import router as audit_router

settings = get_settings()

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Ticketing service with a redacted, queryable audit trail",
)

# Register routers
app.include_router(health_router)
app.include_router(tickets_router)
app.include_router(audit_router)
