# support_dashboard/backend/app/store/__init__.py

from ..config import Settings
from .base import ORDER_NEWEST_FIRST, TicketStore
from .http import HttpTicketStore
from .sql import SqlTicketStore


def build_store(settings: Settings, session_factory=None) -> TicketStore:
    """Pick the ticket store client configured by TICKET_STORE."""
    if settings.ticket_store == "http":
        if not settings.ticket_store_url:
            raise RuntimeError("TICKET_STORE=http requires TICKET_STORE_URL")
        return HttpTicketStore(
            str(settings.ticket_store_url),
            api_key=settings.ticket_store_api_key,
            timeout=settings.ticket_store_timeout,
        )

    if session_factory is None:
        from ..db import SessionLocal

        session_factory = SessionLocal
    return SqlTicketStore(session_factory)


__all__ = [
    "ORDER_NEWEST_FIRST",
    "TicketStore",
    "HttpTicketStore",
    "SqlTicketStore",
    "build_store",
]
