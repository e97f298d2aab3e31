# support_dashboard/backend/app/store/sql.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

from ..errors import StoreUnavailable
from ..models.ticket import Ticket
from ..schemas.ticket import TicketRead
from .base import ORDER_NEWEST_FIRST, parse_order

logger = logging.getLogger(__name__)

ORDERABLE_FIELDS = {"created_at", "updated_at", "title", "status", "priority", "category"}


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way out; everything is written in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_read_model(ticket: Ticket) -> TicketRead:
    data = TicketRead.model_validate(ticket)
    return data.model_copy(
        update={
            "created_at": _as_utc(data.created_at),
            "updated_at": _as_utc(data.updated_at),
        }
    )


class SqlTicketStore:
    """Ticket store backed by the local `tickets` table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _list_blocking(self, order: str) -> List[TicketRead]:
        field, descending = parse_order(order)
        if field not in ORDERABLE_FIELDS:
            raise ValueError(
                f"Cannot order tickets by '{field}'. "
                f"Allowed: {', '.join(sorted(ORDERABLE_FIELDS))}"
            )
        column = getattr(Ticket, field)
        db = self.session_factory()
        try:
            rows = (
                db.query(Ticket)
                .order_by(column.desc() if descending else column.asc())
                .all()
            )
            return [to_read_model(t) for t in rows]
        finally:
            db.close()

    async def list(self, order: str = ORDER_NEWEST_FIRST) -> List[TicketRead]:
        try:
            return await run_in_threadpool(self._list_blocking, order)
        except SQLAlchemyError as exc:
            logger.debug("ticket query failed", exc_info=True)
            raise StoreUnavailable(f"Ticket database unavailable: {exc}") from exc
