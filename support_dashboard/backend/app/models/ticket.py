# support_dashboard/backend/app/models/ticket.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..db import Base


def _new_ticket_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ticket(Base):
    __tablename__ = "tickets"

    # opaque id assigned by the store
    id = Column(String(32), primary_key=True, default=_new_ticket_id)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")

    requester_name = Column(String(255), nullable=False)
    requester_email = Column(String(255), nullable=True, index=True)

    status = Column(String(50), nullable=False, server_default="open")
    priority = Column(String(50), nullable=False, server_default="normal")
    category = Column(String(100), nullable=False, server_default="other")

    # timestamps are written in UTC
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        onupdate=_utcnow,
        nullable=False,
    )

    history_entries = relationship(
        "TicketHistory",
        back_populates="ticket",
        order_by="TicketHistory.changed_at",
    )
