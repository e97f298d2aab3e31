# support_dashboard/backend/app/models/ticket_history.py

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..db import Base


class TicketHistory(Base):
    """One field change on a ticket, written by the edit endpoints."""

    __tablename__ = "ticket_history"

    id = Column(Integer, primary_key=True)
    ticket_id = Column(String(32), ForeignKey("tickets.id"), nullable=False, index=True)
    field = Column(String(100), nullable=False)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=False)

    changed_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    ticket = relationship("Ticket", back_populates="history_entries")
