# support_dashboard/backend/app/models/__init__.py

from .ticket import Ticket
from .ticket_history import TicketHistory

__all__ = ["Ticket", "TicketHistory"]
