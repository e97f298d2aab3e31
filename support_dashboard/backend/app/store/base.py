# support_dashboard/backend/app/store/base.py
from __future__ import annotations

from typing import List, Protocol, Tuple

from ..schemas.ticket import TicketRead

# The dashboard always asks for newest tickets first
ORDER_NEWEST_FIRST = "-created_at"


class TicketStore(Protocol):
    """
    Anything that can hand the dashboard the full ticket collection.

    Implementations raise StoreUnavailable when the backend can't be read.
    """

    async def list(self, order: str = ORDER_NEWEST_FIRST) -> List[TicketRead]:
        ...


def parse_order(order: str) -> Tuple[str, bool]:
    """
    Split an order spec like "-created_at" into (field, descending).
    """
    raw = (order or "").strip()
    if raw.startswith("-"):
        return raw[1:], True
    return raw, False
