# support_dashboard/backend/app/store/http.py
from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ..errors import StoreUnavailable
from ..schemas.ticket import TicketRead
from .base import ORDER_NEWEST_FIRST, parse_order

logger = logging.getLogger(__name__)

ENTITY_PATH = "/entities/SupportTicket"

# field names on the remote entity store side
_REMOTE_FIELD_NAMES = {"created_at": "created_date", "updated_at": "updated_date"}

_ticket_list = TypeAdapter(List[TicketRead])


def remote_sort(order: str) -> str:
    """
    Translate our order spec ("-created_at") to the remote one ("-created_date").
    """
    field, descending = parse_order(order)
    field = _REMOTE_FIELD_NAMES.get(field, field)
    return f"-{field}" if descending else field


class HttpTicketStore:
    """Reads tickets from the remote entity store over HTTP."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["api_key"] = self.api_key
        return headers

    async def list(self, order: str = ORDER_NEWEST_FIRST) -> List[TicketRead]:
        url = f"{self.base_url}{ENTITY_PATH}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                r = await client.get(
                    url, params={"sort": remote_sort(order)}, headers=self._headers()
                )
                r.raise_for_status()
                payload = r.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise StoreUnavailable(f"Ticket store request failed: {exc}") from exc
        except ValueError as exc:
            # body was not JSON
            raise StoreUnavailable(f"Ticket store returned invalid JSON: {exc}") from exc

        try:
            tickets = _ticket_list.validate_python(payload)
        except ValidationError as exc:
            raise StoreUnavailable(
                f"Ticket store returned malformed tickets ({exc.error_count()} errors)"
            ) from exc

        logger.debug("fetched %d tickets from %s", len(tickets), url)
        return tickets
