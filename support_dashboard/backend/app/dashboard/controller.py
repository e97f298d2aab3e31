# support_dashboard/backend/app/dashboard/controller.py
from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Tuple

from ..errors import StoreUnavailable
from ..schemas.dashboard import DashboardView, FilterSpec
from ..schemas.ticket import TicketRead
from ..store.base import ORDER_NEWEST_FIRST, TicketStore
from .filters import apply_filters
from .stats import summarize

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Owns the dashboard state: the raw ticket collection, the current
    filter spec and the selected ticket id.

    Tickets and filters are only ever replaced wholesale, so a view built
    between two awaits always sees a complete before- or after-state.
    Every mutating call returns the freshly derived view.
    """

    def __init__(
        self,
        store: TicketStore,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.store = store
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(tz))

        self._tickets: Tuple[TicketRead, ...] = ()
        self._filters = FilterSpec()
        self._selected_id: Optional[str] = None
        self.is_loading = False
        self.last_error: Optional[str] = None

    @property
    def tickets(self) -> List[TicketRead]:
        return list(self._tickets)

    @property
    def filters(self) -> FilterSpec:
        return self._filters

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    async def reload(self) -> DashboardView:
        """
        Fetch every ticket (newest first) and replace the collection.

        A store failure keeps the previous collection, is recorded in
        `last_error` and logged; it is never raised to the caller.
        """
        self.is_loading = True
        try:
            fetched = await self.store.list(ORDER_NEWEST_FIRST)
        except StoreUnavailable as exc:
            self.last_error = str(exc)
            logger.warning("Error loading tickets: %s", exc)
        else:
            self._tickets = tuple(fetched)
            self.last_error = None
            logger.info("Loaded %d tickets", len(self._tickets))
        finally:
            self.is_loading = False
        return self.derived_view()

    def update_filters(self, spec: FilterSpec) -> DashboardView:
        # no merging: the caller sends the complete spec
        self._filters = spec
        logger.debug("Filters changed: %s", spec.model_dump())
        return self.derived_view()

    def clear_filters(self) -> DashboardView:
        return self.update_filters(FilterSpec())

    def select_ticket(self, ticket_id: Optional[str]) -> DashboardView:
        self._selected_id = ticket_id
        logger.debug("Selected ticket: %s", ticket_id)
        return self.derived_view()

    def selected_ticket(self) -> Optional[TicketRead]:
        if self._selected_id is None:
            return None
        for t in self._tickets:
            if t.id == self._selected_id:
                return t
        return None

    def derived_view(self, now: Optional[datetime] = None) -> DashboardView:
        tickets = self._tickets
        filters = self._filters
        if now is None:
            now = self.clock()
        return DashboardView(
            filtered_tickets=apply_filters(tickets, filters),
            statistics=summarize(tickets, now, self.tz),
            selected_ticket=self.selected_ticket(),
            is_loading=self.is_loading,
            filters=filters,
            last_error=self.last_error,
        )
