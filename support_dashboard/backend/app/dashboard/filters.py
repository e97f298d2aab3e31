# support_dashboard/backend/app/dashboard/filters.py

from typing import List, Sequence

from ..schemas.dashboard import ALL, FilterSpec
from ..schemas.ticket import TicketRead

# Fields the free-text search looks at
SEARCH_FIELDS = ("title", "description", "requester_name")


def _is_active(value: str) -> bool:
    # "" is treated like "all" so an untouched form field never filters
    return bool(value) and value != ALL


def matches_search(ticket: TicketRead, search: str) -> bool:
    """
    Case-insensitive substring match on title, description or requester name.
    An empty search term matches everything.
    """
    if not search:
        return True
    term = search.lower()
    return any(term in (getattr(ticket, f) or "").lower() for f in SEARCH_FIELDS)


def matches(ticket: TicketRead, spec: FilterSpec) -> bool:
    if not matches_search(ticket, spec.search):
        return False
    if _is_active(spec.status) and ticket.status != spec.status:
        return False
    if _is_active(spec.priority) and ticket.priority != spec.priority:
        return False
    if _is_active(spec.category) and ticket.category != spec.category:
        return False
    return True


def apply_filters(tickets: Sequence[TicketRead], spec: FilterSpec) -> List[TicketRead]:
    """
    Return the tickets that pass every active predicate of `spec`,
    keeping their original relative order.
    """
    return [t for t in tickets if matches(t, spec)]
