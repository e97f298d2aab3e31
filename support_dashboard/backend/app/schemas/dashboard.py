# support_dashboard/backend/app/schemas/dashboard.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .ticket import TicketRead

ALL = "all"


class FilterSpec(BaseModel):
    """
    Current dashboard query. Immutable; the controller swaps it wholesale.

    Categorical fields hold either a concrete value or "all".
    """

    search: str = ""
    status: str = ALL
    priority: str = ALL
    category: str = ALL

    model_config = ConfigDict(frozen=True)

    def is_neutral(self) -> bool:
        return self == FilterSpec()


class StatisticsSnapshot(BaseModel):
    open_count: int = 0
    in_progress_count: int = 0
    urgent_count: int = 0
    resolved_today_count: int = 0

    model_config = ConfigDict(frozen=True)


class SelectionUpdate(BaseModel):
    ticket_id: Optional[str] = None


class DashboardView(BaseModel):
    filtered_tickets: List[TicketRead]
    statistics: StatisticsSnapshot
    selected_ticket: Optional[TicketRead] = None
    is_loading: bool
    filters: FilterSpec
    last_error: Optional[str] = None
