# support_dashboard/backend/app/dashboard/stats.py

from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..schemas.dashboard import StatisticsSnapshot
from ..schemas.ticket import TicketRead

STATUS_OPEN = "open"
STATUS_IN_PROGRESS = "in_progress"
STATUS_RESOLVED = "resolved"
PRIORITY_URGENT = "urgent"


def _reference_zone(now: datetime, tz: Optional[tzinfo]) -> Optional[tzinfo]:
    if tz is not None:
        return tz
    return now.tzinfo


def calendar_day(value: datetime, zone: Optional[tzinfo]) -> date:
    """
    Calendar date of `value` as seen in `zone` (None = local time).

    Naive datetimes are taken as wall-clock time in that zone already.
    """
    if value.tzinfo is None:
        return value.date()
    if zone is None:
        return value.astimezone().date()
    return value.astimezone(zone).date()


def summarize(
    tickets: Sequence[TicketRead],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> StatisticsSnapshot:
    """
    Compute the four dashboard counters over the full ticket collection.

    "Resolved today" compares calendar days, not a rolling 24h window:
    both `now` and each ticket's updated_at are mapped to a date in the same
    zone (`tz` if given, else the zone of `now`, else local time).
    """
    zone = _reference_zone(now, tz)
    today = calendar_day(now, zone)

    open_count = 0
    in_progress_count = 0
    urgent_count = 0
    resolved_today_count = 0

    for t in tickets:
        if t.status == STATUS_OPEN:
            open_count += 1
        elif t.status == STATUS_IN_PROGRESS:
            in_progress_count += 1
        elif t.status == STATUS_RESOLVED and calendar_day(t.updated_at, zone) == today:
            resolved_today_count += 1

        if t.priority == PRIORITY_URGENT:
            urgent_count += 1

    return StatisticsSnapshot(
        open_count=open_count,
        in_progress_count=in_progress_count,
        urgent_count=urgent_count,
        resolved_today_count=resolved_today_count,
    )
