# support_dashboard/backend/app/labels.py
from typing import Dict, List, Optional

from fastapi import HTTPException

# Allowed values & validators
# These are the canonical labels offered by forms and accepted on writes.
# Tickets loaded from a remote store may carry other values; the dashboard
# treats those opaquely.
ALLOWED_STATUSES = ["open", "in_progress", "resolved", "closed"]
ALLOWED_PRIORITIES = ["low", "normal", "high", "urgent"]
ALLOWED_CATEGORIES = ["hardware", "software", "network", "account", "access", "other"]

_STATUS_CANON = {s.lower(): s for s in ALLOWED_STATUSES}
_PRIORITY_CANON = {p.lower(): p for p in ALLOWED_PRIORITIES}
_CATEGORY_CANON = {c.lower(): c for c in ALLOWED_CATEGORIES}

DEFAULT_STATUS = "open"
DEFAULT_PRIORITY = "normal"
DEFAULT_CATEGORY = "other"


def _canonical(
    kind: str, value: Optional[str], canon: Dict[str, str], allowed: List[str]
) -> Optional[str]:
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None
    key = raw.lower().replace(" ", "_")
    if key not in canon:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {kind} '{raw}'. Allowed: {', '.join(allowed)}",
        )
    return canon[key]


def validate_status(value: Optional[str]) -> Optional[str]:
    """
    Normalize + validate a status. Empty -> None. Case-insensitive,
    "In Progress" is accepted for in_progress.
    """
    return _canonical("status", value, _STATUS_CANON, ALLOWED_STATUSES)


def validate_priority(value: Optional[str]) -> Optional[str]:
    return _canonical("priority", value, _PRIORITY_CANON, ALLOWED_PRIORITIES)


def validate_category(value: Optional[str]) -> Optional[str]:
    return _canonical("category", value, _CATEGORY_CANON, ALLOWED_CATEGORIES)
