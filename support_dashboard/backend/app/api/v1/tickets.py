# support_dashboard/backend/app/api/v1/tickets.py

import logging
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...dashboard.controller import DashboardController
from ...db import get_db
from ...deps import get_local_controller
from ...labels import (
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    validate_category,
    validate_priority,
    validate_status,
)
from ...models.ticket import Ticket
from ...models.ticket_history import TicketHistory
from ...schemas.ticket import TicketCreate, TicketHistoryRead, TicketRead, TicketUpdate
from ...store.sql import to_read_model

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])

_VALIDATORS = {
    "status": validate_status,
    "priority": validate_priority,
    "category": validate_category,
}


def get_ticket_or_404(db: Session, ticket_id: str) -> Ticket:
    ticket = db.get(Ticket, ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return ticket


def apply_ticket_changes(
    db: Session, ticket: Ticket, data: Dict[str, Optional[str]]
) -> Dict[str, Tuple[Optional[str], str]]:
    """
    Validate and apply status/priority/category edits, logging each real
    change into ticket_history. Blank values leave the field untouched.
    Caller commits.
    """
    changes: Dict[str, Tuple[Optional[str], str]] = {}
    for field, raw_value in data.items():
        validator = _VALIDATORS.get(field)
        if validator is None:
            continue
        new_val = validator(raw_value)
        if new_val is None:
            continue
        old_val = getattr(ticket, field)
        if old_val != new_val:
            setattr(ticket, field, new_val)
            changes[field] = (old_val, new_val)

    for field, (old, new) in changes.items():
        db.add(
            TicketHistory(
                ticket_id=ticket.id,
                field=field,
                old_value=old if old is not None else "",
                new_value=new,
            )
        )
    return changes


@router.post(
    "",
    response_model=TicketRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_ticket(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    controller: DashboardController = Depends(get_local_controller),
):
    ticket = Ticket(
        title=payload.title,
        description=payload.description,
        requester_name=payload.requester_name,
        requester_email=payload.requester_email,
        status=DEFAULT_STATUS,
        priority=validate_priority(payload.priority) or DEFAULT_PRIORITY,
        category=validate_category(payload.category) or DEFAULT_CATEGORY,
    )
    db.add(ticket)
    db.commit()
    db.refresh(ticket)
    logger.info("Created ticket %s (%s/%s)", ticket.id, ticket.priority, ticket.category)

    await controller.reload()
    return to_read_model(ticket)


@router.get("/{ticket_id}", response_model=TicketRead)
def get_ticket(
    ticket_id: str,
    db: Session = Depends(get_db),
    controller: DashboardController = Depends(get_local_controller),
):
    return to_read_model(get_ticket_or_404(db, ticket_id))


@router.patch("/{ticket_id}", response_model=TicketRead)
async def update_ticket(
    ticket_id: str,
    payload: TicketUpdate,
    db: Session = Depends(get_db),
    controller: DashboardController = Depends(get_local_controller),
):
    """
    JSON-level edit for status, priority, category.
    Also records ticket_history entries and refreshes the dashboard.
    """
    ticket = get_ticket_or_404(db, ticket_id)
    changes = apply_ticket_changes(db, ticket, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(ticket)
    if changes:
        logger.info("Updated ticket %s: %s", ticket.id, ", ".join(sorted(changes)))
        await controller.reload()
    return to_read_model(ticket)


@router.get("/{ticket_id}/history", response_model=List[TicketHistoryRead])
def get_ticket_history(
    ticket_id: str,
    db: Session = Depends(get_db),
    controller: DashboardController = Depends(get_local_controller),
):
    get_ticket_or_404(db, ticket_id)
    return (
        db.query(TicketHistory)
        .filter(TicketHistory.ticket_id == ticket_id)
        .order_by(TicketHistory.changed_at, TicketHistory.id)
        .all()
    )
