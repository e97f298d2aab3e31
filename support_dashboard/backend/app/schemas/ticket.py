# support_dashboard/backend/app/schemas/ticket.py

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field


class TicketCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    requester_name: str
    requester_email: Optional[EmailStr] = None
    priority: Optional[str] = None
    category: Optional[str] = None


class TicketUpdate(BaseModel):
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None


class TicketRead(BaseModel):
    id: str
    title: str
    description: str = ""
    requester_name: str
    requester_email: Optional[str] = None

    status: str
    priority: str
    category: str

    # the remote entity store calls these created_date / updated_date
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "created_date")
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updated_date")
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class TicketHistoryRead(BaseModel):
    id: int
    ticket_id: str
    field: str
    old_value: Optional[str] = None
    new_value: str
    changed_at: datetime

    model_config = ConfigDict(from_attributes=True)
