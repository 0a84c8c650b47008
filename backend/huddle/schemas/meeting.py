"""Schemas for meeting scheduling operations."""

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from huddle.core.config import settings


class MeetingCreate(BaseModel):
    """Request schema for creating a meeting.

    date and time are kept apart the way the scheduling form collects them;
    they are combined in the configured timezone.
    """

    title: str = Field(..., max_length=255, description="Meeting title")
    date: Optional[dt.date] = Field(None, description="Meeting day (YYYY-MM-DD)")
    time: Optional[dt.time] = Field(None, description="Start time (HH:MM)")


class AttachAgendaItemRequest(BaseModel):
    """Request schema for placing an agenda item on a meeting's agenda."""

    agenda_item_id: Optional[UUID] = Field(None, description="Pending agenda item")
    time_slot_minutes: int = Field(
        default_factory=lambda: settings.DEFAULT_TIME_SLOT_MINUTES,
        description="Minutes allocated to the item",
    )


class MeetingAgendaItemOut(BaseModel):
    """An attachment as it appears on a meeting's agenda."""

    id: UUID
    meeting_id: UUID
    agenda_item_id: UUID
    title: str
    description: Optional[str] = None
    time_slot_minutes: int
    order_index: int


class MeetingOut(BaseModel):
    """Response schema for a meeting with its ordered agenda."""

    id: UUID
    title: str
    date: dt.datetime
    created_by: UUID
    created_at: dt.datetime
    total_minutes: int = Field(default=0, description="Sum of agenda time slots")
    agenda_items: List[MeetingAgendaItemOut] = Field(
        default_factory=list, description="Agenda sorted by order_index"
    )
