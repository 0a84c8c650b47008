"""Schemas for agenda item operations."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class AgendaItemCreate(BaseModel):
    """Request schema for submitting an agenda item."""

    title: str = Field(..., max_length=255, description="Topic to discuss")
    description: Optional[str] = Field(None, description="Optional details")
    tagged_user_ids: List[UUID] = Field(
        default_factory=list, description="Team members relevant to the topic"
    )


class AgendaItemTagOut(BaseModel):
    """A tagged team member."""

    user_id: UUID
    display_name: str


class AgendaItemOut(BaseModel):
    """Response schema for an agenda item."""

    id: UUID
    title: str
    description: Optional[str] = None
    status: str = Field(..., description="pending, scheduled or completed")
    submitted_by: UUID
    submitter_name: Optional[str] = Field(None, description="Submitter display name")
    tags: List[AgendaItemTagOut] = Field(default_factory=list)
    created_at: datetime

    class Config:
        from_attributes = True
