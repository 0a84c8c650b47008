from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class ChannelOut(BaseModel):
    """Chat channel."""
    id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ChatMessageCreate(BaseModel):
    """Message to post in a channel."""
    content: str = Field(..., max_length=4000)


class ChatMessageOut(BaseModel):
    """Posted message with its author's display name."""
    id: UUID
    channel_id: UUID
    user_id: UUID
    author_name: Optional[str] = None
    content: str
    created_at: datetime
