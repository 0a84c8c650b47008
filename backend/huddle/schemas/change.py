"""Change feed event schema."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


ChangeKind = Literal["INSERT", "UPDATE", "DELETE"]


class ChangeEvent(BaseModel):
    """Invalidation hint: a row in `table` changed, clients should re-fetch."""

    table: str
    event: ChangeKind
    record_id: Optional[str] = None
    channel_id: Optional[str] = Field(None, description="Set on channel-scoped tables")
    occurred_at: datetime = Field(..., description="Commit time on the server")
