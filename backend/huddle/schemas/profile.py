from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class ProfileOut(BaseModel):
    """Team member as shown in pickers and author lines."""
    id: UUID
    display_name: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True
