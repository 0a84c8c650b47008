from typing import Optional

from pydantic import BaseModel


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: Optional[str] = None
    display_name: Optional[str] = None
