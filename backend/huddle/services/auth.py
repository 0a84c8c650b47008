"""
Authentication service - access token verification.

Sign-up and sign-in live with the identity provider. This service
verifies the bearer tokens it issues and resolves them to profiles;
create_access_token mints equivalent tokens for local development and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from huddle.core.config import settings
from huddle.models.profile import Profile
from huddle.schemas.auth import TokenData


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token signed with the shared secret.

    Development and test helper: production tokens are minted by the
    identity provider, and no endpoint here issues tokens.

    Args:
        data: Payload data to encode in the token ("sub" is the profile id)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT access token.

    Returns:
        TokenData if valid, None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None
    return TokenData(user_id=user_id, display_name=payload.get("display_name"))


def get_profile_by_id(db: Session, user_id: UUID) -> Optional[Profile]:
    """Get a profile by its ID."""
    return db.query(Profile).filter(Profile.id == user_id).first()
