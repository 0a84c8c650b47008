"""
Common dependencies for FastAPI endpoints.
"""
from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from huddle.core.exceptions import BadRequestError, UnauthorizedError
from huddle.db.session import SessionLocal
from huddle.models.profile import Profile
from huddle.services.auth import decode_access_token, get_profile_by_id

# Missing credentials are reported as 401 by get_current_user itself
security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a database session and ensures it's closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _resolve_profile(
    credentials: Optional[HTTPAuthorizationCredentials], db: Session
) -> Profile:
    if credentials is None:
        raise UnauthorizedError()

    token_data = decode_access_token(credentials.credentials)
    if token_data is None or token_data.user_id is None:
        raise UnauthorizedError("Invalid credentials")

    try:
        user_id = UUID(token_data.user_id)
    except ValueError:
        raise UnauthorizedError("Invalid credentials")

    profile = get_profile_by_id(db, user_id)
    if profile is None:
        raise UnauthorizedError("Invalid credentials")

    return profile


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Profile:
    """
    Resolve the bearer token to the caller's profile.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired, or
            the profile does not exist
    """
    return _resolve_profile(credentials, db)


def get_stream_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Profile:
    """
    Resolve the bearer token for a long-lived streaming response.

    Uses a short-lived session of its own; a request-scoped session from
    get_db would stay checked out until the stream closes. The returned
    profile is detached.
    """
    with SessionLocal() as db:
        return _resolve_profile(credentials, db)


def parse_uuid(value: str, name: str = "ID") -> UUID:
    """Parse a path parameter to UUID with error handling."""
    try:
        return UUID(value)
    except ValueError:
        raise BadRequestError(f"Invalid {name}")
