import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from huddle.core.config import settings
from huddle.core.exceptions import StoreError

logger = logging.getLogger(__name__)

connect_args = {}
engine_kwargs = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Sessions are used from the request thread pool
    connect_args["check_same_thread"] = False
else:
    engine_kwargs.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )
    # Hosted Supabase databases require SSL
    if "supabase" in settings.DATABASE_URL.lower():
        connect_args["sslmode"] = "require"

engine = create_engine(
    settings.DATABASE_URL,
    future=True,
    pool_pre_ping=True,
    connect_args=connect_args,
    **engine_kwargs,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def store_operation(db: Session, action: str) -> Iterator[Session]:
    """
    Run a unit of work against the store.

    Any SQLAlchemy failure rolls the session back, is logged with its cause
    and surfaces as a StoreError carrying only a generic message.
    """
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Store error while trying to {action}")
        raise StoreError(f"Failed to {action}") from e
