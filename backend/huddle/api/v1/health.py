"""
Health check endpoints for service and database status.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from huddle.core.config import settings
from huddle.core.deps import get_db
from huddle.services.change_feed import change_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check():
    """
    Basic health check endpoint.

    Returns:
        Simple status message indicating the API is running
    """
    return {
        "status": "ok",
        "service": settings.PROJECT_NAME,
    }


@router.get("/db")
def database_health_check(db: Session = Depends(get_db)):
    """
    Check database connectivity.

    Returns:
        "healthy" when a trivial query succeeds, "unhealthy" with the error otherwise
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        return {"status": "unhealthy", "error": str(e.__class__.__name__)}

    return {
        "status": "healthy",
        "change_feed_subscribers": change_feed.subscriber_count,
    }
