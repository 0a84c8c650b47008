"""
Audit logging service.

Records who submitted, scheduled or posted what, for later review.
"""
import json
import logging
from typing import Optional
from uuid import UUID

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from huddle.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


class AuditAction:
    """Constants for audit actions."""

    # Agenda
    SUBMIT_AGENDA_ITEM = "submit_agenda_item"

    # Meetings
    CREATE_MEETING = "create_meeting"
    ATTACH_AGENDA_ITEM = "attach_agenda_item"

    # Chat
    POST_MESSAGE = "post_message"


class TargetType:
    """Constants for audit target types."""

    AGENDA_ITEM = "agenda_item"
    MEETING = "meeting"
    MEETING_AGENDA_ITEM = "meeting_agenda_item"
    MESSAGE = "message"


def get_client_info(request: Request) -> tuple[Optional[str], Optional[str]]:
    """
    Extract client IP and user agent from request.

    Returns:
        Tuple of (ip_address, user_agent)
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            ip_address = real_ip.strip()
        elif request.client:
            ip_address = request.client.host
        else:
            ip_address = None

    return ip_address, request.headers.get("User-Agent")


def log_action(
    db: Session,
    action: str,
    user_id: Optional[UUID] = None,
    target_type: Optional[str] = None,
    target_id: Optional[str] = None,
    details: Optional[dict] = None,
    request: Optional[Request] = None,
) -> Optional[AuditLog]:
    """
    Log an audit event.

    The audited operation has already been committed when this runs, so a
    failure here is logged and the request still succeeds.

    Args:
        db: Database session
        action: Action type (use AuditAction constants)
        user_id: Profile that performed the action
        target_type: Type of resource affected (use TargetType constants)
        target_id: ID of the affected resource
        details: Additional details as a dictionary
        request: Incoming request, for client IP and user agent

    Returns:
        Created AuditLog record, or None if it could not be written
    """
    ip_address, user_agent = get_client_info(request) if request else (None, None)
    log = AuditLog(
        user_id=user_id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=json.dumps(details) if details else None,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    try:
        db.add(log)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Failed to write audit log for {action} on {target_type} {target_id}")
        return None
    db.refresh(log)
    return log
