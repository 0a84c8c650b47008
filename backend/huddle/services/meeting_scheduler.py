"""
Meeting scheduler - meetings and their ordered agendas.

Agenda items are appended to a meeting with a time slot. Positions are
zero-based and unique per meeting; the unique constraint on
(meeting_id, order_index) settles concurrent appends, and the loser retries
with a fresh maximum.
"""
import logging
from datetime import date as date_type
from datetime import datetime, time as time_type, timezone
from typing import List, Optional
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from huddle.core.config import settings
from huddle.core.exceptions import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from huddle.db.session import store_operation
from huddle.models.agenda_item import AgendaItem, AgendaStatus
from huddle.models.meeting import Meeting
from huddle.models.meeting_agenda_item import MeetingAgendaItem
from huddle.services.change_feed import change_feed

logger = logging.getLogger(__name__)


def combine_date_time(day: date_type, start: time_type) -> datetime:
    """
    Combine a calendar day and a start time into an aware UTC timestamp.

    A time without an offset is read as wall-clock time in settings.TIMEZONE.
    """
    moment = datetime.combine(day, start)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=ZoneInfo(settings.TIMEZONE))
    return moment.astimezone(timezone.utc)


def total_minutes(meeting: Meeting) -> int:
    """Sum of the time slots on a meeting's agenda."""
    return sum(attachment.time_slot_minutes for attachment in meeting.agenda_items)


def create_meeting(
    db: Session,
    title: str,
    day: Optional[date_type],
    start: Optional[time_type],
    creator_id: UUID,
) -> Meeting:
    """
    Create a meeting.

    Raises:
        ValidationError: If the title is blank or date/time is missing
        StoreError: If the database write fails
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Meeting title is required")
    if day is None or start is None:
        raise ValidationError("Meeting date and time are required")

    meeting = Meeting(
        title=title,
        date=combine_date_time(day, start),
        created_by=creator_id,
    )
    with store_operation(db, "create the meeting"):
        db.add(meeting)
        db.commit()
        db.refresh(meeting)

    logger.info(f"Meeting {meeting.id} '{title}' created for {meeting.date}")
    change_feed.publish("meetings", "INSERT", meeting.id)
    return meeting


def list_meetings(db: Session) -> List[Meeting]:
    """Meetings by date, newest first, each with its agenda in order_index order."""
    with store_operation(db, "list meetings"):
        return (
            db.query(Meeting)
            .options(
                selectinload(Meeting.agenda_items).joinedload(MeetingAgendaItem.agenda_item)
            )
            .order_by(Meeting.date.desc())
            .all()
        )


def get_meeting(db: Session, meeting_id: UUID) -> Meeting:
    with store_operation(db, "load the meeting"):
        meeting = (
            db.query(Meeting)
            .options(
                selectinload(Meeting.agenda_items).joinedload(MeetingAgendaItem.agenda_item)
            )
            .filter(Meeting.id == meeting_id)
            .first()
        )
    if meeting is None:
        raise NotFoundError("Meeting not found")
    return meeting


def _next_order_index(db: Session, meeting_id: UUID) -> int:
    current = (
        db.query(func.max(MeetingAgendaItem.order_index))
        .filter(MeetingAgendaItem.meeting_id == meeting_id)
        .scalar()
    )
    return 0 if current is None else current + 1


def _mark_scheduled(db: Session, agenda_item_id: UUID) -> bool:
    """Move an item from pending to scheduled. False if it was no longer pending."""
    updated = (
        db.query(AgendaItem)
        .filter(
            AgendaItem.id == agenda_item_id,
            AgendaItem.status == AgendaStatus.PENDING,
        )
        .update({AgendaItem.status: AgendaStatus.SCHEDULED}, synchronize_session=False)
    )
    return updated == 1


def attach_agenda_item(
    db: Session,
    meeting_id: UUID,
    agenda_item_id: Optional[UUID],
    time_slot_minutes: int,
) -> MeetingAgendaItem:
    """
    Append a pending agenda item to a meeting's agenda.

    The attachment insert and the status change commit together, so a
    failure leaves neither behind.

    Args:
        db: Database session
        meeting_id: Target meeting
        agenda_item_id: Pending agenda item to attach
        time_slot_minutes: Minutes allocated, must be positive

    Returns:
        The new MeetingAgendaItem with its assigned order_index

    Raises:
        ValidationError: If no item is selected or the time slot is not positive
        NotFoundError: If the meeting or the agenda item does not exist
        ConflictError: If the agenda item is not pending
        StoreError: If the database fails or no position could be claimed
    """
    if agenda_item_id is None:
        raise ValidationError("Select an agenda item to attach")
    if isinstance(time_slot_minutes, bool) or not isinstance(time_slot_minutes, int):
        raise ValidationError("Time slot must be a whole number of minutes")
    if time_slot_minutes < 1:
        raise ValidationError("Time slot must be at least one minute")

    max_attempts = settings.ORDER_INDEX_MAX_RETRIES
    with store_operation(db, "attach the agenda item"):
        if db.query(Meeting.id).filter(Meeting.id == meeting_id).first() is None:
            raise NotFoundError("Meeting not found")

        for attempt in range(1, max_attempts + 1):
            item = db.query(AgendaItem).filter(AgendaItem.id == agenda_item_id).first()
            if item is None:
                raise NotFoundError("Agenda item not found")
            if item.status != AgendaStatus.PENDING:
                raise ConflictError(f"Agenda item is already {item.status}")

            attachment = MeetingAgendaItem(
                meeting_id=meeting_id,
                agenda_item_id=agenda_item_id,
                time_slot_minutes=time_slot_minutes,
                order_index=_next_order_index(db, meeting_id),
            )
            db.add(attachment)
            try:
                db.flush()
                if not _mark_scheduled(db, agenda_item_id):
                    db.rollback()
                    raise ConflictError("Agenda item was scheduled by another request")
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.warning(
                    f"order_index {attachment.order_index} taken on meeting {meeting_id} "
                    f"(attempt {attempt}/{max_attempts})"
                )
                continue
            break
        else:
            raise StoreError("Could not reserve an agenda position, please retry")

        db.refresh(attachment)

    logger.info(
        f"Agenda item {agenda_item_id} attached to meeting {meeting_id} "
        f"at position {attachment.order_index} ({time_slot_minutes} min)"
    )
    change_feed.publish("meeting_agenda_items", "INSERT", attachment.id)
    change_feed.publish("agenda_items", "UPDATE", agenda_item_id)
    return attachment
