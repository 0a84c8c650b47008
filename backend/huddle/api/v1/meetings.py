"""
Meeting API endpoints.

Create meetings and build their agendas from pending agenda items.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from huddle.core.deps import get_current_user, get_db, parse_uuid
from huddle.models.meeting import Meeting
from huddle.models.meeting_agenda_item import MeetingAgendaItem
from huddle.models.profile import Profile
from huddle.schemas.meeting import (
    AttachAgendaItemRequest,
    MeetingAgendaItemOut,
    MeetingCreate,
    MeetingOut,
)
from huddle.services import meeting_scheduler
from huddle.services.audit import AuditAction, TargetType, log_action

router = APIRouter(prefix="/meetings", tags=["meetings"])


def _build_attachment_out(attachment: MeetingAgendaItem) -> MeetingAgendaItemOut:
    return MeetingAgendaItemOut(
        id=attachment.id,
        meeting_id=attachment.meeting_id,
        agenda_item_id=attachment.agenda_item_id,
        title=attachment.agenda_item.title,
        description=attachment.agenda_item.description,
        time_slot_minutes=attachment.time_slot_minutes,
        order_index=attachment.order_index,
    )


def _build_meeting_out(meeting: Meeting) -> MeetingOut:
    """Build output schema with the agenda sorted by position."""
    attachments = sorted(meeting.agenda_items, key=lambda a: a.order_index)
    return MeetingOut(
        id=meeting.id,
        title=meeting.title,
        date=meeting.date,
        created_by=meeting.created_by,
        created_at=meeting.created_at,
        total_minutes=meeting_scheduler.total_minutes(meeting),
        agenda_items=[_build_attachment_out(a) for a in attachments],
    )


@router.get("", response_model=List[MeetingOut])
def list_meetings(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List meetings, most recent date first.
    """
    return [_build_meeting_out(m) for m in meeting_scheduler.list_meetings(db)]


@router.get("/{meeting_id}", response_model=MeetingOut)
def get_meeting(
    meeting_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    meeting_uuid = parse_uuid(meeting_id, "meeting ID")
    return _build_meeting_out(meeting_scheduler.get_meeting(db, meeting_uuid))


@router.post("", response_model=MeetingOut, status_code=status.HTTP_201_CREATED)
def create_meeting(
    data: MeetingCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Schedule a new team meeting.
    """
    meeting = meeting_scheduler.create_meeting(
        db,
        title=data.title,
        day=data.date,
        start=data.time,
        creator_id=current_user.id,
    )

    log_action(
        db=db,
        action=AuditAction.CREATE_MEETING,
        user_id=current_user.id,
        target_type=TargetType.MEETING,
        target_id=str(meeting.id),
        details={"title": meeting.title, "date": meeting.date.isoformat()},
        request=request,
    )

    return _build_meeting_out(meeting_scheduler.get_meeting(db, meeting.id))


@router.post(
    "/{meeting_id}/agenda-items",
    response_model=MeetingAgendaItemOut,
    status_code=status.HTTP_201_CREATED,
)
def attach_agenda_item(
    meeting_id: str,
    data: AttachAgendaItemRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Append a pending agenda item to the meeting's agenda.

    The item is placed after the current last position and marked scheduled.
    """
    meeting_uuid = parse_uuid(meeting_id, "meeting ID")
    attachment = meeting_scheduler.attach_agenda_item(
        db,
        meeting_id=meeting_uuid,
        agenda_item_id=data.agenda_item_id,
        time_slot_minutes=data.time_slot_minutes,
    )

    log_action(
        db=db,
        action=AuditAction.ATTACH_AGENDA_ITEM,
        user_id=current_user.id,
        target_type=TargetType.MEETING_AGENDA_ITEM,
        target_id=str(attachment.id),
        details={
            "meeting_id": meeting_id,
            "agenda_item_id": str(attachment.agenda_item_id),
            "order_index": attachment.order_index,
            "time_slot_minutes": attachment.time_slot_minutes,
        },
        request=request,
    )

    return _build_attachment_out(attachment)
