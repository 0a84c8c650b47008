"""
Agenda item API endpoints.

Team members submit topics here; the meetings endpoints schedule them.
"""
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from huddle.core.deps import get_current_user, get_db, parse_uuid
from huddle.models.agenda_item import AgendaItem
from huddle.models.profile import Profile
from huddle.schemas.agenda_item import AgendaItemCreate, AgendaItemOut, AgendaItemTagOut
from huddle.services import agenda_registry
from huddle.services.audit import AuditAction, TargetType, log_action

router = APIRouter(prefix="/agenda-items", tags=["agenda-items"])


def _build_agenda_item_out(item: AgendaItem) -> AgendaItemOut:
    """Build output schema with submitter and tag display names."""
    return AgendaItemOut(
        id=item.id,
        title=item.title,
        description=item.description,
        status=item.status,
        submitted_by=item.submitted_by,
        submitter_name=item.submitter.display_name if item.submitter else None,
        tags=[
            AgendaItemTagOut(
                user_id=tag.user_id,
                display_name=tag.profile.display_name if tag.profile else "",
            )
            for tag in item.tags
        ],
        created_at=item.created_at,
    )


@router.get("", response_model=List[AgendaItemOut])
def list_agenda_items(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List all agenda items, newest first.
    """
    return [_build_agenda_item_out(item) for item in agenda_registry.list_items(db)]


@router.get("/pending", response_model=List[AgendaItemOut])
def list_pending_agenda_items(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List agenda items that are not on any meeting yet, newest first.
    """
    return [_build_agenda_item_out(item) for item in agenda_registry.list_pending(db)]


@router.get("/{agenda_item_id}", response_model=AgendaItemOut)
def get_agenda_item(
    agenda_item_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    item_uuid = parse_uuid(agenda_item_id, "agenda item ID")
    return _build_agenda_item_out(agenda_registry.get_item(db, item_uuid))


@router.post("", response_model=AgendaItemOut, status_code=status.HTTP_201_CREATED)
def submit_agenda_item(
    data: AgendaItemCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Submit a topic for an upcoming meeting.

    The item starts out pending. Tagged team members are recorded with it.
    """
    item = agenda_registry.submit(
        db,
        title=data.title,
        submitter_id=current_user.id,
        description=data.description,
        tagged_user_ids=data.tagged_user_ids,
    )

    log_action(
        db=db,
        action=AuditAction.SUBMIT_AGENDA_ITEM,
        user_id=current_user.id,
        target_type=TargetType.AGENDA_ITEM,
        target_id=str(item.id),
        details={"title": item.title, "tag_count": len(item.tags)},
        request=request,
    )

    return _build_agenda_item_out(agenda_registry.get_item(db, item.id))
