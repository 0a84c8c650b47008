"""
Agenda registry - submission and listing of agenda items.

Items are created pending; the meeting scheduler moves them to scheduled
when it attaches them to a meeting.
"""
import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from huddle.core.exceptions import NotFoundError, ValidationError
from huddle.db.session import store_operation
from huddle.models.agenda_item import AgendaItem, AgendaStatus
from huddle.models.agenda_item_tag import AgendaItemTag
from huddle.models.profile import Profile
from huddle.services.change_feed import change_feed

logger = logging.getLogger(__name__)


def _with_people(query: Query) -> Query:
    """Eager-load the submitter and the tagged profiles."""
    return query.options(
        joinedload(AgendaItem.submitter),
        selectinload(AgendaItem.tags).joinedload(AgendaItemTag.profile),
    )


def submit(
    db: Session,
    title: str,
    submitter_id: UUID,
    description: Optional[str] = None,
    tagged_user_ids: Optional[Iterable[UUID]] = None,
) -> AgendaItem:
    """
    Submit a new agenda item in pending state.

    The item and its tags are written in a single transaction.

    Args:
        db: Database session
        title: Topic title, must contain non-whitespace characters
        submitter_id: Profile submitting the item
        description: Optional details, blank is stored as NULL
        tagged_user_ids: Profiles to tag; duplicates are collapsed

    Returns:
        The persisted AgendaItem

    Raises:
        ValidationError: If the title is blank or a tagged user is unknown
        StoreError: If the database write fails
    """
    title = (title or "").strip()
    if not title:
        raise ValidationError("Agenda item title is required")
    description = (description or "").strip() or None
    user_ids = list(dict.fromkeys(tagged_user_ids or []))

    with store_operation(db, "submit the agenda item"):
        if user_ids:
            known = {
                row.id
                for row in db.query(Profile.id).filter(Profile.id.in_(user_ids)).all()
            }
            missing = [str(user_id) for user_id in user_ids if user_id not in known]
            if missing:
                raise ValidationError(f"Unknown tagged users: {', '.join(missing)}")

        item = AgendaItem(
            title=title,
            description=description,
            status=AgendaStatus.PENDING,
            submitted_by=submitter_id,
        )
        item.tags = [AgendaItemTag(user_id=user_id) for user_id in user_ids]
        db.add(item)
        db.commit()
        db.refresh(item)

    logger.info(f"Agenda item {item.id} submitted by {submitter_id} with {len(user_ids)} tags")
    change_feed.publish("agenda_items", "INSERT", item.id)
    if user_ids:
        change_feed.publish("agenda_item_tags", "INSERT", item.id)
    return item


def list_items(db: Session) -> List[AgendaItem]:
    """All agenda items, newest first, with submitter and tags loaded."""
    with store_operation(db, "list agenda items"):
        return (
            _with_people(db.query(AgendaItem))
            .order_by(AgendaItem.created_at.desc())
            .all()
        )


def list_pending(db: Session) -> List[AgendaItem]:
    """Agenda items still waiting for a meeting, newest first."""
    with store_operation(db, "list pending agenda items"):
        return (
            _with_people(db.query(AgendaItem))
            .filter(AgendaItem.status == AgendaStatus.PENDING)
            .order_by(AgendaItem.created_at.desc())
            .all()
        )


def get_item(db: Session, agenda_item_id: UUID) -> AgendaItem:
    with store_operation(db, "load the agenda item"):
        item = (
            _with_people(db.query(AgendaItem))
            .filter(AgendaItem.id == agenda_item_id)
            .first()
        )
    if item is None:
        raise NotFoundError("Agenda item not found")
    return item
