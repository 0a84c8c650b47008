"""
Chat channel API endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session, joinedload

from huddle.core.deps import get_current_user, get_db, parse_uuid
from huddle.core.exceptions import NotFoundError, ValidationError
from huddle.db.session import store_operation
from huddle.models.channel import Channel
from huddle.models.chat_message import ChatMessage
from huddle.models.profile import Profile
from huddle.schemas.chat import ChannelOut, ChatMessageCreate, ChatMessageOut
from huddle.services.audit import AuditAction, TargetType, log_action
from huddle.services.change_feed import change_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/channels", tags=["channels"])


def _message_to_out(message: ChatMessage) -> ChatMessageOut:
    return ChatMessageOut(
        id=message.id,
        channel_id=message.channel_id,
        user_id=message.user_id,
        author_name=message.author.display_name if message.author else None,
        content=message.content,
        created_at=message.created_at,
    )


def _get_channel(db: Session, channel_id: str) -> Channel:
    channel_uuid = parse_uuid(channel_id, "channel ID")
    with store_operation(db, "load the channel"):
        channel = db.query(Channel).filter(Channel.id == channel_uuid).first()
    if not channel:
        raise NotFoundError("Channel not found")
    return channel


@router.get("", response_model=List[ChannelOut])
def list_channels(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List chat channels, oldest first.
    """
    with store_operation(db, "list channels"):
        return db.query(Channel).order_by(Channel.created_at.asc()).all()


@router.get("/{channel_id}/messages", response_model=List[ChatMessageOut])
def list_messages(
    channel_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    List a channel's messages in the order they were posted.
    """
    channel = _get_channel(db, channel_id)

    with store_operation(db, "list messages"):
        messages = (
            db.query(ChatMessage)
            .options(joinedload(ChatMessage.author))
            .filter(ChatMessage.channel_id == channel.id)
            .order_by(ChatMessage.created_at.asc())
            .all()
        )

    return [_message_to_out(m) for m in messages]


@router.post(
    "/{channel_id}/messages",
    response_model=ChatMessageOut,
    status_code=status.HTTP_201_CREATED,
)
def post_message(
    channel_id: str,
    data: ChatMessageCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Post a message to a channel.
    """
    channel = _get_channel(db, channel_id)

    content = data.content.strip()
    if not content:
        raise ValidationError("Message content is required")

    message = ChatMessage(
        channel_id=channel.id,
        user_id=current_user.id,
        content=content,
    )
    with store_operation(db, "post the message"):
        db.add(message)
        db.commit()
        db.refresh(message)

    change_feed.publish("messages", "INSERT", message.id, channel_id=channel.id)

    log_action(
        db=db,
        action=AuditAction.POST_MESSAGE,
        user_id=current_user.id,
        target_type=TargetType.MESSAGE,
        target_id=str(message.id),
        details={"channel_id": str(channel.id)},
        request=request,
    )

    return _message_to_out(message)
