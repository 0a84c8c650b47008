"""MeetingAgendaItem model attaching an agenda item to a meeting."""
import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from huddle.db.base import Base


class MeetingAgendaItem(Base):
    """
    Places an agenda item on a meeting's agenda with a time allocation.

    order_index is zero-based and unique per meeting; new attachments are
    appended after the current maximum.
    """

    __tablename__ = "meeting_agenda_items"
    __table_args__ = (
        UniqueConstraint("meeting_id", "order_index", name="uq_meeting_agenda_items_meeting_order"),
        CheckConstraint("time_slot_minutes > 0", name="ck_meeting_agenda_items_slot"),
        CheckConstraint("order_index >= 0", name="ck_meeting_agenda_items_order"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    meeting_id = Column(
        UUID(as_uuid=True),
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    agenda_item_id = Column(
        UUID(as_uuid=True),
        ForeignKey("agenda_items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    time_slot_minutes = Column(Integer, nullable=False)
    order_index = Column(Integer, nullable=False)

    # Relationships
    meeting = relationship("Meeting", back_populates="agenda_items")
    agenda_item = relationship("AgendaItem")
