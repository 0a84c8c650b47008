"""AgendaItem model for topics proposed for upcoming meetings."""
import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from huddle.db.base import Base, utcnow


class AgendaStatus:
    """Lifecycle states of an agenda item."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    # No operation produces this state yet
    COMPLETED = "completed"

    ALL = (PENDING, SCHEDULED, COMPLETED)


class AgendaItem(Base):
    """
    A discussion topic submitted by a team member.

    Items start out pending and become scheduled when attached to a meeting.
    The row stays here after attachment; MeetingAgendaItem only references it.
    """

    __tablename__ = "agenda_items"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'scheduled', 'completed')",
            name="ck_agenda_items_status",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=AgendaStatus.PENDING, index=True)
    submitted_by = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    # Relationships
    submitter = relationship("Profile")
    tags = relationship(
        "AgendaItemTag",
        back_populates="agenda_item",
        cascade="all, delete-orphan",
    )
