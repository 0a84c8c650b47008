from sqlalchemy import Column, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from huddle.db.base import Base


class AgendaItemTag(Base):
    __tablename__ = "agenda_item_tags"

    agenda_item_id = Column(
        UUID(as_uuid=True), ForeignKey("agenda_items.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), primary_key=True
    )

    agenda_item = relationship("AgendaItem", back_populates="tags")
    profile = relationship("Profile")
