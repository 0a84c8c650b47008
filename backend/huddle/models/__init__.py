from huddle.db.base import Base  # noqa: F401

from .profile import Profile  # noqa: F401
from .agenda_item import AgendaItem, AgendaStatus  # noqa: F401
from .agenda_item_tag import AgendaItemTag  # noqa: F401
from .meeting import Meeting  # noqa: F401
from .meeting_agenda_item import MeetingAgendaItem  # noqa: F401
from .channel import Channel  # noqa: F401
from .chat_message import ChatMessage  # noqa: F401
from .audit_log import AuditLog  # noqa: F401
