"""
In-process change feed.

Services publish a ChangeEvent after every successful commit; the
/changes/stream endpoint relays matching events to clients as Server-Sent
Events. Delivery is best effort: events are invalidation hints and clients
re-fetch the affected tables instead of applying them as deltas.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import FrozenSet, Iterable, List, Optional

from huddle.core.config import settings
from huddle.schemas.change import ChangeEvent

logger = logging.getLogger(__name__)

WATCHED_TABLES = frozenset(
    {
        "agenda_items",
        "agenda_item_tags",
        "meetings",
        "meeting_agenda_items",
        "channels",
        "messages",
    }
)
# Tables whose events carry the channel they belong to
CHANNEL_SCOPED_TABLES = frozenset({"messages"})
EVENT_KINDS = frozenset({"INSERT", "UPDATE", "DELETE"})
ALL_EVENTS = "*"


@dataclass(eq=False)
class Subscription:
    """A subscriber's filter and its queue, bound to the loop that reads it."""

    tables: FrozenSet[str]
    events: FrozenSet[str]
    queue: asyncio.Queue
    loop: asyncio.AbstractEventLoop
    channel_id: Optional[str] = None
    dropped: int = field(default=0)

    def matches(self, change: ChangeEvent) -> bool:
        if change.table not in self.tables or change.event not in self.events:
            return False
        if self.channel_id is not None and change.table in CHANNEL_SCOPED_TABLES:
            return change.channel_id == self.channel_id
        return True

    def offer(self, change: ChangeEvent) -> None:
        """Enqueue on the subscriber's loop; drop if the subscriber lags behind."""
        try:
            self.queue.put_nowait(change)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.debug(f"Change feed queue full, dropped {change.table}/{change.event}")


class ChangeFeed:
    """
    Publish/subscribe hub for table change events.

    publish() may be called from any thread (sync route handlers run in a
    thread pool); subscribe() must be called from a running event loop.
    """

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscriptions: List[Subscription] = []
        self._lock = Lock()

    def subscribe(
        self,
        tables: Iterable[str],
        events: Iterable[str] = (ALL_EVENTS,),
        channel_id: Optional[object] = None,
    ) -> Subscription:
        """
        Register a subscriber for the given tables and event kinds.

        Args:
            tables: Watched table names
            events: Event kinds, or "*" for all of them
            channel_id: Only pass channel-scoped events (messages) of this
                channel; other tables are unaffected

        Raises:
            ValueError: If a table or event kind is unknown
        """
        table_set = frozenset(tables)
        unknown = table_set - WATCHED_TABLES
        if not table_set or unknown:
            raise ValueError(f"Unknown tables: {', '.join(sorted(unknown)) or '(none given)'}")

        event_set = frozenset(e.upper() for e in events)
        if ALL_EVENTS in event_set:
            event_set = EVENT_KINDS
        elif not event_set or not event_set <= EVENT_KINDS:
            raise ValueError(f"Unknown events: {', '.join(sorted(event_set - EVENT_KINDS))}")

        subscription = Subscription(
            tables=table_set,
            events=event_set,
            queue=asyncio.Queue(maxsize=self.queue_size),
            loop=asyncio.get_running_loop(),
            channel_id=str(channel_id) if channel_id is not None else None,
        )
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"Change feed subscriber added for {sorted(table_set)}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(
        self,
        table: str,
        event: str,
        record_id: Optional[object] = None,
        channel_id: Optional[object] = None,
    ) -> ChangeEvent:
        """Fan a change out to every matching subscriber."""
        change = ChangeEvent(
            table=table,
            event=event,
            record_id=str(record_id) if record_id is not None else None,
            channel_id=str(channel_id) if channel_id is not None else None,
            occurred_at=datetime.now(timezone.utc),
        )
        with self._lock:
            targets = [s for s in self._subscriptions if s.matches(change)]

        for subscription in targets:
            try:
                subscription.loop.call_soon_threadsafe(subscription.offer, change)
            except RuntimeError:
                # The subscriber's event loop is gone
                logger.debug("Removing change feed subscriber with a closed loop")
                self.unsubscribe(subscription)
        return change


change_feed = ChangeFeed(queue_size=settings.CHANGE_FEED_QUEUE_SIZE)
