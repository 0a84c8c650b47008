"""
Change feed endpoint (Server-Sent Events).

Clients subscribe once per set of tables and re-fetch whenever an event
arrives. Events carry no row data.
"""
import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from huddle.core.config import settings
from huddle.core.deps import get_stream_user, parse_uuid
from huddle.core.exceptions import BadRequestError
from huddle.models.profile import Profile
from huddle.services.change_feed import change_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/changes", tags=["changes"])


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


@router.get("/stream")
async def stream_changes(
    request: Request,
    tables: str = Query(..., description="Comma separated table names"),
    events: str = Query("*", description="INSERT, UPDATE, DELETE or *"),
    channel_id: Optional[str] = Query(None, description="Only messages of this channel"),
    current_user: Profile = Depends(get_stream_user),
):
    """
    Stream change events for the requested tables.

    Returns a stream of `event: <kind>` / `data: <json>` frames with a
    keep-alive comment when idle. The stream holds no database connection.
    """
    channel_uuid = parse_uuid(channel_id, "channel ID") if channel_id else None
    try:
        subscription = change_feed.subscribe(_split(tables), _split(events), channel_uuid)
    except ValueError as e:
        raise BadRequestError(str(e))

    user_id = current_user.id
    logger.info(f"Change stream opened by {user_id} for {sorted(subscription.tables)}")

    async def event_generator():
        try:
            while not await request.is_disconnected():
                try:
                    change = await asyncio.wait_for(
                        subscription.queue.get(),
                        timeout=settings.CHANGE_FEED_KEEPALIVE_SECONDS,
                    )
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield f"event: {change.event}\ndata: {change.model_dump_json()}\n\n"
        finally:
            change_feed.unsubscribe(subscription)
            logger.info(f"Change stream closed for {user_id}")

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
