"""
Event detail view.
"""

import logging
import math
from datetime import datetime, timezone, tzinfo
from typing import Optional

from pydantic import BaseModel

from ..client.api_client import ApiError
from ..client.cache import EventsQueryCache
from ..schemas.event import EventResponse
from .formatting import (
    format_count, format_currency, format_date_range, format_long_date, format_time,
)
from .status import StatusInfo, status_info

logger = logging.getLogger(__name__)

ESTIMATED_TICKET_PRICE = 45
UNIQUE_ATTENDEE_RATIO = 0.7


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up; negatives clamp to 0."""
    return max(0, math.floor(value + 0.5))


class EventDetailView(BaseModel):
    """Everything the detail page renders."""
    event: Optional[EventResponse] = None
    status: Optional[StatusInfo] = None
    long_date: str = ""
    start_time: str = ""
    date_range: str = ""
    capacity: str = ""
    tickets_sold: int = 0
    estimated_revenue: int = 0
    unique_attendees: int = 0
    error: Optional[str] = None
    not_found: bool = False

    @property
    def tickets_sold_text(self) -> str:
        return format_count(self.tickets_sold)

    @property
    def estimated_revenue_text(self) -> str:
        return format_currency(self.estimated_revenue)

    @property
    def unique_attendees_text(self) -> str:
        return format_count(self.unique_attendees)


def build_detail_view(event: EventResponse, now: datetime,
                      tz: tzinfo = timezone.utc) -> EventDetailView:
    """
    Derive the detail figures for ``event`` at ``now``.

    Tickets sold is maxAttendees; revenue and unique attendees are rough
    estimates from it since no sales data exists.
    """
    tickets_sold = event.max_attendees or 0
    return EventDetailView(
        event=event,
        status=status_info(event, now),
        long_date=format_long_date(event.start_date, tz),
        start_time=format_time(event.start_date, tz),
        date_range=format_date_range(event.start_date, event.end_date, tz),
        capacity=f"{event.max_attendees:,}" if event.max_attendees else "Not set",
        tickets_sold=tickets_sold,
        estimated_revenue=tickets_sold * ESTIMATED_TICKET_PRICE,
        unique_attendees=round_half_up(tickets_sold * UNIQUE_ATTENDEE_RATIO),
    )


async def load_event_detail(cache: EventsQueryCache, event_id: int, now: datetime,
                            tz: tzinfo = timezone.utc, refetch: bool = False) -> EventDetailView:
    """Fetch one event through the cache; API errors become an inline error."""
    try:
        event = await cache.event(event_id, refetch=refetch)
    except ApiError as e:
        logger.warning(f"Failed to load event {event_id}: {e.message}")
        return EventDetailView(error=e.message, not_found=e.is_not_found)
    return build_detail_view(event, now, tz)
