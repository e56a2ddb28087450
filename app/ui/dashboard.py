"""
Dashboard list view: stats cards, search, pagination and table rows.
Everything here works on the in-memory events list fetched from the API.
"""

import logging
import math
from datetime import datetime, timezone, tzinfo
from typing import List, Optional, Sequence

from pydantic import BaseModel

from ..client.api_client import ApiError
from ..client.cache import EventsQueryCache
from ..schemas.event import EventResponse
from .formatting import format_count, format_table_datetime
from .status import StatusInfo, status_info

logger = logging.getLogger(__name__)

PAGE_SIZE = 8
MAX_PAGE_BUTTONS = 5


class DashboardStats(BaseModel):
    """Counts shown on the stats cards."""
    total: int = 0
    upcoming: int = 0
    ongoing: int = 0
    cancelled: int = 0


def compute_stats(events: Sequence[EventResponse], now: datetime) -> DashboardStats:
    """
    Count events by state at ``now``.

    Upcoming and ongoing only count active events; completed events have no card.
    """
    upcoming = sum(1 for e in events if e.is_active and e.start_date > now)
    ongoing = sum(1 for e in events if e.is_active and e.start_date <= now <= e.end_date)
    cancelled = sum(1 for e in events if not e.is_active)
    return DashboardStats(
        total=len(events),
        upcoming=upcoming,
        ongoing=ongoing,
        cancelled=cancelled,
    )


def filter_events(events: Sequence[EventResponse], search_term: str) -> List[EventResponse]:
    """Case-insensitive substring match on title, location or category."""
    if not search_term or not search_term.strip():
        return list(events)
    term = search_term.lower()
    return [
        e for e in events
        if term in e.title.lower()
        or term in e.location.lower()
        or term in e.category.lower()
    ]


class Page(BaseModel):
    """One page of a list plus the numbers the pager needs."""
    items: List[EventResponse]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def first_index(self) -> int:
        """1-based index of the first item shown."""
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        return min(self.page * self.page_size, self.total_items)

    @property
    def page_buttons(self) -> List[int]:
        return list(range(1, min(self.total_pages, MAX_PAGE_BUTTONS) + 1))

    @property
    def show_ellipsis(self) -> bool:
        return self.total_pages > MAX_PAGE_BUTTONS

    @property
    def summary(self) -> str:
        return f"Showing {self.first_index}-{self.last_index} of {self.total_items}"


def total_pages_for(count: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(count / page_size))


def paginate(items: Sequence[EventResponse], page: int, page_size: int = PAGE_SIZE) -> Page:
    """Slice out ``page`` (1-based), clamped into the valid range."""
    total_pages = total_pages_for(len(items), page_size)
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=total_pages,
    )


class DashboardState:
    """
    Search term and current page of the dashboard.

    The search form submits only the term, so a new search starts on page 1.
    The page also goes back to 1 when the number of loaded events differs
    from ``known_count``, the size the previous page was rendered from.
    """

    def __init__(self, search_term: str = "", page: int = 1,
                 known_count: Optional[int] = None, page_size: int = PAGE_SIZE):
        self.search_term = search_term
        self.page = max(1, page)
        self.known_count = known_count
        self.page_size = page_size

    def sync_events(self, events: Sequence[EventResponse]) -> None:
        if self.known_count is not None and len(events) != self.known_count:
            self.page = 1
        self.known_count = len(events)


class EventRow(BaseModel):
    """One row of the dashboard table."""
    id: int
    title: str
    initial: str
    when: str
    location: str
    tickets_sold: str
    status: StatusInfo


def build_row(event: EventResponse, now: datetime, tz: tzinfo = timezone.utc) -> EventRow:
    # maxAttendees doubles as tickets sold; there is no separate sales data
    return EventRow(
        id=event.id,
        title=event.title,
        initial=event.title[:1].upper(),
        when=format_table_datetime(event.start_date, tz),
        location=event.location,
        tickets_sold=format_count(event.max_attendees),
        status=status_info(event, now),
    )


class DashboardView(BaseModel):
    """Everything the dashboard page renders."""
    stats: DashboardStats
    rows: List[EventRow] = []
    page: Optional[Page] = None
    search_term: str = ""
    filtered_count: int = 0
    known_count: int = 0
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.error is None and not self.rows


def build_dashboard(events: Sequence[EventResponse], state: DashboardState,
                    now: datetime, tz: tzinfo = timezone.utc) -> DashboardView:
    state.sync_events(events)
    filtered = filter_events(events, state.search_term)
    page = paginate(filtered, state.page, state.page_size)
    state.page = page.page
    return DashboardView(
        stats=compute_stats(events, now),
        rows=[build_row(e, now, tz) for e in page.items],
        page=page,
        search_term=state.search_term,
        filtered_count=len(filtered),
        known_count=len(events),
    )


async def load_dashboard(cache: EventsQueryCache, state: DashboardState, now: datetime,
                         tz: tzinfo = timezone.utc, refetch: bool = False) -> DashboardView:
    """Fetch events through the cache and build the view; API errors become an inline error."""
    try:
        events = await cache.events(refetch=refetch)
    except ApiError as e:
        logger.warning(f"Failed to load events for dashboard: {e.message}")
        return DashboardView(stats=DashboardStats(), search_term=state.search_term, error=e.message)
    return build_dashboard(events, state, now, tz)
