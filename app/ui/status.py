"""
Derived event status.
Status is recomputed from the current time on every read and never stored.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class EventStatus(str, Enum):
    """Display status of an event."""
    UPCOMING = "Upcoming"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class StatusInfo(BaseModel):
    """Status label with its badge styling."""
    label: EventStatus
    color_class: str
    dot_class: str


STATUS_STYLES = {
    EventStatus.CANCELLED: ("status-cancelled", "dot-rose"),
    EventStatus.ONGOING: ("status-ongoing", "dot-sky"),
    EventStatus.COMPLETED: ("status-completed", "dot-slate"),
    EventStatus.UPCOMING: ("status-upcoming", "dot-emerald"),
}


def derive_status(start_date: datetime, end_date: datetime, is_active: bool,
                  now: datetime) -> EventStatus:
    """
    Compute the status of an event at ``now``.

    Cancellation wins over the time window; the window is inclusive at both ends.
    """
    if not is_active:
        return EventStatus.CANCELLED
    if start_date <= now <= end_date:
        return EventStatus.ONGOING
    if end_date < now:
        return EventStatus.COMPLETED
    return EventStatus.UPCOMING


def status_info(event, now: datetime) -> StatusInfo:
    """Status and badge styling for anything with the event date fields."""
    label = derive_status(event.start_date, event.end_date, event.is_active, now)
    color_class, dot_class = STATUS_STYLES[label]
    return StatusInfo(label=label, color_class=color_class, dot_class=dot_class)
