"""
Fixtures for the UI tests.
"""

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from app.schemas.event import EventResponse


@pytest.fixture
def event_factory():
    """Build EventResponse objects without touching the API."""
    ids = count(1)

    def _build(**overrides):
        start = overrides.pop("start_date", datetime(2024, 6, 20, 18, 0, tzinfo=timezone.utc))
        values = {
            "id": next(ids),
            "title": "Sample Event",
            "description": "A sample event for the dashboard",
            "location": "Main Hall",
            "start_date": start,
            "end_date": overrides.pop("end_date", start + timedelta(hours=2)),
            "category": "Conference",
            "max_attendees": 100,
            "image_url": None,
            "is_active": True,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return EventResponse(**values)

    return _build
