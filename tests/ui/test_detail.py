"""
Tests for the event detail view.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.client.api_client import ApiError
from app.ui.detail import build_detail_view, load_event_detail, round_half_up

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestBuildDetailView:
    """Test cases for derived detail figures."""

    def test_figures(self, event_factory):
        event = event_factory(
            start_date=datetime(2024, 1, 15, 15, 5, tzinfo=timezone.utc),
            end_date=datetime(2024, 1, 20, 18, 0, tzinfo=timezone.utc),
            max_attendees=100,
        )

        view = build_detail_view(event, NOW)

        assert view.long_date == "Monday, January 15, 2024"
        assert view.start_time == "3:05 PM"
        assert view.date_range == "Jan 15, 2024 - 20"
        assert view.capacity == "100"
        assert view.tickets_sold == 100
        assert view.estimated_revenue == 4500
        assert view.unique_attendees == 70
        assert view.estimated_revenue_text == "$4,500"
        assert view.status.label.value == "Completed"

    def test_no_capacity(self, event_factory):
        view = build_detail_view(event_factory(max_attendees=None), NOW)

        assert view.capacity == "Not set"
        assert view.tickets_sold_text == "—"
        assert view.estimated_revenue_text == "—"

    @pytest.mark.parametrize("capacity,expected", [
        (3, 2),
        (15, 11),
        (35, 25),
        (55, 39),
    ])
    def test_unique_attendees_rounded_half_up(self, event_factory, capacity, expected):
        view = build_detail_view(event_factory(max_attendees=capacity), NOW)

        assert view.unique_attendees == expected

    def test_round_half_up(self):
        assert round_half_up(10.5) == 11
        assert round_half_up(10.49) == 10
        assert round_half_up(0) == 0


class TestLoadEventDetail:
    """Test cases for fetching the detail view."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        cache = MagicMock()
        cache.event = AsyncMock(side_effect=ApiError("Event not found", 404))

        view = await load_event_detail(cache, 9, NOW)

        assert view.event is None
        assert view.not_found
        assert view.error == "Event not found"

    @pytest.mark.asyncio
    async def test_other_error(self):
        cache = MagicMock()
        cache.event = AsyncMock(side_effect=ApiError("Unable to reach the events API"))

        view = await load_event_detail(cache, 9, NOW)

        assert not view.not_found
        assert view.error == "Unable to reach the events API"

    @pytest.mark.asyncio
    async def test_found(self, event_factory):
        cache = MagicMock()
        cache.event = AsyncMock(return_value=event_factory(id=9))

        view = await load_event_detail(cache, 9, NOW, refetch=True)

        assert view.event.id == 9
        cache.event.assert_awaited_once_with(9, refetch=True)
