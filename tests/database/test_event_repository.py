"""
Tests for EventRepository CRUD operations.
"""

from datetime import datetime, timedelta

import pytest

from app.db.database import DatabaseConnection, EventRepository
from app.models.event import Event


class TestEventRepositoryCRUD:
    """Test cases for create, read, update and delete."""

    def test_create_stamps_timestamps(self, event_repo):
        """Test create sets created_at and updated_at to the same instant."""
        event = event_repo.create({
            "title": "Repo Event",
            "description": "Created through the repository",
            "location": "Hall A",
            "start_date": datetime(2030, 3, 1, 9, 0),
            "end_date": datetime(2030, 3, 1, 17, 0),
            "category": "Workshop",
        })

        assert event.id is not None
        assert event.created_at == event.updated_at
        assert event.is_active is True

    def test_get_by_id(self, event_repo, make_event):
        created = make_event(title="Findable")

        found = event_repo.get_by_id(created.id)

        assert found is not None
        assert found.title == "Findable"

    def test_get_by_id_missing(self, event_repo):
        assert event_repo.get_by_id(9999) is None

    def test_get_all_newest_first(self, event_repo, make_event):
        """Test listing is ordered by creation time, newest first."""
        first = make_event(title="First")
        second = make_event(title="Second")
        third = make_event(title="Third")

        events = event_repo.get_all()

        assert [e.id for e in events] == [third.id, second.id, first.id]

    def test_get_all_empty(self, event_repo):
        assert event_repo.get_all() == []

    def test_update_partial(self, event_repo, make_event):
        """Test update writes only the given fields."""
        event = make_event(title="Before", location="Old Place")

        updated = event_repo.update(event.id, {"title": "After"})

        assert updated.title == "After"
        assert updated.location == "Old Place"

    def test_update_advances_updated_at(self, event_repo, make_event):
        """Test updated_at strictly increases and created_at stays put."""
        event = make_event()
        created_at = event.created_at
        previous = event.updated_at

        updated = event_repo.update(event.id, {"category": "Meetup"})

        assert updated.updated_at > previous
        assert updated.created_at == created_at

    def test_update_missing(self, event_repo):
        assert event_repo.update(9999, {"title": "Nope"}) is None

    def test_delete(self, event_repo, make_event):
        event = make_event()

        assert event_repo.delete(event.id) is True
        assert event_repo.get_by_id(event.id) is None

    def test_delete_missing(self, event_repo):
        assert event_repo.delete(9999) is False

    def test_count(self, event_repo, make_event):
        make_event()
        make_event()

        assert event_repo.count() == 2

    def test_mutations_write_audit_log(self, event_repo, make_event, caplog):
        """Test each mutation logs to the audit logger."""
        with caplog.at_level("INFO", logger="events.audit"):
            event = make_event()
            event_repo.update(event.id, {"title": "Audited"})
            event_repo.delete(event.id)

        messages = [r.getMessage() for r in caplog.records if r.name == "events.audit"]
        assert any(m.startswith("Event created") for m in messages)
        assert any(m.startswith("Event updated") and "'title'" in m for m in messages)
        assert any(m.startswith("Event deleted") for m in messages)


class TestDatabaseConnection:
    """Test cases for the connection manager."""

    def test_session_before_initialize(self):
        connection = DatabaseConnection()

        with pytest.raises(RuntimeError):
            next(connection.get_session())

    def test_health_check_uninitialized(self):
        assert DatabaseConnection().health_check() is False

    def test_initialize_sqlite(self):
        """Test an in-memory database can be created and queried."""
        connection = DatabaseConnection()
        connection.initialize("sqlite://")
        connection.create_tables()

        assert connection.is_initialized
        assert connection.health_check() is True

        session = next(connection.get_session())
        try:
            repo = EventRepository(session)
            repo.create({
                "title": "Own DB",
                "description": "Stored in a private engine",
                "location": "Nowhere",
                "start_date": datetime(2030, 1, 1),
                "end_date": datetime(2030, 1, 1) + timedelta(hours=1),
                "category": "Other",
            })
            assert session.query(Event).count() == 1
        finally:
            session.close()

        connection.close()
        assert connection.is_initialized is False
