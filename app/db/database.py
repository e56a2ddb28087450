"""
Database connection and session management for the Events Manager.
"""

import logging
from datetime import timedelta
from typing import Generator, List, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..core.logging import log_event_change
from ..models.event import Base, Event, utc_now

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Database connection manager.
    Handles engine creation and session management.
    """

    def __init__(self):
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, database_url: str):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL
        """
        try:
            if database_url.startswith("sqlite"):
                self.engine = create_engine(
                    database_url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                    echo=False
                )
            else:
                self.engine = create_engine(
                    database_url,
                    pool_pre_ping=True,
                    pool_recycle=300,
                    echo=False
                )

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self.engine
            )

            self._initialized = True
            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session.

        Yields:
            SQLAlchemy database session
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self):
        """Create all database tables."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {e}")
            raise

    def health_check(self) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        if not self._initialized:
            return False

        try:
            session = self.SessionLocal()
            try:
                session.execute(text("SELECT 1"))
                return True
            finally:
                session.close()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def close(self):
        """Dispose of the engine and its pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self._initialized = False


class EventRepository:
    """
    Repository for Event model operations.
    Each method is a single statement followed by a commit.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(self, event_data: dict) -> Event:
        """Insert a new event, stamping both timestamps."""
        now = utc_now()
        event = Event(**event_data)
        event.created_at = now
        event.updated_at = now
        self.session.add(event)
        self.session.commit()
        self.session.refresh(event)
        log_event_change("created", event.id)
        return event

    def get_by_id(self, event_id: int) -> Optional[Event]:
        """Get event by ID."""
        return self.session.get(Event, event_id)

    def get_all(self) -> List[Event]:
        """Get all events, newest first."""
        return (
            self.session.query(Event)
            .order_by(Event.created_at.desc(), Event.id.desc())
            .all()
        )

    def update(self, event_id: int, event_data: dict) -> Optional[Event]:
        """Apply the given fields and restamp updated_at."""
        event = self.get_by_id(event_id)
        if event is None:
            return None

        for key, value in event_data.items():
            if hasattr(event, key):
                setattr(event, key, value)

        # updated_at must move forward even within one clock tick
        stamp = utc_now()
        if event.updated_at is not None and stamp <= event.updated_at:
            stamp = event.updated_at + timedelta(microseconds=1)
        event.updated_at = stamp

        self.session.commit()
        self.session.refresh(event)
        log_event_change("updated", event_id, event_data)
        return event

    def delete(self, event_id: int) -> bool:
        """Delete an event; False when no row matched."""
        event = self.get_by_id(event_id)
        if event is None:
            return False
        self.session.delete(event)
        self.session.commit()
        log_event_change("deleted", event_id)
        return True

    def count(self) -> int:
        """Count stored events."""
        return self.session.query(Event).count()
