"""
Dependency injection for the Events API.
Provides database sessions and repositories.
"""

from typing import Generator

from fastapi import Depends, Path
from sqlalchemy.orm import Session

from ..db.database import DatabaseConnection, EventRepository

# Global instances
db_connection = DatabaseConnection()


def get_database_session() -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        SQLAlchemy database session
    """
    yield from db_connection.get_session()


def get_event_id(event_id: str = Path(..., pattern=r"^[0-9]+$")) -> int:
    """
    Parse the event ID path parameter.

    Only plain ASCII digits are accepted; signs, separators, decimals and
    whitespace fail validation before int() sees them.
    """
    return int(event_id)


def get_event_repository(session: Session = Depends(get_database_session)) -> EventRepository:
    """
    Get event repository dependency.

    Args:
        session: Database session

    Returns:
        Event repository instance
    """
    return EventRepository(session)
