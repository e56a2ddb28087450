"""
Dependency injection for the UI pages.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from ..client.api_client import EventsApiClient
from ..client.cache import EventsQueryCache

logger = logging.getLogger(__name__)

_events_cache: Optional[EventsQueryCache] = None


def configure_events_cache(base_url: str, timeout: float = 10.0,
                           max_age: Optional[float] = 30.0) -> EventsQueryCache:
    """Create the process-wide query cache the pages read through."""
    global _events_cache
    _events_cache = EventsQueryCache(EventsApiClient(base_url, timeout=timeout), max_age=max_age)
    logger.info(f"UI client configured for {base_url}")
    return _events_cache


async def close_events_cache():
    global _events_cache
    if _events_cache is not None:
        await _events_cache.client.close()
        _events_cache = None


def get_events_cache() -> EventsQueryCache:
    """
    Get the query cache dependency.

    Raises:
        RuntimeError: If the application has not configured the client
    """
    if _events_cache is None:
        raise RuntimeError("UI client not configured")
    return _events_cache


def get_now() -> datetime:
    """Current time, injected so derived statuses are testable."""
    return datetime.now(timezone.utc)
