"""
Query cache in front of EventsApiClient.
Reads are served from memory; mutations discard the entries they affect.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..schemas.event import EventResponse
from .api_client import EventsApiClient, Payload

logger = logging.getLogger(__name__)

CacheKey = Tuple[Any, ...]

EVENTS_KEY: CacheKey = ("events",)


def event_key(event_id: int) -> CacheKey:
    """Cache key of a single event."""
    return ("events", event_id)


class EventsQueryCache:
    """
    Caches the events list and single events fetched through the client.

    Invalidation after mutations:
        create -> events list
        update -> events list and that event
        delete -> events list and that event

    Args:
        client: API client doing the actual fetching
        max_age: Seconds an entry stays fresh; None keeps it until invalidated
        clock: Monotonic time source
    """

    def __init__(self, client: EventsApiClient, max_age: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.client = client
        self.max_age = max_age
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, Any]] = {}

    def _lookup(self, key: CacheKey) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self.max_age is not None and self._clock() - stored_at > self.max_age:
            del self._entries[key]
            return None
        return value

    def _store(self, key: CacheKey, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def contains(self, key: CacheKey) -> bool:
        return self._lookup(key) is not None

    def invalidate(self, *keys: CacheKey) -> None:
        """Discard the given entries so the next read refetches them."""
        for key in keys:
            if self._entries.pop(key, None) is not None:
                logger.debug(f"Invalidated cache entry {key}")

    def clear(self) -> None:
        self._entries.clear()

    async def events(self, refetch: bool = False) -> List[EventResponse]:
        """All events, from cache when fresh."""
        cached = None if refetch else self._lookup(EVENTS_KEY)
        if cached is not None:
            return cached
        events = await self.client.get_all()
        self._store(EVENTS_KEY, events)
        return events

    async def event(self, event_id: int, refetch: bool = False) -> EventResponse:
        """A single event, from cache when fresh."""
        key = event_key(event_id)
        cached = None if refetch else self._lookup(key)
        if cached is not None:
            return cached
        event = await self.client.get_by_id(event_id)
        self._store(key, event)
        return event

    async def create_event(self, payload: Payload) -> EventResponse:
        event = await self.client.create(payload)
        self.invalidate(EVENTS_KEY)
        return event

    async def update_event(self, event_id: int, payload: Payload) -> EventResponse:
        event = await self.client.update(event_id, payload)
        self.invalidate(EVENTS_KEY, event_key(event_id))
        return event

    async def delete_event(self, event_id: int) -> int:
        deleted_id = await self.client.delete(event_id)
        self.invalidate(EVENTS_KEY, event_key(event_id))
        return deleted_id
