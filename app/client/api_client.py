"""
Typed async client for the Events REST API.
Unwraps the response envelope and raises ApiError on failure.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel

from ..schemas.event import EventCreate, EventResponse, EventUpdate

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Something went wrong"

Payload = Union[EventCreate, EventUpdate, Dict[str, Any]]


class ApiError(Exception):
    """An API call that did not produce a success envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def field_errors(self) -> Dict[str, str]:
        """Validation details keyed by field path, first message wins."""
        errors: Dict[str, str] = {}
        for issue in self.details:
            path = issue.get("path") or ""
            if path and path not in errors:
                errors[path] = issue.get("message", "")
        return errors


def _serialize(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return payload


class EventsApiClient:
    """
    Client for the five event endpoints.

    Pass an ``httpx.AsyncClient`` to reuse a connection pool or to route
    requests through a custom transport; otherwise one is created lazily.
    """

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None,
                 timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Content-Type": "application/json"}
            )
        return self._client

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and return the envelope's ``data``.

        Raises:
            ApiError: On transport failure, a non-JSON body, or ``success: false``
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self.http.request(method, url, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {method} {url}: {e}")
            raise ApiError("The events API did not respond in time")
        except httpx.RequestError as e:
            logger.error(f"Connection error calling {method} {url}: {e}")
            raise ApiError("Unable to reach the events API")

        try:
            body = response.json()
        except ValueError:
            logger.error(f"Non-JSON response from {method} {url}: {response.status_code}")
            raise ApiError(DEFAULT_ERROR, response.status_code)

        if not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            details = body.get("details") if isinstance(body, dict) else None
            raise ApiError(error or DEFAULT_ERROR, response.status_code, details)

        return body.get("data")

    async def get_all(self) -> List[EventResponse]:
        """Get all events."""
        data = await self._request("GET", "/events")
        return [EventResponse.model_validate(item) for item in data]

    async def get_by_id(self, event_id: int) -> EventResponse:
        """Get single event by ID."""
        data = await self._request("GET", f"/events/{event_id}")
        return EventResponse.model_validate(data)

    async def create(self, payload: Payload) -> EventResponse:
        """Create new event."""
        data = await self._request("POST", "/events", json=_serialize(payload))
        return EventResponse.model_validate(data)

    async def update(self, event_id: int, payload: Payload) -> EventResponse:
        """Update event."""
        data = await self._request("PUT", f"/events/{event_id}", json=_serialize(payload))
        return EventResponse.model_validate(data)

    async def delete(self, event_id: int) -> int:
        """Delete event, returning the deleted id."""
        data = await self._request("DELETE", f"/events/{event_id}")
        return int(data["id"])

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
