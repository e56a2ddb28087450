"""
Create/edit event form.
Client-side validation mirrors the API rules so most mistakes never leave the page.
"""

import logging
from datetime import timezone, tzinfo
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel

from ..client.api_client import ApiError
from ..client.cache import EventsQueryCache
from ..schemas.event import EventResponse, is_valid_url
from .formatting import datetime_local_to_iso, format_datetime_local, parse_datetime_local

logger = logging.getLogger(__name__)

EVENT_CATEGORIES = [
    "Conference",
    "Workshop",
    "Meetup",
    "Webinar",
    "Concert",
    "Festival",
    "Sports",
    "Networking",
    "Other",
]

def category_options(current: str, categories: List[str] = EVENT_CATEGORIES) -> List[str]:
    """Selectable categories; a stored category outside the fixed list is kept as an option."""
    if current and current not in categories:
        return categories + [current]
    return list(categories)


# Form field name -> API field path
FIELD_PATHS = {
    "title": "title",
    "description": "description",
    "location": "location",
    "start_date": "startDate",
    "end_date": "endDate",
    "category": "category",
    "max_attendees": "maxAttendees",
    "image_url": "imageUrl",
    "is_active": "isActive",
}


class EventFormData(BaseModel):
    """Raw form values, as strings the way the browser posts them."""
    title: str = ""
    description: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    category: str = ""
    max_attendees: str = ""
    image_url: str = ""
    is_active: bool = True

    @classmethod
    def from_event(cls, event: EventResponse, tz: tzinfo = timezone.utc) -> "EventFormData":
        """Prefill the edit form from a stored event."""
        return cls(
            title=event.title,
            description=event.description,
            location=event.location,
            start_date=format_datetime_local(event.start_date, tz),
            end_date=format_datetime_local(event.end_date, tz),
            category=event.category,
            max_attendees=str(event.max_attendees) if event.max_attendees else "",
            image_url=event.image_url or "",
            is_active=event.is_active,
        )

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "EventFormData":
        """Read a posted HTML form; an unchecked checkbox is simply absent."""
        values = {
            field: str(form.get(field, "") or "")
            for field in FIELD_PATHS
            if field != "is_active"
        }
        values["is_active"] = str(form.get("is_active", "")).lower() in ("on", "true", "1")
        return cls(**values)


def validate_form(data: EventFormData, tz: tzinfo = timezone.utc) -> Dict[str, str]:
    """
    Check the form, returning a message per failing field (empty when valid).
    """
    errors: Dict[str, str] = {}

    if not data.title.strip():
        errors["title"] = "Title is required"
    elif len(data.title.strip()) < 3:
        errors["title"] = "Title must be at least 3 characters"

    if not data.description.strip():
        errors["description"] = "Description is required"
    elif len(data.description.strip()) < 10:
        errors["description"] = "Description must be at least 10 characters"

    if not data.location.strip():
        errors["location"] = "Location is required"

    if not data.start_date:
        errors["start_date"] = "Start date is required"

    if not data.end_date:
        errors["end_date"] = "End date is required"

    if data.start_date and data.end_date:
        try:
            start = parse_datetime_local(data.start_date, tz)
            end = parse_datetime_local(data.end_date, tz)
        except ValueError:
            errors["end_date"] = "Please enter valid dates"
        else:
            if end <= start:
                errors["end_date"] = "End date must be after start date"

    if not data.category:
        errors["category"] = "Category is required"

    if data.max_attendees.strip():
        try:
            if int(data.max_attendees) < 1:
                errors["max_attendees"] = "Max attendees must be at least 1"
        except ValueError:
            errors["max_attendees"] = "Max attendees must be at least 1"

    if data.image_url.strip() and not is_valid_url(data.image_url.strip()):
        errors["image_url"] = "Please enter a valid URL"

    return errors


def to_payload(data: EventFormData, tz: tzinfo = timezone.utc) -> Dict[str, Any]:
    """Build the camelCase API body from a validated form."""
    return {
        "title": data.title.strip(),
        "description": data.description.strip(),
        "location": data.location.strip(),
        "startDate": datetime_local_to_iso(data.start_date, tz),
        "endDate": datetime_local_to_iso(data.end_date, tz),
        "category": data.category,
        "maxAttendees": int(data.max_attendees) if data.max_attendees.strip() else None,
        "imageUrl": data.image_url.strip() or None,
        "isActive": data.is_active,
    }


class FormResult(BaseModel):
    """Outcome of a form submission."""
    redirect_to: Optional[str] = None
    errors: Dict[str, str] = {}
    error_message: Optional[str] = None
    event: Optional[EventResponse] = None

    @property
    def ok(self) -> bool:
        return self.redirect_to is not None


_PATH_FIELDS = {path: field for field, path in FIELD_PATHS.items()}


async def submit_form(cache: EventsQueryCache, data: EventFormData,
                      event_id: Optional[int] = None, tz: tzinfo = timezone.utc,
                      base_path: str = "/ui") -> FormResult:
    """
    Validate and send the form; create when ``event_id`` is None, else update.

    Success redirects to the dashboard after a create and to the detail page
    after an edit. Server-side validation details are mapped back onto fields.
    """
    errors = validate_form(data, tz)
    if errors:
        return FormResult(errors=errors)

    payload = to_payload(data, tz)
    try:
        if event_id is None:
            event = await cache.create_event(payload)
            return FormResult(redirect_to=base_path, event=event)
        event = await cache.update_event(event_id, payload)
        return FormResult(redirect_to=f"{base_path}/events/{event_id}", event=event)
    except ApiError as e:
        logger.warning(f"Form submission failed: {e.message}")
        field_errors = {
            _PATH_FIELDS[path]: message
            for path, message in e.field_errors.items()
            if path in _PATH_FIELDS
        }
        return FormResult(errors=field_errors, error_message=e.message)
