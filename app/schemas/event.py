"""
Pydantic schemas for Event-related operations.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, TypeVar
from pydantic import (
    AnyUrl, BaseModel, Field, TypeAdapter, ValidationError,
    ValidationInfo, field_validator,
)
from pydantic.alias_generators import to_camel

_URL_ADAPTER = TypeAdapter(AnyUrl)

DataT = TypeVar("DataT")


def parse_iso_datetime(value: Any, label: str) -> datetime:
    """
    Parse an ISO-8601 datetime string into a naive UTC datetime.

    Naive inputs are taken to be UTC already. A time component is required.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        if not isinstance(value, str) or "T" not in value:
            raise ValueError(f"Invalid {label} date format")
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid {label} date format")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def is_valid_url(value: str) -> bool:
    """True when value parses as an absolute URL."""
    try:
        _URL_ADAPTER.validate_python(value)
        return True
    except ValidationError:
        return False


def check_date_order(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    """Raise ValueError unless end_date is strictly after start_date."""
    if start_date is not None and end_date is not None and end_date <= start_date:
        raise ValueError("End date must be after start date")


class CamelModel(BaseModel):
    """Base schema speaking camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class EventFields(CamelModel):
    """Shared validators for create and update payloads."""

    @field_validator("start_date", mode="before", check_fields=False)
    @classmethod
    def validate_start_date(cls, v):
        if v is None:
            return v
        return parse_iso_datetime(v, "start")

    @field_validator("end_date", mode="before", check_fields=False)
    @classmethod
    def validate_end_date_format(cls, v):
        if v is None:
            return v
        return parse_iso_datetime(v, "end")

    @field_validator("end_date", check_fields=False)
    @classmethod
    def validate_end_after_start(cls, v, info: ValidationInfo):
        check_date_order(info.data.get("start_date"), v)
        return v

    @field_validator("image_url", check_fields=False)
    @classmethod
    def validate_image_url(cls, v):
        if v is not None and not is_valid_url(v):
            raise ValueError("Invalid image URL")
        return v


class EventCreate(EventFields):
    """Schema for creating a new event."""
    title: str = Field(..., min_length=3, max_length=255, description="Event title")
    description: str = Field(..., min_length=10, description="Event description")
    location: str = Field(..., min_length=3, max_length=255, description="Event location")
    start_date: datetime = Field(..., description="Start as an ISO-8601 datetime")
    end_date: datetime = Field(..., description="End as an ISO-8601 datetime, after start")
    category: str = Field(..., min_length=1, max_length=100, description="Event category")
    max_attendees: Optional[int] = Field(None, gt=0, strict=True, description="Capacity")
    image_url: Optional[str] = Field(None, max_length=500, description="Cover image URL")
    is_active: bool = Field(True, strict=True, description="False marks the event cancelled")


class EventUpdate(EventFields):
    """Schema for updating an event. Every field is optional."""
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, min_length=10)
    location: Optional[str] = Field(None, min_length=3, max_length=255)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    max_attendees: Optional[int] = Field(None, gt=0, strict=True)
    image_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = Field(None, strict=True)

    @field_validator(
        "title", "description", "location", "start_date", "end_date",
        "category", "is_active",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class EventResponse(CamelModel):
    """Schema for event response."""
    id: int
    title: str
    description: str
    location: str
    start_date: datetime
    end_date: datetime
    category: str
    max_attendees: Optional[int] = None
    image_url: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("start_date", "end_date", "created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class DeletedEvent(BaseModel):
    """Payload returned after a delete."""
    id: int


class ValidationIssue(BaseModel):
    """One failed validation rule, addressed by camelCase field path."""
    path: str
    message: str


class SuccessResponse(BaseModel, Generic[DataT]):
    """Success envelope."""
    success: bool = True
    data: DataT
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error envelope."""
    success: bool = False
    error: str
    details: Optional[List[ValidationIssue]] = None
