"""
Event CRUD endpoints.
Every handler answers with the success/error envelope.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...db.database import EventRepository
from ...schemas.event import (
    DeletedEvent, EventCreate, EventResponse, EventUpdate,
    SuccessResponse, ValidationIssue, check_date_order,
)
from ..dependencies import get_event_id, get_event_repository
from ..responses import EventValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])

EVENT_NOT_FOUND = "Event not found"


@router.get("", response_model=SuccessResponse[List[EventResponse]])
async def list_events(event_repo: EventRepository = Depends(get_event_repository)):
    """
    List all events, newest first.

    No pagination or filtering happens here; clients page and search locally.
    """
    try:
        events = event_repo.get_all()
        return SuccessResponse[List[EventResponse]](
            data=[EventResponse.model_validate(event) for event in events]
        )

    except Exception as e:
        logger.error(f"Failed to list events: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list events"
        )


@router.post("", response_model=SuccessResponse[EventResponse], status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Create a new event.

    Args:
        event_data: Validated event payload
        event_repo: Event repository

    Returns:
        Envelope holding the created event
    """
    try:
        event = event_repo.create(event_data.model_dump())
        return SuccessResponse[EventResponse](
            data=EventResponse.model_validate(event),
            message="Event created successfully"
        )

    except Exception as e:
        logger.error(f"Failed to create event: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event"
        )


@router.get("/{event_id}", response_model=SuccessResponse[EventResponse])
async def get_event(
    event_id: int = Depends(get_event_id),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """Get event by ID."""
    try:
        event = event_repo.get_by_id(event_id)
        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=EVENT_NOT_FOUND
            )

        return SuccessResponse[EventResponse](data=EventResponse.model_validate(event))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to get event {event_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get event"
        )


@router.put("/{event_id}", response_model=SuccessResponse[EventResponse])
async def update_event(
    event_data: EventUpdate,
    event_id: int = Depends(get_event_id),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Partially update an event.

    Only fields present in the body are written. The date order rule is
    checked against the stored record when just one of the dates changes.

    Raises:
        HTTPException: If event not found or update fails
        EventValidationError: If the merged dates are out of order
    """
    try:
        existing_event = event_repo.get_by_id(event_id)
        if not existing_event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=EVENT_NOT_FOUND
            )

        update_data = event_data.model_dump(exclude_unset=True)
        if "start_date" in update_data or "end_date" in update_data:
            try:
                check_date_order(
                    update_data.get("start_date", existing_event.start_date),
                    update_data.get("end_date", existing_event.end_date),
                )
            except ValueError as e:
                raise EventValidationError([ValidationIssue(path="endDate", message=str(e))])

        updated_event = event_repo.update(event_id, update_data)
        if not updated_event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=EVENT_NOT_FOUND
            )

        return SuccessResponse[EventResponse](
            data=EventResponse.model_validate(updated_event),
            message="Event updated successfully"
        )

    except (HTTPException, EventValidationError):
        raise
    except Exception as e:
        logger.error(f"Failed to update event {event_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update event"
        )


@router.delete("/{event_id}", response_model=SuccessResponse[DeletedEvent])
async def delete_event(
    event_id: int = Depends(get_event_id),
    event_repo: EventRepository = Depends(get_event_repository)
):
    """Hard-delete an event."""
    try:
        deleted = event_repo.delete(event_id)
        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=EVENT_NOT_FOUND
            )

        return SuccessResponse[DeletedEvent](
            data=DeletedEvent(id=event_id),
            message="Event deleted successfully"
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete event {event_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete event"
        )
