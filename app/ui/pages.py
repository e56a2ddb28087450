"""
Browser UI pages: dashboard, detail, create/edit forms and delete confirmation.
Pages read and write events only through the API client.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..client.api_client import ApiError
from ..client.cache import EventsQueryCache
from .dashboard import DashboardState, load_dashboard
from .detail import load_event_detail
from .dependencies import get_events_cache, get_now
from .forms import EVENT_CATEGORIES, EventFormData, submit_form
from .templates import (
    render_confirm_delete, render_dashboard, render_detail, render_form, render_not_found,
)

logger = logging.getLogger(__name__)

UI_BASE = "/ui"

router = APIRouter(prefix=UI_BASE, tags=["UI"], include_in_schema=False)


@router.get("", response_class=HTMLResponse)
async def dashboard_page(
    q: str = "",
    page: int = 1,
    n: Optional[int] = None,
    refresh: bool = False,
    cache: EventsQueryCache = Depends(get_events_cache),
    now: datetime = Depends(get_now)
):
    """
    Dashboard with stats, search and pagination.

    ``n`` is the list size the previous page was rendered from; a different
    size now sends the user back to page 1.
    """
    state = DashboardState(search_term=q, page=page, known_count=n)
    view = await load_dashboard(cache, state, now, refetch=refresh)
    return HTMLResponse(render_dashboard(view, UI_BASE))


@router.get("/events/create", response_class=HTMLResponse)
async def create_event_page():
    return HTMLResponse(render_form(
        EventFormData(), {}, f"{UI_BASE}/events/create", EVENT_CATEGORIES,
        cancel_href=UI_BASE,
    ))


@router.post("/events/create", response_class=HTMLResponse)
async def create_event_submit(
    request: Request,
    cache: EventsQueryCache = Depends(get_events_cache)
):
    form = EventFormData.from_form(await request.form())
    result = await submit_form(cache, form, base_path=UI_BASE)
    if result.ok:
        return RedirectResponse(result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    return HTMLResponse(
        render_form(form, result.errors, f"{UI_BASE}/events/create", EVENT_CATEGORIES,
                    error_message=result.error_message, cancel_href=UI_BASE),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@router.get("/events/{event_id}", response_class=HTMLResponse)
async def event_detail_page(
    event_id: int,
    refresh: bool = False,
    cache: EventsQueryCache = Depends(get_events_cache),
    now: datetime = Depends(get_now)
):
    view = await load_event_detail(cache, event_id, now, refetch=refresh)
    status_code = status.HTTP_404_NOT_FOUND if view.not_found else status.HTTP_200_OK
    return HTMLResponse(render_detail(view, UI_BASE), status_code=status_code)


@router.get("/events/{event_id}/edit", response_class=HTMLResponse)
async def edit_event_page(
    event_id: int,
    cache: EventsQueryCache = Depends(get_events_cache),
    now: datetime = Depends(get_now)
):
    view = await load_event_detail(cache, event_id, now)
    if view.event is None:
        status_code = status.HTTP_404_NOT_FOUND if view.not_found else status.HTTP_200_OK
        return HTMLResponse(render_detail(view, UI_BASE), status_code=status_code)

    return HTMLResponse(render_form(
        EventFormData.from_event(view.event), {}, f"{UI_BASE}/events/{event_id}/edit",
        EVENT_CATEGORIES, editing=True, cancel_href=f"{UI_BASE}/events/{event_id}",
    ))


@router.post("/events/{event_id}/edit", response_class=HTMLResponse)
async def edit_event_submit(
    event_id: int,
    request: Request,
    cache: EventsQueryCache = Depends(get_events_cache)
):
    form = EventFormData.from_form(await request.form())
    result = await submit_form(cache, form, event_id=event_id, base_path=UI_BASE)
    if result.ok:
        return RedirectResponse(result.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    return HTMLResponse(
        render_form(form, result.errors, f"{UI_BASE}/events/{event_id}/edit", EVENT_CATEGORIES,
                    editing=True, error_message=result.error_message,
                    cancel_href=f"{UI_BASE}/events/{event_id}"),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@router.get("/events/{event_id}/delete", response_class=HTMLResponse)
async def confirm_delete_page(
    event_id: int,
    cache: EventsQueryCache = Depends(get_events_cache),
    now: datetime = Depends(get_now)
):
    view = await load_event_detail(cache, event_id, now)
    if view.event is None:
        status_code = status.HTTP_404_NOT_FOUND if view.not_found else status.HTTP_200_OK
        return HTMLResponse(render_detail(view, UI_BASE), status_code=status_code)
    return HTMLResponse(render_confirm_delete(view.event, UI_BASE))


@router.post("/events/{event_id}/delete", response_class=HTMLResponse)
async def delete_event_submit(
    event_id: int,
    cache: EventsQueryCache = Depends(get_events_cache),
    now: datetime = Depends(get_now)
):
    try:
        await cache.delete_event(event_id)
    except ApiError as e:
        logger.warning(f"Failed to delete event {event_id}: {e.message}")
        if e.is_not_found:
            return HTMLResponse(render_not_found(UI_BASE), status_code=status.HTTP_404_NOT_FOUND)
        view = await load_event_detail(cache, event_id, now)
        if view.event is None:
            return HTMLResponse(render_detail(view, UI_BASE))
        return HTMLResponse(
            render_confirm_delete(view.event, UI_BASE, error_message=e.message),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    return RedirectResponse(UI_BASE, status_code=status.HTTP_303_SEE_OTHER)
