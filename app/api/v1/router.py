"""
API router for the Events Manager.
"""

from fastapi import APIRouter

from .events import router as events_router

router = APIRouter(prefix="/api")

# Include sub-routers
router.include_router(events_router)
