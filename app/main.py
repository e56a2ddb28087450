"""
Main FastAPI application for the Events Manager.
Handles application startup, middleware, and routing.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.api.dependencies import db_connection, get_event_repository
from app.api.responses import register_exception_handlers
from app.api.v1.router import router as api_router
from app.core.config import config
from app.core.logging import setup_logging
from app.db.database import EventRepository
from app.ui.dependencies import close_events_cache, configure_events_cache
from app.ui.pages import router as ui_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    setup_logging(await config.get_log_level(), "events")
    logger.info("Starting Events Manager...")

    try:
        db_connection.initialize(await config.get_database_url())
        db_connection.create_tables()

        configure_events_cache(
            await config.get_api_base_url(),
            timeout=await config.get_http_timeout()
        )

        logger.info("Events Manager started successfully")

    except Exception as e:
        logger.error(f"Failed to start Events Manager: {e}")
        raise

    yield

    logger.info("Shutting down Events Manager...")
    try:
        await close_events_cache()
        db_connection.close()
        logger.info("Events Manager shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


# Create FastAPI application
app = FastAPI(
    title="Events Manager",
    description="Create, browse, edit and delete events",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add request processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


register_exception_handlers(app)

app.include_router(api_router)
app.include_router(ui_router)


# Root endpoint
@app.get("/")
async def root():
    """Send browsers to the dashboard."""
    return RedirectResponse("/ui")


@app.get("/health")
async def health_check(event_repo: EventRepository = Depends(get_event_repository)):
    """Health check endpoint with the stored event count."""
    database_ok = db_connection.health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": "events",
        "database": database_ok,
        "events": event_repo.count() if database_ok else None
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
