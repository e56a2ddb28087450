"""
Response envelope helpers and exception handlers for the Events API.
Every response, success or failure, carries the same envelope shape.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException

from ..schemas.event import ErrorResponse, ValidationIssue

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
INVALID_EVENT_ID = "Invalid event ID"
UNEXPECTED_ERROR = "An unexpected error occurred"

_LOCATION_ROOTS = {"body", "path", "query"}


class EventValidationError(Exception):
    """Raised when input breaks a rule only checkable against stored data."""

    def __init__(self, issues: List[ValidationIssue]):
        self.issues = issues
        super().__init__("; ".join(f"{i.path}: {i.message}" for i in issues))


def error_response(error: str, status_code: int = 500,
                   details: Optional[List[ValidationIssue]] = None) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    if message.startswith(prefix):
        return message[len(prefix):]
    return message


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[ValidationIssue]:
    """
    Convert pydantic error dicts into envelope details.

    Location roots such as ``body`` are dropped and snake_case segments are
    converted to the camelCase names clients send.
    """
    issues = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        path = ".".join(to_camel(part) if "_" in part else part for part in loc)
        issues.append(ValidationIssue(path=path, message=_clean_message(error.get("msg", ""))))
    return issues


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP exception handler producing the error envelope."""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return error_response(str(exc.detail), exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request validation failures to 400 with per-field details."""
    errors = exc.errors()
    issues = format_validation_errors(errors)
    if any(error.get("loc", ("",))[0] == "path" for error in errors):
        logger.info(f"Rejected bad path parameter on {request.url.path}")
        return error_response(INVALID_EVENT_ID, status.HTTP_400_BAD_REQUEST, issues)

    logger.info(f"Validation failed on {request.method} {request.url.path}: {len(issues)} issue(s)")
    return error_response(VALIDATION_FAILED, status.HTTP_400_BAD_REQUEST, issues)


async def event_validation_handler(request: Request, exc: EventValidationError) -> JSONResponse:
    """Map cross-record validation failures to 400."""
    logger.info(f"Validation failed on {request.method} {request.url.path}: {exc}")
    return error_response(VALIDATION_FAILED, status.HTTP_400_BAD_REQUEST, exc.issues)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(UNEXPECTED_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every envelope-producing handler to the application."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(EventValidationError, event_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
