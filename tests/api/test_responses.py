"""
Tests for envelope helpers and validation error formatting.
"""

import json

from app.api.responses import error_response, format_validation_errors
from app.schemas.event import ValidationIssue


class TestFormatValidationErrors:
    """Test cases for converting pydantic errors into details."""

    def test_body_root_dropped(self):
        issues = format_validation_errors([
            {"loc": ("body", "endDate"), "msg": "Value error, End date must be after start date"},
        ])

        assert issues == [ValidationIssue(path="endDate", message="End date must be after start date")]

    def test_snake_case_segments_camelized(self):
        issues = format_validation_errors([
            {"loc": ("body", "max_attendees"), "msg": "Input should be greater than 0"},
        ])

        assert issues[0].path == "maxAttendees"
        assert issues[0].message == "Input should be greater than 0"

    def test_path_parameter(self):
        issues = format_validation_errors([
            {"loc": ("path", "event_id"), "msg": "Input should be a valid integer"},
        ])

        assert issues[0].path == "eventId"

    def test_nested_location(self):
        issues = format_validation_errors([{"loc": ("body", 0, "title"), "msg": "Field required"}])

        assert issues[0].path == "0.title"


class TestErrorResponse:
    """Test cases for the error envelope builder."""

    def test_error_without_details(self):
        response = error_response("Event not found", 404)

        assert response.status_code == 404
        assert json.loads(response.body) == {
            "success": False,
            "error": "Event not found",
            "details": None,
        }

    def test_error_with_details(self):
        response = error_response(
            "Validation failed", 400,
            [ValidationIssue(path="title", message="Field required")]
        )

        assert json.loads(response.body)["details"] == [{"path": "title", "message": "Field required"}]
