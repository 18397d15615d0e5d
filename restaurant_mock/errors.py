"""Errors surfaced by the mock API as JSON responses."""

from typing import Any

from restaurant_mock.models import utc_timestamp

# Hint list returned with 404s. GET /api/restaurants is not part of it.
AVAILABLE_ENDPOINTS = [
    "POST /restaurants",
    "POST /restaurants/error",
    "GET /stats",
]


class MockAPIError(Exception):
    """Base class for errors rendered as JSON error responses."""

    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str | None = None, timestamp: str | None = None):
        super().__init__(message or self.error)
        self.message = message
        self.timestamp = timestamp or utc_timestamp()

    def to_content(self) -> dict[str, Any]:
        """Body of the JSON error response."""
        content: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            content["message"] = self.message
        content["timestamp"] = self.timestamp
        return content


class ValidationError(MockAPIError):
    """Required restaurant fields are missing or empty."""

    status_code = 400
    error = "Missing required fields"

    def __init__(self, missing: list[str], timestamp: str | None = None):
        super().__init__(timestamp=timestamp)
        self.missing = missing

    def __str__(self) -> str:
        return f"Missing required fields: {', '.join(self.missing)}"

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error, "missing": self.missing, "timestamp": self.timestamp}


class InvalidPayloadError(MockAPIError):
    """Request body could not be decoded as JSON."""

    status_code = 400
    error = "Invalid JSON payload"


class SimulatedError(MockAPIError):
    """Deliberate failure used to exercise a caller's error handling."""

    status_code = 500
    error = "Simulated server error"

    def __init__(self, timestamp: str | None = None):
        super().__init__("This is a test error for workflow debugging", timestamp)


class InternalError(MockAPIError):
    """Unexpected failure while processing a submission."""

    status_code = 500
    error = "Internal server error"


class NotFoundError(MockAPIError):
    """No route matches the request."""

    status_code = 404
    error = "Endpoint not found"

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error, "available_endpoints": list(AVAILABLE_ENDPOINTS)}
