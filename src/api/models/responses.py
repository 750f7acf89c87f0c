"""Pydantic response models shared across endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Service status plus the limits a client should respect."""

    status: str  # "healthy" or "unhealthy"
    version: str
    request_log_available: bool
    max_events_per_request: int
    all_day_event_hours: float
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response, nested under FastAPI's "detail" key."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    INVALID_REQUEST = "INVALID_REQUEST"  # bad dates or timezone
    UNAUTHORIZED = "UNAUTHORIZED"
    TOO_MANY_EVENTS = "TOO_MANY_EVENTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"  # unknown tier, vertical or rate key
    INTERNAL_ERROR = "INTERNAL_ERROR"
