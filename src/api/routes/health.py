"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.models.responses import HealthResponse
from core.config import ALL_DAY_EVENT_HOURS, API_VERSION, DB_PATH, MAX_EVENTS_PER_REQUEST

router = APIRouter()


def _health(request_log_available: bool, error: str | None = None) -> HealthResponse:
    return HealthResponse(
        status="healthy" if request_log_available else "unhealthy",
        version=API_VERSION,
        request_log_available=request_log_available,
        max_events_per_request=MAX_EVENTS_PER_REQUEST,
        all_day_event_hours=ALL_DAY_EVENT_HOURS,
        timestamp=datetime.now(timezone.utc).isoformat(),
        error=error,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring.

    Audits still run without the request-log database, but nothing gets
    recorded, so the service reports 503 until scripts/init_db.py is run.
    """
    if DB_PATH.exists():
        return _health(True)

    return JSONResponse(
        status_code=503,
        content=_health(False, "Request log database not found (run scripts/init_db.py)").model_dump(),
    )
