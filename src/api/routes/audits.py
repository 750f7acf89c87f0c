"""Audit and role editing endpoints."""

import asyncio
import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import verify_api_key
from api.logging import RequestLog, log_request
from api.models.audits import (
    AuditRequest,
    AuditResponse,
    EventResult,
    PlanningResult,
    RoleModel,
    RoleMoveRequest,
    RoleReorderRequest,
    RolesResponse,
)
from api.models.responses import ErrorCodes
from core.config import MAX_EVENTS_PER_REQUEST
from core.validation import is_solo_founder, normalize_salary_mode, normalize_tier, normalize_vertical
from models.audit import AuditWindow, CompensationProfile, RoleRecommendation, RoleTask, TierRates
from services.audit import AuditResult, run_audit
from services.metrics import founder_hourly_rate, tier_percentages
from services.planning import calculate_event_planning_score, planning_score_label
from services.role_mutation import move_task, reorder_roles
from services.roles import calculate_total_savings

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _bad_request(error: str, details: list[str] | None = None, code: str = ErrorCodes.INVALID_REQUEST) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": error, "code": code, "details": details or []},
    )


def _validation_error(error: str, message: str) -> HTTPException:
    details = [line.strip() for line in message.split("\n") if line.strip()]
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"error": error, "code": ErrorCodes.VALIDATION_ERROR, "details": details},
    )


def _record_http_error(request_log: RequestLog, exc: HTTPException):
    request_log.status_code = exc.status_code
    if isinstance(exc.detail, dict):
        request_log.error_code = exc.detail.get("code")
        request_log.error_message = exc.detail.get("error")
        for detail in exc.detail.get("details", []):
            request_log.details.append(("validation_error", detail))
    else:
        request_log.error_message = str(exc.detail)


def _finish(request_log: RequestLog, start_time: float):
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)
    try:
        log_request(request_log)
    except Exception:
        # Don't fail the request if logging fails
        pass


# =============================================================================
# CONVERSIONS
# =============================================================================


def _tier_rates(rates: dict | None) -> TierRates:
    if rates is None:
        return TierRates.defaults()
    try:
        return TierRates.from_mapping(rates)
    except ValueError as e:
        raise ValueError(f"Unknown tier rate key: {e}") from e


def _window(body: AuditRequest) -> AuditWindow:
    if body.end_date < body.start_date:
        raise _bad_request(
            "end_date is before start_date",
            [f"start_date={body.start_date}, end_date={body.end_date}"],
        )
    try:
        ZoneInfo(body.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise _bad_request("Unknown timezone", [f"Received: {body.timezone}"])
    return AuditWindow(body.start_date, body.end_date, body.timezone)


def _compensation(body: AuditRequest) -> CompensationProfile:
    return CompensationProfile.from_salary_input(
        body.salary,
        normalize_salary_mode(body.salary_mode),
        equity_percentage=body.equity_percentage,
        company_valuation=body.company_valuation,
        vesting_period_years=body.vesting_period_years,
        tier_rates=_tier_rates(body.tier_rates),
    )


def role_to_model(role: RoleRecommendation) -> RoleModel:
    return RoleModel(**role.to_dict())


def role_from_model(model: RoleModel) -> RoleRecommendation:
    """Raises ValueError for an unknown tier or vertical."""
    tier = normalize_tier(model.tier)
    vertical = normalize_vertical(model.vertical)
    if tier is None:
        raise ValueError(f"Role '{model.id}' has unknown tier '{model.tier}'")
    if vertical is None:
        raise ValueError(f"Role '{model.id}' has unknown vertical '{model.vertical}'")
    return RoleRecommendation(
        id=model.id,
        role_title=model.role_title,
        tier=tier,
        vertical=vertical,
        hours_per_week=model.hours_per_week,
        cost_monthly=model.cost_monthly,
        tasks=tuple(RoleTask(t.label, t.hours_per_week) for t in model.tasks),
        jd_text=model.jd_text,
    )


def audit_response(result: AuditResult) -> AuditResponse:
    events = [
        EventResult(
            id=event.id,
            title=event.title,
            tier=None if event.is_leave else event.tier.value,
            suggested_tier=event.suggested_tier.value if event.suggested_tier else None,
            vertical=None if event.is_leave else event.vertical.value,
            business_area=event.business_area,
            confidence=event.confidence.value,
            is_leave=event.is_leave,
            leave_detection_method=event.leave_detection_method,
            reconciled=event.reconciled,
            overridden=event.overridden,
            planning_score=calculate_event_planning_score(event.record),
            issues=list(event.issues),
        )
        for event in result.events
    ]

    planning = None
    if result.planning is not None:
        planning = PlanningResult(
            score=result.planning.score,
            label=planning_score_label(result.planning.score),
            components=result.planning.components,
            assessment=result.planning.assessment,
        )

    percentages = tier_percentages(result.metrics.hours_by_tier)
    return AuditResponse(
        metrics=result.metrics.to_dict(),
        tier_percentages={tier.value: pct for tier, pct in percentages.items()},
        roles=[role_to_model(role) for role in result.roles],
        events=events,
        planning=planning,
        total_savings=calculate_total_savings(result.roles, founder_hourly_rate(result.compensation)),
    )


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post("/audits", response_model=AuditResponse)
async def create_audit(
    request: Request,
    body: AuditRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Run a delegation audit over calendar events.

    Returns metrics, role recommendations and the per-event classification
    so the client can review and send overrides back in a follow-up call.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/audits",
        method="POST",
        client_ip=get_client_ip(request),
        event_count=len(body.events),
    )

    try:
        if len(body.events) > MAX_EVENTS_PER_REQUEST:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail={
                    "error": f"Too many events (maximum {MAX_EVENTS_PER_REQUEST})",
                    "code": ErrorCodes.TOO_MANY_EVENTS,
                    "details": [f"Received: {len(body.events)}"],
                },
            )

        window = _window(body)
        request_log.window_days = window.day_count
        compensation = _compensation(body)
        solo_founder = (
            body.solo_founder if body.solo_founder is not None else is_solo_founder(body.team_composition)
        )

        # Use thread pool for classification and overlap resolution
        result = await asyncio.to_thread(
            run_audit,
            body.events,
            window,
            compensation,
            solo_founder,
            body.exclusions,
            [override.model_dump() for override in body.overrides],
        )

        request_log.status_code = 200
        request_log.roles_generated = len(result.roles)
        request_log.total_hours = result.metrics.total_hours
        for event in result.events:
            for issue in event.issues:
                request_log.details.append(("event_issue", f"{event.id}: {issue}"))

        return audit_response(result)

    except HTTPException as e:
        _record_http_error(request_log, e)
        raise

    except ValueError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        raise _validation_error("Audit input validation failed", str(e))

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        _finish(request_log, start_time)


@router.post("/roles/move", response_model=RolesResponse)
async def move_role_task(
    request: Request,
    body: RoleMoveRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Move one task between roles and return the recalculated role list.

    Unknown role ids or an out-of-range task index leave the list unchanged.
    """
    start_time = time.time()
    request_log = RequestLog(endpoint="/v1/roles/move", method="POST", client_ip=get_client_ip(request))

    try:
        roles = [role_from_model(model) for model in body.roles]
        tier_rates = _tier_rates(body.tier_rates)
        moved = move_task(roles, body.source_role_id, body.target_role_id, body.task_index, tier_rates)

        request_log.status_code = 200
        request_log.roles_generated = len(moved)
        return RolesResponse(roles=[role_to_model(role) for role in moved])

    except ValueError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        raise _validation_error("Role validation failed", str(e))

    finally:
        _finish(request_log, start_time)


@router.post("/roles/reorder", response_model=RolesResponse)
async def reorder_role_list(
    request: Request,
    body: RoleReorderRequest,
    _api_key: str = Depends(verify_api_key),
):
    """Swap two roles' positions. Out-of-range indexes leave the list unchanged."""
    start_time = time.time()
    request_log = RequestLog(endpoint="/v1/roles/reorder", method="POST", client_ip=get_client_ip(request))

    try:
        roles = [role_from_model(model) for model in body.roles]
        reordered = reorder_roles(roles, body.from_index, body.to_index)

        request_log.status_code = 200
        request_log.roles_generated = len(reordered)
        return RolesResponse(roles=[role_to_model(role) for role in reordered])

    except ValueError as e:
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = str(e)
        raise _validation_error("Role validation failed", str(e))

    finally:
        _finish(request_log, start_time)
