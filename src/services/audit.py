"""
Audit orchestration.

Every run is a full pass over the event list: parse, classify, validate,
aggregate, compute metrics and cluster roles. Nothing is patched in place,
so a recalculation after user overrides returns the same result a fresh run
over the edited events would.
"""

import logging
from dataclasses import dataclass, field

from core.validation import normalize_tier, normalize_vertical, validate_events
from models.audit import AuditMetrics, AuditWindow, CompensationProfile, RoleRecommendation, TierHours
from models.events import ClassifiedEvent
from services.aggregator import aggregate
from services.calendar import parse_events
from services.classifier import apply_override, classify_events
from services.leave import leave_days_detected, leave_hours_excluded
from services.metrics import compute
from services.planning import PlanningScore, calculate_planning_score
from services.roles import generate_role_recommendations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditResult:
    window: AuditWindow
    compensation: CompensationProfile
    events: list[ClassifiedEvent]
    tier_hours: TierHours
    metrics: AuditMetrics
    roles: list[RoleRecommendation] = field(default_factory=list)
    planning: PlanningScore | None = None

    @property
    def issue_count(self) -> int:
        return sum(1 for event in self.events if event.issues)


def recalculate(
    events: list[ClassifiedEvent],
    window: AuditWindow,
    compensation: CompensationProfile | None = None,
    planning: PlanningScore | None = None,
) -> AuditResult:
    """Recompute hours, metrics and roles from already-classified events."""
    compensation = compensation or CompensationProfile()
    tier_hours = aggregate(events, window)
    metrics = compute(
        tier_hours,
        compensation,
        window,
        planning_score=planning.score if planning else None,
        leave_hours_excluded=leave_hours_excluded(events),
        leave_days_detected=leave_days_detected(events),
    )
    roles = generate_role_recommendations(events, window, compensation.tier_rates)
    return AuditResult(
        window=window,
        compensation=compensation,
        events=events,
        tier_hours=tier_hours,
        metrics=metrics,
        roles=roles,
        planning=planning,
    )


def apply_overrides(
    events: list[ClassifiedEvent], overrides: list[dict], solo_founder: bool = False
) -> list[ClassifiedEvent]:
    """
    Apply user edits, each {"event_id", "tier"?, "vertical"?, "is_leave"?}.

    Overrides naming an unknown event or an unknown tier/vertical are skipped
    with a warning.
    """
    by_id = {override.get("event_id"): override for override in overrides}
    updated = []
    for event in events:
        override = by_id.pop(event.id, None)
        if override is None:
            updated.append(event)
            continue

        tier = normalize_tier(override.get("tier"))
        vertical = normalize_vertical(override.get("vertical"))
        if override.get("tier") is not None and tier is None:
            logger.warning("Ignoring unknown tier %r for event %s", override["tier"], event.id)
        if override.get("vertical") is not None and vertical is None:
            logger.warning("Ignoring unknown vertical %r for event %s", override["vertical"], event.id)

        updated.append(
            apply_override(
                event,
                tier=tier,
                vertical=vertical,
                is_leave=override.get("is_leave"),
                reconciled=override.get("reconciled"),
                solo_founder=solo_founder,
            )
        )

    for event_id in by_id:
        logger.warning("Override for unknown event %s skipped", event_id)
    return updated


def run_audit(
    raw_events: list[dict],
    window: AuditWindow,
    compensation: CompensationProfile | None = None,
    solo_founder: bool = False,
    exclusions: list[str] | None = None,
    overrides: list[dict] | None = None,
) -> AuditResult:
    """
    Run a complete audit over provider event payloads.

    Args:
        raw_events: Event payloads as fetched from the calendar provider
        window: Inclusive date range the events were fetched for
        compensation: Founder salary/equity and delegate rates
        solo_founder: Collapse FOUNDER work into UNIQUE
        exclusions: Title substrings to drop before classification
        overrides: User tier/vertical/leave edits to apply after classification

    Returns:
        AuditResult with classified events, metrics and role recommendations
    """
    records = parse_events(raw_events, exclusions)
    events = validate_events(classify_events(records, solo_founder))
    if overrides:
        events = apply_overrides(events, overrides, solo_founder)

    planning = calculate_planning_score(records, window.day_count)
    result = recalculate(events, window, compensation, planning)

    logger.info(
        "Audit %s..%s: %d event(s), %.1fh analyzed, efficiency %d%%, %d role(s)",
        window.start_date,
        window.end_date,
        len(events),
        result.metrics.total_hours,
        result.metrics.efficiency_score,
        len(result.roles),
    )
    if result.issue_count:
        logger.warning("%d event(s) have data issues", result.issue_count)
    return result
