"""
Audit metrics: efficiency score, reclaimable hours and delegation arbitrage.

Missing financial inputs null only the figure that needs them. Nothing
returned from here is ever NaN or infinite; results go straight to users.
"""

import math

from core.config import WEEKS_PER_YEAR, WORKING_HOURS_PER_YEAR
from models.audit import AuditMetrics, AuditWindow, CompensationProfile, TierHours, TierRates
from models.events import DELEGABLE_TIERS, Tier, Vertical


def _finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def efficiency_score(tier_hours: TierHours) -> int:
    """Share of analyzed time on UNIQUE+FOUNDER work, as an int in [0, 100]."""
    total = tier_hours.total
    if total <= 0:
        return 0
    score = round_half_up(100 * tier_hours.high_value / total)
    return max(0, min(100, score))


def reclaimable_hours_per_week(tier_hours: TierHours, window: AuditWindow) -> float:
    return tier_hours.delegable * window.weekly_multiplier


def founder_hourly_rate(compensation: CompensationProfile) -> float | None:
    """
    Salary (plus vested equity per year, when known) over a 2080h year.

    None only when the salary is unknown; a $0 salary is a real rate of 0.
    """
    salary = compensation.salary_annual
    if salary is None:
        return None
    annual_cost = max(salary, 0.0) + (compensation.annual_equity_value or 0.0)
    return _finite(annual_cost / WORKING_HOURS_PER_YEAR)


def founder_cost_total(
    tier_hours: TierHours, compensation: CompensationProfile, window: AuditWindow
) -> float | None:
    """Annual cost of the founder doing the delegable work personally."""
    hourly = founder_hourly_rate(compensation)
    if hourly is None:
        return None
    annual_hours = reclaimable_hours_per_week(tier_hours, window) * WEEKS_PER_YEAR
    return _finite(hourly * annual_hours)


def _delegable_hours_by_vertical(tier_hours: TierHours) -> dict[tuple[Tier, Vertical], float]:
    """
    Split each delegable tier's hours by vertical.

    Hours not accounted for in the per-vertical breakdown are treated as
    UNIVERSAL so they are priced at the blended rate.
    """
    split: dict[tuple[Tier, Vertical], float] = {}
    for tier in DELEGABLE_TIERS:
        known = 0.0
        for (t, vertical), hours in tier_hours.by_vertical.items():
            if t == tier and hours > 0:
                split[(t, vertical)] = split.get((t, vertical), 0.0) + hours
                known += hours
        remainder = tier_hours.get(tier) - known
        if remainder > 1e-9:
            split[(tier, Vertical.UNIVERSAL)] = split.get((tier, Vertical.UNIVERSAL), 0.0) + remainder
    return split


def delegated_cost_total(
    tier_hours: TierHours, tier_rates: TierRates, window: AuditWindow
) -> float | None:
    """
    Annual cost of paying delegates for the same hours.

    Weekly-projected hours are annualized (x52) and priced at each tier's
    annual rate over a 2080h year. Any delegable hours without a configured
    rate make the whole figure unknown.
    """
    total = 0.0
    for (tier, vertical), hours in _delegable_hours_by_vertical(tier_hours).items():
        rate = tier_rates.annual_rate(tier, vertical)
        if rate is None:
            return None
        annual_hours = hours * window.weekly_multiplier * WEEKS_PER_YEAR
        total += annual_hours * rate / WORKING_HOURS_PER_YEAR
    return _finite(total)


def compute(
    tier_hours: TierHours,
    compensation: CompensationProfile,
    window: AuditWindow,
    planning_score: int | None = None,
    leave_hours_excluded: float = 0.0,
    leave_days_detected: int = 0,
) -> AuditMetrics:
    """
    Derive a fresh metrics snapshot.

    planning_score comes from the calendar-hygiene collaborator and is passed
    through untouched.
    """
    founder_cost = founder_cost_total(tier_hours, compensation, window)
    delegated_cost = delegated_cost_total(tier_hours, compensation.tier_rates, window)

    arbitrage = None
    if founder_cost is not None and delegated_cost is not None:
        arbitrage = _finite(founder_cost - delegated_cost)

    return AuditMetrics(
        total_hours=tier_hours.total,
        hours_by_tier={tier: tier_hours.get(tier) for tier in Tier},
        efficiency_score=efficiency_score(tier_hours),
        reclaimable_hours=tier_hours.delegable,
        reclaimable_hours_per_week=reclaimable_hours_per_week(tier_hours, window),
        founder_cost_total=founder_cost,
        delegated_cost_total=delegated_cost,
        arbitrage=arbitrage,
        day_count=window.day_count,
        planning_score=planning_score,
        leave_hours_excluded=leave_hours_excluded,
        leave_days_detected=leave_days_detected,
    )


def tier_percentages(hours_by_tier: dict[Tier, float]) -> dict[Tier, int]:
    """Rounded percentage of total time per tier (all 0 for an empty audit)."""
    total = sum(hours_by_tier.values())
    if total <= 0:
        return {tier: 0 for tier in Tier}
    return {tier: round_half_up(100 * hours_by_tier.get(tier, 0.0) / total) for tier in Tier}
