"""End-to-end tests for audit orchestration."""

import pytest

from core.config import ALL_DAY_EVENT_HOURS
from models.audit import CompensationProfile
from models.events import Tier
from services.audit import apply_overrides, recalculate, run_audit


@pytest.fixture
def compensation():
    return CompensationProfile(salary_annual=208_000)


def test_run_audit(sample_payloads, week_window, compensation):
    result = run_audit(sample_payloads, week_window, compensation)
    metrics = result.metrics

    assert metrics.total_hours == pytest.approx(5.0)
    assert metrics.hours_by_tier[Tier.UNIQUE] == pytest.approx(2.0)
    assert metrics.hours_by_tier[Tier.SENIOR] == pytest.approx(1.0)
    assert metrics.hours_by_tier[Tier.JUNIOR] == pytest.approx(1.0)
    assert metrics.hours_by_tier[Tier.EA] == pytest.approx(1.0)
    assert metrics.efficiency_score == 40
    assert metrics.reclaimable_hours_per_week == pytest.approx(3.0)

    # 3h/week * 52 * $100/h
    assert metrics.founder_cost_total == pytest.approx(15_600)
    # senior eng $2,500 + junior biz $1,250 + EA $750
    assert metrics.delegated_cost_total == pytest.approx(4_500)
    assert metrics.arbitrage == pytest.approx(11_100)

    assert metrics.leave_days_detected == 1
    assert metrics.leave_hours_excluded == pytest.approx(ALL_DAY_EVENT_HOURS)
    assert metrics.planning_score == result.planning.score

    # equal hours, so ordered by id
    assert [role.id for role in result.roles] == ["ea", "junior-business", "senior-engineering"]


def test_run_audit_without_salary(sample_payloads, week_window):
    metrics = run_audit(sample_payloads, week_window).metrics

    assert metrics.founder_cost_total is None
    assert metrics.arbitrage is None
    assert metrics.delegated_cost_total == pytest.approx(4_500)


def test_exclusions_drop_events(sample_payloads, week_window):
    result = run_audit(sample_payloads, week_window, exclusions=["board"])

    assert result.metrics.total_hours == pytest.approx(3.0)
    assert "board" not in [event.id for event in result.events]


def test_solo_founder_audit_has_no_founder_hours(week_window):
    payloads = [
        {
            "id": "offsite",
            "title": "Leadership offsite planning",
            "start": "2025-11-04T09:00:00Z",
            "end": "2025-11-04T12:00:00Z",
        }
    ]

    assert run_audit(payloads, week_window).metrics.hours_by_tier[Tier.FOUNDER] == pytest.approx(3.0)

    solo = run_audit(payloads, week_window, solo_founder=True)

    assert solo.metrics.hours_by_tier[Tier.FOUNDER] == 0.0
    assert solo.metrics.hours_by_tier[Tier.UNIQUE] == pytest.approx(3.0)


def test_overrides_are_applied(sample_payloads, week_window):
    result = run_audit(
        sample_payloads,
        week_window,
        overrides=[{"event_id": "sync", "tier": "senior"}, {"event_id": "vacation", "is_leave": False}],
    )

    sync = next(e for e in result.events if e.id == "sync")
    assert sync.tier == Tier.SENIOR
    assert sync.overridden
    assert result.metrics.hours_by_tier[Tier.JUNIOR] == 0.0
    assert result.metrics.leave_days_detected == 0
    assert "senior-business" in [role.id for role in result.roles]


def test_unknown_overrides_are_skipped(sample_payloads, week_window):
    baseline = run_audit(sample_payloads, week_window)

    result = run_audit(
        sample_payloads,
        week_window,
        overrides=[{"event_id": "missing", "tier": "EA"}, {"event_id": "sync", "tier": "CEO"}],
    )

    assert result.metrics == baseline.metrics


def test_apply_overrides_keeps_order(sample_payloads, week_window):
    events = run_audit(sample_payloads, week_window).events

    updated = apply_overrides(events, [{"event_id": "review", "tier": "JUNIOR"}])

    assert [e.id for e in updated] == [e.id for e in events]
    assert updated[1].tier == Tier.JUNIOR


def test_recalculate_matches_fresh_run(generated_payloads, two_week_window, compensation):
    result = run_audit(generated_payloads, two_week_window, compensation)

    again = recalculate(result.events, two_week_window, compensation, result.planning)

    assert again.metrics == result.metrics
    assert again.roles == result.roles


def test_audit_is_idempotent(generated_payloads, two_week_window, compensation):
    first = run_audit(generated_payloads, two_week_window, compensation)
    second = run_audit(generated_payloads, two_week_window, compensation)

    assert first.metrics == second.metrics
    assert first.roles == second.roles


def test_generated_calendar_invariants(generated_payloads, two_week_window, compensation):
    result = run_audit(generated_payloads, two_week_window, compensation)
    metrics = result.metrics

    assert metrics.total_hours <= two_week_window.span_hours
    assert 0 <= metrics.efficiency_score <= 100
    assert sum(role.hours_per_week for role in result.roles) <= metrics.reclaimable_hours_per_week + 1e-6
    assert all(event.suggested_tier is None for event in result.events if event.is_leave)


def test_empty_audit(week_window, compensation):
    result = run_audit([], week_window, compensation)

    assert result.metrics.total_hours == 0.0
    assert result.metrics.efficiency_score == 0
    assert result.roles == []
    assert result.planning.score == 0
