"""Tests for provider payload parsing."""

from datetime import date, datetime, timezone

import pytest

from core.config import ALL_DAY_EVENT_HOURS
from services.calendar import parse_date, parse_event, parse_events, parse_timestamp


def test_parse_timed_event(sample_payload):
    record = parse_event(sample_payload)

    assert record.id == "evt-1"
    assert record.title == "Code review for payments service"
    assert record.start == datetime(2025, 11, 3, 14, tzinfo=timezone.utc)
    assert record.duration_minutes == pytest.approx(90)
    assert record.attendee_count == 2
    assert record.is_recurring
    assert record.event_date == date(2025, 11, 3)
    assert not record.is_all_day


def test_parse_all_day_event_uses_exclusive_end():
    record = parse_event({
        "id": "conf",
        "summary": "Conference",
        "isAllDay": True,
        "start": "2025-11-04",
        "end": "2025-11-06",
    })

    assert record.title == "Conference"
    assert record.start is None
    assert record.event_date == date(2025, 11, 4)
    assert record.day_count == 2
    assert record.duration_minutes == pytest.approx(2 * ALL_DAY_EVENT_HOURS * 60)


def test_parse_snake_case_payload():
    record = parse_event({
        "id": 7,
        "title": "Standup",
        "start_timestamp": "2025-11-03T09:00:00",
        "end_timestamp": "2025-11-03T09:15:00",
        "attendee_count": 4,
        "event_type": "default",
    })

    assert record.id == "7"
    assert record.duration_minutes == pytest.approx(15)
    assert record.attendee_count == 4
    assert record.event_type == "default"


def test_missing_timestamps_keep_reported_duration():
    record = parse_event({"id": "x", "title": "Follow-ups", "durationMinutes": 45})

    assert record.start is None
    assert record.end is None
    assert record.duration_minutes == 45


@pytest.mark.parametrize("minutes", [float("nan"), float("inf"), "NaN"])
def test_non_finite_duration_is_zero(minutes):
    record = parse_event({"id": "x", "title": "Follow-ups", "durationMinutes": minutes})

    assert record.duration_minutes == 0.0


def test_end_before_start_has_zero_duration():
    record = parse_event({
        "id": "x",
        "title": "Broken",
        "start": "2025-11-03T10:00:00Z",
        "end": "2025-11-03T09:00:00Z",
    })

    assert record.duration_minutes == 0.0


def test_parse_events_assigns_ids_and_applies_exclusions():
    records = parse_events(
        [{"title": "Lunch"}, {"title": "Gym session"}, {"id": "keep", "title": "Planning"}],
        exclusions=["GYM"],
    )

    assert [r.id for r in records] == ["event-0", "keep"]


@pytest.mark.parametrize("value", [None, "", "2025-11-03", "not a dateTtime", 42])
def test_parse_timestamp_rejects_non_timestamps(value):
    assert parse_timestamp(value) is None


def test_parse_date():
    assert parse_date("2025-11-03T09:00:00Z") == date(2025, 11, 3)
    assert parse_date(datetime(2025, 11, 3, 9)) == date(2025, 11, 3)
    assert parse_date("garbage") is None
