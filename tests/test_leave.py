"""Tests for leave detection and leave statistics."""

from datetime import date

import pytest

from core.config import ALL_DAY_EVENT_HOURS
from models.events import CalendarEventRecord, ClassifiedEvent, Confidence, Tier, Vertical
from services.leave import detect_leave, leave_days_detected, leave_hours_excluded


@pytest.mark.parametrize(
    "title,description,is_all_day,event_type,method,confidence",
    [
        ("Busy", "", False, "outOfOffice", "provider_event_type", Confidence.HIGH),
        ("PTO", "", True, None, "keyword_title", Confidence.HIGH),
        ("Annual leave", "", True, None, "keyword_title", Confidence.HIGH),
        ("OOO afternoon", "", False, None, "keyword_ooo", Confidence.HIGH),
        ("Doctor appointment", "", False, None, "keyword_medical", Confidence.HIGH),
        ("Bereavement", "", True, None, "keyword_match", Confidence.MEDIUM),
        ("Friday", "Taking a personal day", True, None, "keyword_match", Confidence.MEDIUM),
        ("Flight to Berlin", "", True, None, "pattern_travel", Confidence.LOW),
        ("Blocked", "", True, None, "pattern_blocked", Confidence.LOW),
    ],
)
def test_leave_signals(title, description, is_all_day, event_type, method, confidence):
    result = detect_leave(title, description, is_all_day, event_type)

    assert result.is_leave
    assert result.method == method
    assert result.confidence == confidence


@pytest.mark.parametrize(
    "title,is_all_day",
    [
        ("Flight to Berlin", False),  # travel patterns only apply to all-day events
        ("Product sync", False),
        ("Company offsite", True),
        ("", False),
    ],
)
def test_not_leave(title, is_all_day):
    result = detect_leave(title, None, is_all_day)

    assert not result.is_leave
    assert result.method == "none"


def _leave(event_id, event_date, is_all_day=False, day_count=1, minutes=60.0, is_leave=True):
    record = CalendarEventRecord(
        id=event_id,
        title="Vacation",
        is_all_day=is_all_day,
        event_date=event_date,
        day_count=day_count,
        duration_minutes=minutes,
    )
    return ClassifiedEvent(record, Tier.SENIOR, Vertical.UNIVERSAL, "Leave", is_leave=is_leave)


def test_leave_statistics():
    events = [
        _leave("trip", date(2025, 11, 6), is_all_day=True, day_count=2, minutes=2 * ALL_DAY_EVENT_HOURS * 60),
        _leave("dentist", date(2025, 11, 3)),
        _leave("same-day", date(2025, 11, 6)),
        _leave("work", date(2025, 11, 4), is_leave=False),
    ]

    assert leave_days_detected(events) == 3
    assert leave_hours_excluded(events) == pytest.approx(2 * ALL_DAY_EVENT_HOURS + 2)


def test_leave_statistics_empty():
    assert leave_days_detected([]) == 0
    assert leave_hours_excluded([]) == 0.0
