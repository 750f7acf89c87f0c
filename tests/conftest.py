"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.audit import AuditWindow  # noqa: E402
from models.events import CalendarEventRecord, ClassifiedEvent, Tier, Vertical  # noqa: E402

WEEK_START = date(2025, 11, 3)  # Monday


@pytest.fixture
def week_window():
    """Monday-Sunday audit window (weekly multiplier 1.0)."""
    return AuditWindow(WEEK_START, WEEK_START + timedelta(days=6))


@pytest.fixture
def two_week_window():
    return AuditWindow(WEEK_START, WEEK_START + timedelta(days=13))


@pytest.fixture
def make_record():
    """Factory for timed CalendarEventRecords on the audit week."""

    def _make(event_id, title="Untitled", day=0, start_hour=9.0, hours=1.0, **kwargs):
        start = datetime.combine(WEEK_START + timedelta(days=day), datetime.min.time())
        start += timedelta(hours=start_hour)
        end = start + timedelta(hours=hours)
        fields = {
            "start": start,
            "end": end,
            "duration_minutes": hours * 60,
            "event_date": start.date(),
        }
        fields.update(kwargs)
        return CalendarEventRecord(id=event_id, title=title, **fields)

    return _make


@pytest.fixture
def make_event(make_record):
    """Factory for already-classified events with an explicit tier."""

    def _make(
        event_id,
        tier,
        vertical=Vertical.BUSINESS,
        title=None,
        day=0,
        start_hour=9.0,
        hours=1.0,
        is_leave=False,
        **record_fields,
    ):
        if tier == Tier.EA:
            vertical = Vertical.UNIVERSAL
        record = make_record(event_id, title or event_id, day, start_hour, hours, **record_fields)
        return ClassifiedEvent(
            record=record,
            tier=tier,
            vertical=vertical,
            business_area="Operations",
            suggested_tier=None if is_leave else tier,
            is_leave=is_leave,
        )

    return _make


@pytest.fixture
def sample_payload():
    """Provider event payload for testing."""
    return {
        "id": "evt-1",
        "title": "Code review for payments service",
        "description": "Review the refund flow changes",
        "start": "2025-11-03T14:00:00Z",
        "end": "2025-11-03T15:30:00Z",
        "isAllDay": False,
        "attendees": [{"email": "a@example.com"}, {"email": "b@example.com"}],
        "isRecurring": True,
    }


@pytest.fixture
def sample_payloads():
    """A small founder week: one event per tier plus an all-day vacation."""
    return [
        {
            "id": "board",
            "title": "Board meeting with investors",
            "start": "2025-11-03T09:00:00Z",
            "end": "2025-11-03T11:00:00Z",
        },
        {
            "id": "review",
            "title": "Code review for payments service",
            "start": "2025-11-03T11:00:00Z",
            "end": "2025-11-03T12:00:00Z",
        },
        {
            "id": "sync",
            "title": "Weekly status sync",
            "start": "2025-11-03T13:00:00Z",
            "end": "2025-11-03T14:00:00Z",
            "attendees": 3,
        },
        {
            "id": "travel",
            "title": "Expense receipts and travel booking",
            "start": "2025-11-03T14:00:00Z",
            "end": "2025-11-03T15:00:00Z",
        },
        {
            "id": "vacation",
            "title": "Vacation",
            "start": "2025-11-07",
            "end": "2025-11-08",
            "isAllDay": True,
        },
    ]


@pytest.fixture
def generated_payloads():
    """Two weeks of Faker-generated calendar payloads (seeded)."""
    from fixtures.generate_events import generate_calendar

    return generate_calendar(WEEK_START, days=14, seed=42)
