"""
Calendar event parsing.

Converts provider event payloads (already fetched by the calendar
integration) into CalendarEventRecord objects.
"""

import logging
import math
from dataclasses import replace
from datetime import date, datetime

from core.config import ALL_DAY_EVENT_HOURS
from models.events import CalendarEventRecord

logger = logging.getLogger(__name__)


def _field(raw: dict, *names, default=None):
    """First present key among camelCase/snake_case spellings."""
    for name in names:
        if name in raw and raw[name] is not None:
            return raw[name]
    return default


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO 8601 timestamp. Date-only or bad values return None."""
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str) or "T" not in value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_event(raw: dict) -> CalendarEventRecord:
    """
    Parse a provider event payload into our format.

    All-day events carry date-only start/end (end exclusive) and are credited
    ALL_DAY_EVENT_HOURS per covered day. Timed events take their duration from
    the timestamps; when those are missing or unparseable the payload's
    durationMinutes (if any) is kept instead.
    """
    title = _field(raw, "title", "summary", default="") or ""
    description = _field(raw, "description", default="") or ""
    is_all_day = bool(_field(raw, "isAllDay", "is_all_day", default=False))

    attendees = _field(raw, "attendees", "attendeeCount", "attendee_count", default=0)
    if isinstance(attendees, (list, tuple)):
        attendees = len(attendees)
    try:
        attendee_count = max(int(attendees), 0)
    except (TypeError, ValueError):
        attendee_count = 0

    try:
        reported_minutes = float(_field(raw, "durationMinutes", "duration_minutes", default=0))
    except (TypeError, ValueError):
        reported_minutes = 0.0
    if not math.isfinite(reported_minutes):
        reported_minutes = 0.0

    raw_start = _field(raw, "start", "startAt", "start_timestamp")
    raw_end = _field(raw, "end", "endAt", "end_timestamp")

    start_ts = None
    end_ts = None
    day_count = 1

    if is_all_day:
        event_date = parse_date(raw_start)
        end_date = parse_date(raw_end)
        if event_date and end_date and end_date > event_date:
            day_count = (end_date - event_date).days
        duration_minutes = day_count * ALL_DAY_EVENT_HOURS * 60
    else:
        start_ts = parse_timestamp(raw_start)
        end_ts = parse_timestamp(raw_end)
        event_date = start_ts.date() if start_ts else parse_date(raw_start)
        duration_minutes = reported_minutes
        if start_ts and end_ts:
            try:
                duration_minutes = max((end_ts - start_ts).total_seconds() / 60, 0.0)
            except TypeError:
                # naive vs aware mix
                logger.debug("Event %s mixes naive and aware timestamps", raw.get("id"))
                start_ts = end_ts = None

    return CalendarEventRecord(
        id=str(_field(raw, "id", default="")),
        title=str(title),
        description=str(description),
        start=start_ts,
        end=end_ts,
        duration_minutes=duration_minutes,
        is_all_day=is_all_day,
        attendee_count=attendee_count,
        event_type=_field(raw, "eventType", "event_type"),
        is_recurring=bool(_field(raw, "isRecurring", "is_recurring", default=False)),
        calendar_id=_field(raw, "calendarId", "calendar_id"),
        event_date=event_date,
        day_count=day_count,
    )


def parse_events(raw_events: list[dict], exclusions: list[str] | None = None) -> list[CalendarEventRecord]:
    """Parse payloads, skipping any whose title contains an exclusion term."""
    exclusions = [term.lower() for term in (exclusions or []) if term]
    records = []
    skipped = 0

    for index, raw in enumerate(raw_events):
        record = parse_event(raw)
        if not record.id:
            record = replace(record, id=f"event-{index}")
        if exclusions and any(term in record.title.lower() for term in exclusions):
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.info("Excluded %d event(s) by title", skipped)
    return records
