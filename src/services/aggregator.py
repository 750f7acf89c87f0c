"""
Tier & hours aggregation.

Overlapping events are never summed naively: a person occupies one activity
at a time, so every contested minute is attributed to exactly one event.

Overlap rule, applied minute by minute along a sweep line:
1. the highest tier wins (UNIQUE > FOUNDER > SENIOR > JUNIOR > EA)
2. then the event that started earliest
3. then the lowest event id

All-day events occupy ALL_DAY_EVENT_HOURS per covered day, laid out from
WORKDAY_START_HOUR so they contend with timed events like any other block.
The sweep runs on UTC instants, so a DST change day is 23 or 25 hours long.
Events with no usable timestamps only fill time nobody else covers, highest
tier first. Totals are for the literal audit span; weekly projection happens
downstream.
"""

import math
from collections import defaultdict
from datetime import datetime, time, timedelta, timezone

from core.config import ALL_DAY_EVENT_HOURS, HOURS_PER_DAY, WORKDAY_START_HOUR
from models.audit import AuditWindow, TierHours
from models.events import ClassifiedEvent, Tier

Interval = tuple[datetime, datetime]


def _to_instant(ts: datetime, window: AuditWindow) -> datetime:
    """UTC instant of a timestamp; naive ones are wall-clock time in the window's zone."""
    if ts.tzinfo is not None:
        return ts.astimezone(timezone.utc)
    return window.local_instant(ts)


def event_intervals(event: ClassifiedEvent, window: AuditWindow) -> list[Interval] | None:
    """
    UTC intervals an event occupies inside the window.

    Returns None for a floating event (no usable timestamps or date), and an
    empty list for an event that lies entirely outside the window.
    """
    record = event.record
    intervals: list[Interval] = []

    if record.is_all_day:
        if record.event_date is None:
            return None
        hours = min(max(ALL_DAY_EVENT_HOURS, 0.0), HOURS_PER_DAY)
        start_hour = min(WORKDAY_START_HOUR, HOURS_PER_DAY - hours)
        for offset in range(max(record.day_count, 1)):
            day_start = datetime.combine(record.event_date + timedelta(days=offset), time.min)
            block_start = window.local_instant(day_start + timedelta(hours=start_hour))
            intervals.append((block_start, block_start + timedelta(hours=hours)))
    elif record.start is not None and record.end is not None:
        start = _to_instant(record.start, window)
        end = _to_instant(record.end, window)
        if end <= start:
            return None
        intervals.append((start, end))
    else:
        return None

    span_start, span_end = window.span_start, window.span_end
    clipped = []
    for start, end in intervals:
        start, end = max(start, span_start), min(end, span_end)
        if end > start:
            clipped.append((start, end))
    return clipped


def _winner_key(event: ClassifiedEvent, interval_start: datetime, index: int):
    return (-event.tier.priority, interval_start, event.id, index)


def allocate_minutes(events: list[ClassifiedEvent], window: AuditWindow) -> list[float]:
    """
    Effective (overlap-resolved) minutes per event, aligned with `events`.

    Leave events always get 0. The sum never exceeds the window's real
    elapsed span.
    """
    allocated = [0.0] * len(events)

    # (time, is_start, index, interval_start); ends sort before starts at equal times
    points = []
    floating = []
    for index, event in enumerate(events):
        if event.is_leave:
            continue
        intervals = event_intervals(event, window)
        if intervals is None:
            floating.append(index)
            continue
        for start, end in intervals:
            points.append((start, 1, index, start))
            points.append((end, 0, index, start))

    points.sort(key=lambda p: (p[0], p[1]))

    active: dict[tuple[int, datetime], int] = defaultdict(int)
    covered_minutes = 0.0
    previous = None
    for moment, is_start, index, interval_start in points:
        if previous is not None and moment > previous and active:
            winner = min(
                active,
                key=lambda entry: _winner_key(events[entry[0]], entry[1], entry[0]),
            )
            minutes = (moment - previous).total_seconds() / 60
            allocated[winner[0]] += minutes
            covered_minutes += minutes

        entry = (index, interval_start)
        if is_start:
            active[entry] += 1
        else:
            active[entry] -= 1
            if active[entry] <= 0:
                del active[entry]
        previous = moment

    remaining = max(window.span_hours * 60 - covered_minutes, 0.0)
    floating.sort(key=lambda i: (-events[i].tier.priority, events[i].id, i))
    for index in floating:
        reported = events[index].record.duration_minutes
        if not math.isfinite(reported):
            reported = 0.0
        minutes = min(max(reported, 0.0), remaining)
        allocated[index] = minutes
        remaining -= minutes

    return allocated


def aggregate(events: list[ClassifiedEvent], window: AuditWindow) -> TierHours:
    """Per-tier and per-(tier, vertical) hours for the literal audit span."""
    hours = {tier: 0.0 for tier in Tier}
    by_vertical: dict = defaultdict(float)

    for event, minutes in zip(events, allocate_minutes(events, window)):
        if event.is_leave or minutes <= 0:
            continue
        hours[event.tier] += minutes / 60
        by_vertical[(event.tier, event.vertical)] += minutes / 60

    return TierHours(hours=hours, by_vertical=dict(by_vertical))
