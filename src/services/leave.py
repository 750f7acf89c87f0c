"""
Leave detection: vacation, PTO, sick days and other out-of-office time.

Runs before tier classification. Leave events are kept (so a user can flip
them back) but contribute no hours.
"""

from datetime import timedelta

from core.config import LEAVE_KEYWORDS, OUT_OF_OFFICE_EVENT_TYPE
from models.events import ClassifiedEvent, Confidence, LeaveDetection

_ALL_LEAVE_KEYWORDS = [kw for keywords in LEAVE_KEYWORDS.values() for kw in keywords]


def detect_leave(
    title: str | None,
    description: str | None,
    is_all_day: bool,
    event_type: str | None = None,
) -> LeaveDetection:
    """
    Decide whether an event is leave, most specific signal first.

    Order: provider out-of-office type, vacation/PTO in title, OOO in title,
    sick/medical in title, any leave keyword, then low-confidence all-day
    travel/blocked patterns.
    """
    title_lower = (title or "").lower()
    text = f"{title_lower} {(description or '').lower()}"

    if event_type == OUT_OF_OFFICE_EVENT_TYPE:
        return LeaveDetection(True, Confidence.HIGH, "provider_event_type")

    if any(kw in title_lower for kw in ("vacation", "pto", "paid time off", "annual leave")):
        return LeaveDetection(True, Confidence.HIGH, "keyword_title")

    if "ooo" in title_lower or "out of office" in title_lower:
        return LeaveDetection(True, Confidence.HIGH, "keyword_ooo")

    if any(kw in title_lower for kw in ("sick", "medical", "doctor")):
        return LeaveDetection(True, Confidence.HIGH, "keyword_medical")

    if any(kw in text for kw in _ALL_LEAVE_KEYWORDS):
        return LeaveDetection(True, Confidence.MEDIUM, "keyword_match")

    if is_all_day:
        if any(kw in title_lower for kw in ("travel", "flight", "trip")):
            return LeaveDetection(True, Confidence.LOW, "pattern_travel")
        if "blocked" in title_lower or "unavailable" in title_lower:
            return LeaveDetection(True, Confidence.LOW, "pattern_blocked")

    return LeaveDetection(False, Confidence.LOW, "none")


def leave_hours_excluded(events: list[ClassifiedEvent]) -> float:
    """Total reported hours of leave events (excluded from every tier)."""
    return sum(max(e.record.duration_minutes, 0.0) for e in events if e.is_leave) / 60


def leave_days_detected(events: list[ClassifiedEvent]) -> int:
    """Distinct calendar days touched by leave events."""
    days = set()
    for event in events:
        if not event.is_leave or event.record.event_date is None:
            continue
        record = event.record
        if record.is_all_day:
            for offset in range(max(record.day_count, 1)):
                days.add(record.event_date + timedelta(days=offset))
        else:
            days.add(record.event_date)
    return len(days)
