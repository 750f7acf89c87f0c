"""
Boundary normalization and event validation.

Free-form tier/vertical strings coming from storage or requests are turned
into enums here, once. Validation never rejects an event: it records issues so
one bad record cannot abort a whole audit.
"""

from collections import Counter

from models.audit import SalaryMode
from models.events import CalendarEventRecord, ClassifiedEvent, Confidence, Tier, Vertical

_TIER_ALIASES = {
    "UNIQUE": Tier.UNIQUE,
    "FOUNDER": Tier.FOUNDER,
    "SENIOR": Tier.SENIOR,
    "JUNIOR": Tier.JUNIOR,
    "EA": Tier.EA,
    "EXECUTIVE ASSISTANT": Tier.EA,
}

_VERTICAL_ALIASES = {
    "ENGINEERING": Vertical.ENGINEERING,
    "ENG": Vertical.ENGINEERING,
    "BUSINESS": Vertical.BUSINESS,
    "BIZ": Vertical.BUSINESS,
    "UNIVERSAL": Vertical.UNIVERSAL,
    "ANY": Vertical.UNIVERSAL,
}


def normalize_tier(value: str | Tier | None) -> Tier | None:
    """Map 'senior', 'Senior', 'SENIOR' to Tier.SENIOR. Unknown -> None."""
    if value is None or isinstance(value, Tier):
        return value
    return _TIER_ALIASES.get(str(value).strip().upper())


def normalize_vertical(value: str | Vertical | None) -> Vertical | None:
    if value is None or isinstance(value, Vertical):
        return value
    return _VERTICAL_ALIASES.get(str(value).strip().upper())


def normalize_confidence(value: str | Confidence | None) -> Confidence:
    if isinstance(value, Confidence):
        return value
    try:
        return Confidence(str(value).strip().upper())
    except ValueError:
        return Confidence.LOW


def normalize_salary_mode(value: str | SalaryMode | None) -> SalaryMode:
    if isinstance(value, SalaryMode):
        return value
    if value and str(value).strip().lower() == SalaryMode.HOURLY.value:
        return SalaryMode.HOURLY
    return SalaryMode.ANNUAL


def is_solo_founder(team_composition: dict[str, int] | None) -> bool:
    """Exactly one founder and nobody else on the team."""
    if not team_composition:
        return False
    founders = int(team_composition.get("founder", 0) or 0)
    others = any(
        int(count or 0) > 0 for role, count in team_composition.items() if role != "founder"
    )
    return founders == 1 and not others


def check_record(record: CalendarEventRecord) -> list[str]:
    """Return human-readable issues for one raw event."""
    issues = []

    if not record.title or not record.title.strip():
        issues.append("Missing title")

    if record.is_all_day:
        if record.event_date is None:
            issues.append("All-day event without a date")
    elif record.start is None or record.end is None:
        if record.duration_minutes <= 0:
            issues.append("Missing start/end and duration")
        else:
            issues.append("Missing start/end, using reported duration")
    elif record.end <= record.start:
        issues.append("End is not after start")

    if record.duration_minutes < 0:
        issues.append(f"Negative duration {record.duration_minutes:g} min")

    return issues


def validate_events(events: list[ClassifiedEvent]) -> list[ClassifiedEvent]:
    """
    Attach validation issues to each event.

    Checks:
    1. Title present
    2. Timestamps/duration usable for hour accounting
    3. Event ids unique within the audit
    """
    id_counts = Counter(event.id for event in events)

    validated = []
    for event in events:
        issues = check_record(event.record)
        if id_counts[event.id] > 1:
            issues.append(f"Duplicate event id '{event.id}'")
        validated.append(event.with_changes(issues=tuple(issues)))

    return validated
