"""
Data models for calendar events and their classification.

Tiers and verticals are closed enums; raw strings are normalized once by
core.validation and never compared as text inside the engine.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum


class Tier(str, Enum):
    """Delegation level: who should ideally perform a piece of work."""

    UNIQUE = "UNIQUE"
    FOUNDER = "FOUNDER"
    SENIOR = "SENIOR"
    JUNIOR = "JUNIOR"
    EA = "EA"

    @property
    def priority(self) -> int:
        """Higher value wins contested wall-clock time."""
        return TIER_PRIORITY[self]

    @property
    def is_delegable(self) -> bool:
        return self in DELEGABLE_TIERS


TIER_PRIORITY = {
    Tier.UNIQUE: 4,
    Tier.FOUNDER: 3,
    Tier.SENIOR: 2,
    Tier.JUNIOR: 1,
    Tier.EA: 0,
}

DELEGABLE_TIERS = (Tier.SENIOR, Tier.JUNIOR, Tier.EA)
HIGH_VALUE_TIERS = (Tier.UNIQUE, Tier.FOUNDER)


class Vertical(str, Enum):
    """Work category used to pick a compensation rate."""

    ENGINEERING = "ENGINEERING"
    BUSINESS = "BUSINESS"
    UNIVERSAL = "UNIVERSAL"


class Confidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


@dataclass(frozen=True)
class CalendarEventRecord:
    """Raw calendar event as handed over by the calendar provider."""

    id: str
    title: str
    description: str = ""
    start: datetime | None = None  # None for all-day or unparseable events
    end: datetime | None = None
    duration_minutes: float = 0.0
    is_all_day: bool = False
    attendee_count: int = 0
    event_type: str | None = None  # provider hint, e.g. "outOfOffice"
    is_recurring: bool = False
    calendar_id: str | None = None
    event_date: date | None = None  # first calendar day covered
    day_count: int = 1  # days covered by an all-day event


@dataclass(frozen=True)
class LeaveDetection:
    """Result of the leave pass that runs before tier classification."""

    is_leave: bool
    confidence: Confidence
    method: str


@dataclass(frozen=True)
class Classification:
    """Tier suggestion for one non-leave event."""

    suggested_tier: Tier
    vertical: Vertical
    business_area: str
    confidence: Confidence = Confidence.LOW
    keywords_matched: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassifiedEvent:
    """Calendar event with its tier label and review state."""

    record: CalendarEventRecord
    tier: Tier
    vertical: Vertical
    business_area: str
    suggested_tier: Tier | None = None  # None while the event is leave
    confidence: Confidence = Confidence.LOW
    keywords_matched: tuple[str, ...] = ()
    is_leave: bool = False
    leave_confidence: Confidence = Confidence.LOW
    leave_detection_method: str = "none"
    reconciled: bool = False  # user confirmed
    overridden: bool = False  # user changed from the suggestion
    issues: tuple[str, ...] = field(default=(), compare=False)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def title(self) -> str:
        return self.record.title

    def with_changes(self, **changes) -> "ClassifiedEvent":
        return replace(self, **changes)
