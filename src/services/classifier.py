"""
Event tier classification.

classify() is pure and deterministic: the same record and solo-founder flag
always yield the same Classification. Leave detection runs first in
classify_events(); leave events skip tier classification entirely.
"""

import logging

from core.config import (
    BUSINESS_AREA_KEYWORDS,
    DEFAULT_BUSINESS_AREA,
    ENGINEERING_AREAS,
    LARGE_MEETING_ATTENDEES,
    TIER_KEYWORDS,
)
from models.events import (
    CalendarEventRecord,
    Classification,
    ClassifiedEvent,
    Confidence,
    Tier,
    Vertical,
)
from services.leave import detect_leave

logger = logging.getLogger(__name__)


def _event_text(record: CalendarEventRecord) -> str:
    return f"{record.title or ''} {record.description or ''}".lower()


def find_business_area(text: str) -> tuple[str, str | None]:
    """First area whose keyword appears in text, with the keyword matched."""
    for area, keywords in BUSINESS_AREA_KEYWORDS.items():
        for keyword in keywords:
            if keyword in text:
                return area, keyword
    return DEFAULT_BUSINESS_AREA, None


def vertical_for(tier: Tier, business_area: str) -> Vertical:
    """EA work is universal; everything else follows the business area."""
    if tier == Tier.EA:
        return Vertical.UNIVERSAL
    if business_area in ENGINEERING_AREAS:
        return Vertical.ENGINEERING
    return Vertical.BUSINESS


def collapse_founder(tier: Tier, solo_founder: bool) -> Tier:
    """A one-person company has no co-founder to hand FOUNDER work to."""
    if solo_founder and tier == Tier.FOUNDER:
        return Tier.UNIQUE
    return tier


def classify(record: CalendarEventRecord, solo_founder: bool = False) -> Classification:
    """
    Suggest a tier, vertical and business area for one event.

    Tier keywords are checked UNIQUE -> EA and the last tier with a match
    wins, so routine terms (sync, admin, scheduling) pull a title down.
    Meetings with LARGE_MEETING_ATTENDEES or more drop SENIOR work to JUNIOR;
    UNIQUE/FOUNDER keyword matches are left alone. With no signal the event
    defaults to SENIOR at LOW confidence.
    """
    text = _event_text(record)
    matched: list[str] = []

    business_area, area_keyword = find_business_area(text)
    if area_keyword:
        matched.append(area_keyword)

    suggested = Tier.SENIOR
    for tier_name, keywords in TIER_KEYWORDS.items():
        for keyword in keywords:
            if keyword in text:
                suggested = Tier(tier_name)
                matched.append(keyword)
                break

    if record.attendee_count >= LARGE_MEETING_ATTENDEES and suggested == Tier.SENIOR:
        suggested = Tier.JUNIOR

    if len(matched) >= 3:
        confidence = Confidence.HIGH
    elif matched:
        confidence = Confidence.MEDIUM
    else:
        confidence = Confidence.LOW

    suggested = collapse_founder(suggested, solo_founder)

    return Classification(
        suggested_tier=suggested,
        vertical=vertical_for(suggested, business_area),
        business_area=business_area,
        confidence=confidence,
        keywords_matched=tuple(matched),
    )


def _classified(record: CalendarEventRecord, solo_founder: bool, **review) -> ClassifiedEvent:
    result = classify(record, solo_founder)
    return ClassifiedEvent(
        record=record,
        tier=result.suggested_tier,
        vertical=result.vertical,
        business_area=result.business_area,
        suggested_tier=result.suggested_tier,
        confidence=result.confidence,
        keywords_matched=result.keywords_matched,
        **review,
    )


def classify_event(record: CalendarEventRecord, solo_founder: bool = False) -> ClassifiedEvent:
    """Leave pass, then tier classification for non-leave events."""
    leave = detect_leave(record.title, record.description, record.is_all_day, record.event_type)

    if leave.is_leave:
        return ClassifiedEvent(
            record=record,
            tier=Tier.SENIOR,  # placeholder, leave hours are never counted
            vertical=Vertical.UNIVERSAL,
            business_area="Leave",
            suggested_tier=None,
            is_leave=True,
            leave_confidence=leave.confidence,
            leave_detection_method=leave.method,
        )

    return _classified(
        record,
        solo_founder,
        leave_confidence=leave.confidence,
        leave_detection_method=leave.method,
    )


def classify_events(records: list[CalendarEventRecord], solo_founder: bool = False) -> list[ClassifiedEvent]:
    events = [classify_event(record, solo_founder) for record in records]
    leave_count = sum(1 for e in events if e.is_leave)
    logger.debug("Classified %d event(s), %d leave", len(events), leave_count)
    return events


def apply_override(
    event: ClassifiedEvent,
    *,
    tier: Tier | None = None,
    vertical: Vertical | None = None,
    is_leave: bool | None = None,
    reconciled: bool | None = None,
    solo_founder: bool = False,
) -> ClassifiedEvent:
    """
    Apply a user edit to one event and return the updated event.

    Turning is_leave off sends the event back through classification so it
    gets a real tier. Changing the tier marks the event reconciled and, when
    it differs from the suggestion, overridden.
    """
    updated = event

    if is_leave is not None and is_leave != event.is_leave:
        if is_leave:
            updated = updated.with_changes(is_leave=True, leave_detection_method="user")
        else:
            updated = _classified(
                event.record,
                solo_founder,
                is_leave=False,
                leave_confidence=event.leave_confidence,
                leave_detection_method="user",
                reconciled=event.reconciled,
                issues=event.issues,
            )

    if tier is not None:
        tier = collapse_founder(tier, solo_founder)
        new_vertical = vertical
        if new_vertical is None:
            # keep a user-chosen vertical unless the move into/out of EA invalidates it
            keep = updated.vertical != Vertical.UNIVERSAL and tier != Tier.EA
            new_vertical = updated.vertical if keep else vertical_for(tier, updated.business_area)
        updated = updated.with_changes(
            tier=tier,
            vertical=new_vertical,
            reconciled=True,
            overridden=updated.overridden or tier != updated.suggested_tier,
        )

    if vertical is not None and tier is None:
        updated = updated.with_changes(vertical=vertical, overridden=True)

    if reconciled is not None:
        updated = updated.with_changes(reconciled=reconciled)

    return updated
