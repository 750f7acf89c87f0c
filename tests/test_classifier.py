"""Tests for tier classification and user overrides."""

import pytest

from models.events import CalendarEventRecord, Confidence, Tier, Vertical
from services.classifier import apply_override, classify, classify_event, classify_events


def record(title, description="", attendees=0, **kwargs):
    return CalendarEventRecord(
        id=kwargs.pop("id", "evt"),
        title=title,
        description=description,
        attendee_count=attendees,
        duration_minutes=60,
        **kwargs,
    )


class TestClassify:
    def test_investor_meeting_is_unique(self):
        result = classify(record("Board meeting with investors"))

        assert result.suggested_tier == Tier.UNIQUE
        assert result.business_area == "Fundraising"
        assert result.vertical == Vertical.BUSINESS
        assert result.confidence == Confidence.MEDIUM

    def test_routine_keyword_pulls_tier_down(self):
        result = classify(record("Weekly status sync"))

        assert result.suggested_tier == Tier.JUNIOR
        assert result.business_area == "Operations"

    def test_admin_work_is_ea_and_universal(self):
        result = classify(record("Expense receipts and travel booking"))

        assert result.suggested_tier == Tier.EA
        assert result.vertical == Vertical.UNIVERSAL

    def test_engineering_work_gets_engineering_vertical(self):
        result = classify(record("Code review for payments service"))

        assert result.suggested_tier == Tier.SENIOR
        assert result.business_area == "Development"
        assert result.vertical == Vertical.ENGINEERING

    def test_large_meeting_lowers_tier(self):
        quiet = classify(record("Weekly review", attendees=0))
        crowded = classify(record("Weekly review", attendees=12))

        assert quiet.suggested_tier == Tier.SENIOR
        assert crowded.suggested_tier == Tier.JUNIOR
        assert crowded.suggested_tier.priority < quiet.suggested_tier.priority

    def test_large_meeting_below_threshold_is_unchanged(self):
        assert classify(record("Weekly review", attendees=4)).suggested_tier == Tier.SENIOR

    def test_large_meeting_keeps_high_value_keywords(self):
        assert classify(record("Board meeting", attendees=9)).suggested_tier == Tier.UNIQUE

    def test_large_routine_meeting_stays_junior(self):
        assert classify(record("Team standup", attendees=10)).suggested_tier == Tier.JUNIOR

    def test_no_signal_defaults_to_senior_low_confidence(self):
        result = classify(record("Lunch with Sam"))

        assert result.suggested_tier == Tier.SENIOR
        assert result.confidence == Confidence.LOW
        assert result.keywords_matched == ()
        assert result.business_area == "Operations"

    def test_description_is_searched(self):
        result = classify(record("Friday block", description="Board deck for investor update"))

        assert result.suggested_tier == Tier.UNIQUE

    @pytest.mark.parametrize(
        "title,attendees",
        [("Leadership offsite planning", 0), ("Executive staff meeting", 12)],
    )
    def test_solo_founder_never_gets_founder_tier(self, title, attendees):
        assert classify(record(title, attendees=attendees)).suggested_tier == Tier.FOUNDER

        solo = classify(record(title, attendees=attendees), solo_founder=True)

        assert solo.suggested_tier == Tier.UNIQUE

    def test_is_deterministic(self):
        rec = record("Architecture session", description="technical review of the sprint backlog")

        assert classify(rec) == classify(rec)


class TestClassifyEvent:
    def test_leave_skips_tier_classification(self):
        event = classify_event(record("Vacation - Lisbon"))

        assert event.is_leave
        assert event.suggested_tier is None
        assert event.leave_detection_method == "keyword_title"
        assert event.leave_confidence == Confidence.HIGH

    def test_work_event_carries_suggestion(self):
        event = classify_event(record("Board meeting with investors"))

        assert not event.is_leave
        assert event.tier == event.suggested_tier == Tier.UNIQUE
        assert not event.reconciled
        assert not event.overridden

    def test_classify_events_keeps_order(self):
        records = [record("Daily standup", id="1"), record("PTO", id="2"), record("Board prep", id="3")]

        events = classify_events(records)

        assert [e.id for e in events] == ["1", "2", "3"]
        assert [e.is_leave for e in events] == [False, True, False]


class TestApplyOverride:
    def test_tier_change_marks_reconciled_and_overridden(self):
        event = classify_event(record("Weekly status sync"))

        updated = apply_override(event, tier=Tier.SENIOR)

        assert updated.tier == Tier.SENIOR
        assert updated.suggested_tier == Tier.JUNIOR
        assert updated.vertical == Vertical.BUSINESS
        assert updated.reconciled
        assert updated.overridden
        assert event.tier == Tier.JUNIOR  # original untouched

    def test_confirming_suggestion_is_not_an_override(self):
        event = classify_event(record("Weekly status sync"))

        updated = apply_override(event, tier=Tier.JUNIOR)

        assert updated.reconciled
        assert not updated.overridden

    def test_moving_to_ea_makes_vertical_universal(self):
        event = classify_event(record("Code review for payments service"))

        updated = apply_override(event, tier=Tier.EA)

        assert updated.vertical == Vertical.UNIVERSAL

    def test_moving_out_of_ea_recomputes_vertical(self):
        event = classify_event(record("Expense receipts and travel booking"))

        updated = apply_override(event, tier=Tier.JUNIOR)

        assert updated.vertical == Vertical.BUSINESS

    def test_founder_override_collapses_for_solo_founder(self):
        event = classify_event(record("Weekly status sync"))

        assert apply_override(event, tier=Tier.FOUNDER, solo_founder=True).tier == Tier.UNIQUE

    def test_unmarking_leave_reclassifies(self):
        event = classify_event(record("OOO - dentist"))
        assert event.is_leave

        updated = apply_override(event, is_leave=False)

        assert not updated.is_leave
        assert updated.suggested_tier == Tier.SENIOR
        assert updated.leave_detection_method == "user"

    def test_marking_leave(self):
        event = classify_event(record("Daily standup"))

        updated = apply_override(event, is_leave=True)

        assert updated.is_leave
        assert updated.leave_detection_method == "user"

    def test_vertical_only_override(self):
        event = classify_event(record("Weekly status sync"))

        updated = apply_override(event, vertical=Vertical.ENGINEERING)

        assert updated.vertical == Vertical.ENGINEERING
        assert updated.tier == Tier.JUNIOR
        assert updated.overridden
