"""
Planning score: how well-kept a calendar is, independent of tiers.

The result is a 0-100 number plus a markdown assessment. The metrics
calculator only carries the number through, it never interprets it.
"""

from dataclasses import dataclass, field

from core.config import FULL_TIME_HOURS_PER_WEEK, VAGUE_TITLES
from models.events import CalendarEventRecord
from services.metrics import round_half_up

# Component weights, summing to 1
WEIGHTS = {
    "event_coverage": 0.25,
    "title_quality": 0.25,
    "duration_accuracy": 0.25,
    "recurring_usage": 0.15,
    "description_quality": 0.10,
}

MIN_REALISTIC_MINUTES = 15
MAX_REALISTIC_MINUTES = 240
MIN_DESCRIPTION_LENGTH = 10


@dataclass(frozen=True)
class PlanningScore:
    score: int
    components: dict[str, int] = field(default_factory=dict)
    assessment: str = ""


def _is_vague(title: str) -> bool:
    lower = title.lower().strip()
    return any(lower == vague or lower.startswith(vague + " ") for vague in VAGUE_TITLES)


def _word_count(title: str) -> int:
    return len(title.split())


def _has_descriptive_title(record: CalendarEventRecord) -> bool:
    title = record.title or ""
    return _word_count(title) > 3 and not _is_vague(title)


def _has_realistic_duration(record: CalendarEventRecord) -> bool:
    return (
        not record.is_all_day
        and MIN_REALISTIC_MINUTES <= record.duration_minutes <= MAX_REALISTIC_MINUTES
    )


def _has_description(record: CalendarEventRecord) -> bool:
    return len(record.description or "") > MIN_DESCRIPTION_LENGTH


def _bullets(items: list[str], fallback: str) -> str:
    return "\n".join(f"- {item}" for item in items) if items else f"- {fallback}"


def _assessment(score: int, components: dict[str, float], vague_count: int) -> str:
    coverage = components["event_coverage"]
    titles = components["title_quality"]
    durations = components["duration_accuracy"]
    recurring = components["recurring_usage"]
    descriptions = components["description_quality"]

    strengths = []
    if recurring > 50:
        strengths.append(
            f"Good use of recurring events ({round_half_up(recurring)}% of meetings are recurring)"
        )
    if titles > 70:
        strengths.append("Most events have descriptive titles")
    if descriptions > 50:
        strengths.append("Good use of event descriptions and agendas")
    if coverage > 70:
        strengths.append(f"Strong calendar coverage ({round_half_up(coverage)}% of expected work hours)")

    improvements = []
    if coverage < 50:
        improvements.append(f"Only {round_half_up(coverage)}% of your work hours have scheduled events")
    if vague_count > 0:
        improvements.append(f'{vague_count} events have vague titles like "Call" or "Meeting"')
    if descriptions < 30:
        improvements.append("Consider adding agendas to your meetings")
    if recurring < 20:
        improvements.append("Consider using recurring events for regular meetings")

    recommendations = []
    if coverage < 50:
        recommendations.append('Block time for deep work (consider adding "focus time" blocks)')
    if titles < 70:
        recommendations.append("Add context to meeting titles (who, what, outcome)")
    if durations < 70:
        recommendations.append("Schedule buffer time between back-to-back meetings")
    if descriptions < 30:
        recommendations.append("Add agendas or objectives to calendar events")
    if not recommendations:
        recommendations = ["Maintain your current calendar hygiene"]

    return "\n".join([
        f"## Your Planning Score: {score}%",
        "",
        "### Strengths",
        _bullets(strengths, "Keep adding details to your calendar events"),
        "",
        "### Areas to Improve",
        _bullets(improvements, "Great job! Your calendar is well-organized"),
        "",
        "### Recommendations",
        "\n".join(f"{i}. {r}" for i, r in enumerate(recommendations, start=1)),
    ])


def calculate_planning_score(records: list[CalendarEventRecord], day_count: int) -> PlanningScore:
    """
    Weighted calendar-hygiene score over all events in the audit.

    Components (each 0-100):
    - event_coverage: scheduled hours against a 40h week over the window
    - title_quality: titles longer than three words that aren't vague
    - duration_accuracy: timed events between 15 minutes and 4 hours
    - recurring_usage: share of recurring events
    - description_quality: events with a real description
    """
    if not records:
        return PlanningScore(
            score=0,
            components={name: 0 for name in WEIGHTS},
            assessment="## Your Planning Score: 0%\n\nNo events found in the selected period.",
        )

    count = len(records)
    total_hours = sum(max(r.duration_minutes, 0.0) for r in records) / 60
    expected_hours = max(day_count, 1) / 7 * FULL_TIME_HOURS_PER_WEEK
    descriptive = sum(1 for r in records if _has_descriptive_title(r))

    components = {
        "event_coverage": min(100.0, total_hours / expected_hours * 100),
        "title_quality": descriptive / count * 100,
        "duration_accuracy": sum(1 for r in records if _has_realistic_duration(r)) / count * 100,
        "recurring_usage": sum(1 for r in records if r.is_recurring) / count * 100,
        "description_quality": sum(1 for r in records if _has_description(r)) / count * 100,
    }

    weighted = sum(components[name] * weight for name, weight in WEIGHTS.items())
    score = max(0, min(100, round_half_up(weighted)))

    return PlanningScore(
        score=score,
        components={name: round_half_up(value) for name, value in components.items()},
        assessment=_assessment(score, components, count - descriptive),
    )


def calculate_event_planning_score(record: CalendarEventRecord) -> int:
    """Per-event score used for calendar badges."""
    score = 0
    title = record.title or ""
    if not _is_vague(title):
        words = _word_count(title)
        if words > 3:
            score += 40
        elif words > 1:
            score += 20
    if _has_realistic_duration(record):
        score += 30
    if _has_description(record):
        score += 20
    if record.is_recurring:
        score += 10
    return max(0, min(100, score))


def planning_score_label(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Improvement"
