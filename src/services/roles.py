"""
Role clustering: turn delegable calendar time into priced hiring recommendations.

One role per (tier, vertical) present in the audit, never one per event, so
the list stays short enough to scan. EA work is never split by vertical.
Hours come from the overlap-resolved allocation, projected to a weekly
run-rate.
"""

import logging
import math
from collections import defaultdict
from dataclasses import replace

from core.config import (
    FULL_TIME_HOURS_PER_WEEK,
    FULL_TIME_THRESHOLD_HOURS,
    JD_MAX_TASKS,
    MONTHS_PER_YEAR,
    UNTITLED_TASK_LABEL,
    WEEKS_PER_YEAR,
)
from models.audit import AuditWindow, RoleRecommendation, RoleTask, TierRates
from models.events import ClassifiedEvent, Tier, Vertical
from services.aggregator import allocate_minutes
from services.reports import format_currency, format_hours

logger = logging.getLogger(__name__)

_TIER_LABELS = {Tier.SENIOR: "Senior", Tier.JUNIOR: "Junior", Tier.EA: "EA"}
_VERTICAL_LABELS = {
    Vertical.ENGINEERING: "Engineering",
    Vertical.BUSINESS: "Business",
    Vertical.UNIVERSAL: "Generalist",
}

RESPONSIBILITIES = {
    (Tier.SENIOR, Vertical.ENGINEERING): [
        "Lead technical architecture decisions and code reviews",
        "Mentor junior engineers and establish best practices",
        "Own critical system components and technical debt reduction",
    ],
    (Tier.JUNIOR, Vertical.ENGINEERING): [
        "Implement features under senior guidance",
        "Write tests and documentation for code changes",
        "Debug and fix reported issues",
    ],
    (Tier.SENIOR, Vertical.BUSINESS): [
        "Own a business function end-to-end and report on outcomes",
        "Build repeatable processes for recurring work",
        "Represent the company with customers and partners",
    ],
    (Tier.JUNIOR, Vertical.BUSINESS): [
        "Coordinate day-to-day business operations",
        "Prepare reports, documents and follow-ups",
        "Keep tools and records up to date",
    ],
    (Tier.EA, Vertical.UNIVERSAL): [
        "Manage calendar and schedule meetings efficiently",
        "Handle travel arrangements and expense reports",
        "Screen communications and prepare briefings",
    ],
}

DEFAULT_RESPONSIBILITIES = [
    "Take ownership of delegated tasks and projects",
    "Maintain clear communication with stakeholders",
    "Track progress and report on deliverables",
]

SKILLS = {
    Vertical.ENGINEERING: [
        "Proficiency in the team's languages and frameworks",
        "Experience with version control and CI/CD",
        "Strong problem-solving and written communication",
    ],
    Vertical.BUSINESS: [
        "Strong organizational and project management skills",
        "Comfort with business tools (docs, spreadsheets, CRM)",
        "Ability to work independently and prioritize",
    ],
    Vertical.UNIVERSAL: [
        "Exceptional organization and time management",
        "Discretion with sensitive information",
        "Proficiency with calendar, email and travel tools",
    ],
}

PROFILES = {
    Tier.SENIOR: "5+ years of experience, able to own projects end-to-end without supervision.",
    Tier.JUNIOR: "1-2 years of relevant experience, eager to learn, takes direction well.",
    Tier.EA: "Highly organized, anticipates needs, and takes pride in making executives effective.",
}


def role_key(tier: Tier, vertical: Vertical) -> tuple[Tier, Vertical]:
    """EA roles are never split by vertical."""
    if tier == Tier.EA:
        return Tier.EA, Vertical.UNIVERSAL
    return tier, vertical


def role_id(tier: Tier, vertical: Vertical) -> str:
    tier, vertical = role_key(tier, vertical)
    if tier == Tier.EA:
        return "ea"
    return f"{tier.value.lower()}-{vertical.value.lower()}"


def role_title(tier: Tier, vertical: Vertical) -> str:
    """'Senior Engineering', 'Junior Business', 'Executive Assistant'."""
    if tier == Tier.EA:
        return "Executive Assistant"
    return f"{_TIER_LABELS[tier]} {_VERTICAL_LABELS[vertical]}"


def monthly_cost(tier: Tier, vertical: Vertical, hours_per_week: float, tier_rates: TierRates) -> float | None:
    """Full-time annual rate scaled by weekly load, per month. None if no rate."""
    rate = tier_rates.annual_rate(tier, vertical)
    if rate is None:
        return None
    cost = rate * (hours_per_week / FULL_TIME_HOURS_PER_WEEK) / MONTHS_PER_YEAR
    return cost if math.isfinite(cost) else None


def render_job_description(role: RoleRecommendation) -> str:
    """Markdown job description listing the top tasks and time commitment."""
    employment = "Full-time" if role.hours_per_week >= FULL_TIME_THRESHOLD_HOURS else "Part-time"
    if role.cost_monthly is None:
        cost_line = "Not available (rate not configured)"
    else:
        cost_line = f"{format_currency(role.cost_monthly)}/month"

    top_tasks = sorted(role.tasks, key=lambda t: -t.hours_per_week)[:JD_MAX_TASKS]
    task_lines = [f"- {t.label} ({format_hours(t.hours_per_week)}/week)" for t in top_tasks]
    if len(role.tasks) > JD_MAX_TASKS:
        task_lines.append(f"- ...and {len(role.tasks) - JD_MAX_TASKS} more")
    if not task_lines:
        task_lines = ["- No tasks assigned yet"]

    key = role_key(role.tier, role.vertical)
    responsibilities = RESPONSIBILITIES.get(key, DEFAULT_RESPONSIBILITIES)
    skills = SKILLS[key[1]]

    lines = [
        f"# {role.role_title}",
        "",
        f"**Employment Type:** {employment} ({format_hours(role.hours_per_week)}/week)",
        f"**Tier:** {_TIER_LABELS.get(role.tier, role.tier.value)}",
        f"**Vertical:** {_VERTICAL_LABELS[key[1]]}",
        f"**Estimated Cost:** {cost_line}",
        "",
        "## Tasks You'll Take Over",
        "*Based on your calendar audit*",
        "",
        *task_lines,
        "",
        "## Key Responsibilities",
        "",
        *[f"- {r}" for r in responsibilities],
        "",
        "## Required Skills",
        "",
        *[f"- {s}" for s in skills],
        "",
        "## Ideal Candidate Profile",
        "",
        PROFILES.get(role.tier, PROFILES[Tier.JUNIOR]),
    ]
    return "\n".join(lines)


def build_role(
    tier: Tier,
    vertical: Vertical,
    tasks: tuple[RoleTask, ...],
    tier_rates: TierRates,
    role_id_: str | None = None,
    title: str | None = None,
) -> RoleRecommendation:
    """
    Assemble a role whose hours and cost derive entirely from its tasks.

    Used for fresh roles and for every recalculation after an edit, so
    hours_per_week always equals the sum of task hours.
    """
    tier, vertical = role_key(tier, vertical)
    hours = math.fsum(task.hours_per_week for task in tasks)
    role = RoleRecommendation(
        id=role_id_ or role_id(tier, vertical),
        role_title=title or role_title(tier, vertical),
        tier=tier,
        vertical=vertical,
        hours_per_week=hours,
        cost_monthly=monthly_cost(tier, vertical, hours, tier_rates),
        tasks=tuple(tasks),
    )
    return replace(role, jd_text=render_job_description(role))


def generate_role_recommendations(
    events: list[ClassifiedEvent], window: AuditWindow, tier_rates: TierRates
) -> list[RoleRecommendation]:
    """
    Cluster delegable time into roles, highest weekly load first.

    Accepts the full event list (non-delegable events still claim contested
    time in the overlap allocation) and keeps only SENIOR/JUNIOR/EA,
    non-leave events. No delegable time -> empty list.
    """
    minutes = allocate_minutes(events, window)

    grouped: dict[tuple[Tier, Vertical], dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for event, event_minutes in zip(events, minutes):
        if event.is_leave or not event.tier.is_delegable or event_minutes <= 0:
            continue
        label = (event.title or "").strip() or UNTITLED_TASK_LABEL
        grouped[role_key(event.tier, event.vertical)][label] += event_minutes

    roles = []
    for (tier, vertical), task_minutes in grouped.items():
        tasks = tuple(
            RoleTask(label=label, hours_per_week=m / 60 * window.weekly_multiplier)
            for label, m in sorted(task_minutes.items(), key=lambda item: (-item[1], item[0]))
        )
        roles.append(build_role(tier, vertical, tasks, tier_rates))

    roles.sort(key=lambda r: (-r.hours_per_week, r.id))
    logger.debug("Generated %d role recommendation(s)", len(roles))
    return roles


def calculate_total_savings(roles: list[RoleRecommendation], founder_hourly_rate: float | None) -> dict:
    """Weekly hours handed off and what that time is worth at the founder's rate."""
    weekly_hours = math.fsum(role.hours_per_week for role in roles)
    if founder_hourly_rate is None:
        return {"weekly_hours_saved": weekly_hours, "weekly_cost_saved": None, "annual_cost_saved": None}
    weekly_cost = weekly_hours * founder_hourly_rate
    return {
        "weekly_hours_saved": weekly_hours,
        "weekly_cost_saved": weekly_cost,
        "annual_cost_saved": weekly_cost * WEEKS_PER_YEAR,
    }
