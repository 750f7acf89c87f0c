"""
Report generation utilities for Excel and markdown formats.
"""

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from models.events import ClassifiedEvent, Tier
from services.metrics import tier_percentages

if TYPE_CHECKING:
    from services.audit import AuditResult

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

EVENT_HEADERS = [
    "Event ID",
    "Date",
    "Title",
    "Hours",
    "Tier",
    "Suggested Tier",
    "Vertical",
    "Business Area",
    "Confidence",
    "Leave",
    "Reconciled",
    "Issues",
]

ROLE_HEADERS = ["Role", "Tier", "Vertical", "Hours/Week", "Monthly Cost", "Task", "Task Hours/Week"]


def format_currency(value: float | None) -> str:
    """Format as '$12,345', or N/A when unknown."""
    if value is None:
        return NOT_AVAILABLE
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_hours(hours: float) -> str:
    """Format as '12.5h'."""
    return f"{hours:.1f}h"


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def _bold_header(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)


def _fit_columns(ws, widths: list[int]):
    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _summary_rows(result: "AuditResult") -> list[tuple[str, object]]:
    metrics = result.metrics
    percentages = tier_percentages(metrics.hours_by_tier)
    rows = [
        ("Audit Period", f"{format_date_display(result.window.start_date)} - {format_date_display(result.window.end_date)}"),
        ("Days Analyzed", metrics.day_count),
        ("Total Hours", round(metrics.total_hours, 2)),
        ("Efficiency Score", f"{metrics.efficiency_score}%"),
        ("Planning Score", f"{metrics.planning_score}%" if metrics.planning_score is not None else NOT_AVAILABLE),
        ("Reclaimable Hours", round(metrics.reclaimable_hours, 2)),
        ("Reclaimable Hours/Week", round(metrics.reclaimable_hours_per_week, 2)),
        ("Founder Cost (Annual)", format_currency(metrics.founder_cost_total)),
        ("Delegated Cost (Annual)", format_currency(metrics.delegated_cost_total)),
        ("Delegation Arbitrage", format_currency(metrics.arbitrage)),
        ("Leave Hours Excluded", round(metrics.leave_hours_excluded, 2)),
        ("Leave Days Detected", metrics.leave_days_detected),
    ]
    for tier in Tier:
        rows.append((f"{tier.value} Hours", f"{metrics.hours_by_tier.get(tier, 0.0):.2f} ({percentages[tier]}%)"))
    return rows


# =============================================================================
# EXCEL REPORT GENERATION
# =============================================================================


def write_excel_summary_sheet(ws, result: "AuditResult"):
    """Write Sheet 1 - Summary: one metric per row, label in column A."""
    _bold_header(ws, ["Metric", "Value"])
    for row_idx, (label, value) in enumerate(_summary_rows(result), start=2):
        ws.cell(row=row_idx, column=1, value=label)
        ws.cell(row=row_idx, column=2, value=value)
    _fit_columns(ws, [28, 28])


def write_excel_events_sheet(ws, events: list[ClassifiedEvent]):
    """
    Write Sheet 2 - Events to Excel worksheet.

    Leave events are listed with tier cells left blank. Hours are the reported
    duration; overlap resolution only affects the summary totals.
    """
    _bold_header(ws, EVENT_HEADERS)

    for row_idx, event in enumerate(events, start=2):
        record = event.record
        row_data = [
            event.id,
            format_date_display(record.event_date) if record.event_date else None,
            record.title,
            round(record.duration_minutes / 60, 2),
            None if event.is_leave else event.tier.value,
            event.suggested_tier.value if event.suggested_tier else None,
            None if event.is_leave else event.vertical.value,
            event.business_area,
            event.confidence.value,
            "Yes" if event.is_leave else None,
            "Yes" if event.reconciled else None,
            "; ".join(event.issues) or None,
        ]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    _fit_columns(ws, [16, 12, 40, 8, 10, 14, 13, 16, 11, 7, 11, 40])


def write_excel_roles_sheet(ws, result: "AuditResult"):
    """
    Write Sheet 3 - Roles: one row per task, role columns repeated.

    A role with no tasks still gets a row so it stays visible.
    """
    _bold_header(ws, ROLE_HEADERS)

    row_idx = 2
    for role in result.roles:
        role_cells = [
            role.role_title,
            role.tier.value,
            role.vertical.value,
            round(role.hours_per_week, 2),
            round(role.cost_monthly, 2) if role.cost_monthly is not None else NOT_AVAILABLE,
        ]
        for task in role.tasks or [None]:
            row_data = role_cells + (
                [task.label, round(task.hours_per_week, 2)] if task else [None, None]
            )
            for col_idx, value in enumerate(row_data, start=1):
                ws.cell(row=row_idx, column=col_idx, value=value)
            row_idx += 1

    _fit_columns(ws, [24, 10, 13, 11, 14, 40, 16])


def create_audit_excel_report(result: "AuditResult", output_path: Path):
    """
    Create Excel audit report with three sheets.

    Sheet 1: "Summary" - headline metrics and hours by tier
    Sheet 2: "Events" - every classified event with review flags and issues
    Sheet 3: "Roles" - recommended roles and their tasks
    """
    wb = Workbook()

    ws_summary = wb.active
    ws_summary.title = "Summary"
    write_excel_summary_sheet(ws_summary, result)

    ws_events = wb.create_sheet(title="Events")
    write_excel_events_sheet(ws_events, result.events)

    ws_roles = wb.create_sheet(title="Roles")
    write_excel_roles_sheet(ws_roles, result)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    logger.info("Saved Excel report to: %s", output_path)


# =============================================================================
# MARKDOWN EXPORT
# =============================================================================


def render_markdown_report(result: "AuditResult") -> str:
    """Plain markdown version of the audit for sharing."""
    lines = ["# Delegation Audit", ""]
    lines += [f"- **{label}:** {value}" for label, value in _summary_rows(result)]

    lines += ["", "## Recommended Roles", ""]
    if not result.roles:
        lines.append("No delegable time found in this period.")
    for role in result.roles:
        cost = "cost N/A" if role.cost_monthly is None else f"{format_currency(role.cost_monthly)}/month"
        lines.append(f"### {role.role_title} ({format_hours(role.hours_per_week)}/week, {cost})")
        lines.append("")
        lines += [f"- {task.label}: {format_hours(task.hours_per_week)}/week" for task in role.tasks]
        lines.append("")

    if result.planning is not None:
        lines += ["", result.planning.assessment]

    return "\n".join(lines).rstrip() + "\n"
