"""Tests for report formatting and Excel/markdown output."""

import pytest
from openpyxl import load_workbook

from models.audit import CompensationProfile
from services.audit import run_audit
from services.reports import (
    create_audit_excel_report,
    format_currency,
    format_hours,
    render_markdown_report,
)


@pytest.fixture
def audit_result(sample_payloads, week_window):
    return run_audit(sample_payloads, week_window, CompensationProfile(salary_annual=208_000))


@pytest.mark.parametrize(
    "value,expected",
    [(None, "N/A"), (0, "$0"), (1234.4, "$1,234"), (-500, "-$500"), (2_500_000, "$2,500,000")],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_hours():
    assert format_hours(12) == "12.0h"
    assert format_hours(7.54) == "7.5h"


def test_excel_report_sheets(audit_result, tmp_path):
    output_path = tmp_path / "reports" / "audit.xlsx"

    create_audit_excel_report(audit_result, output_path)

    wb = load_workbook(output_path)
    assert wb.sheetnames == ["Summary", "Events", "Roles"]

    summary = {row[0]: row[1] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Efficiency Score"] == "40%"
    assert summary["Delegation Arbitrage"] == "$11,100"
    assert summary["Leave Days Detected"] == 1

    events = list(wb["Events"].iter_rows(values_only=True))
    assert events[0][0] == "Event ID"
    assert len(events) == len(audit_result.events) + 1
    vacation = next(row for row in events if row[0] == "vacation")
    assert vacation[4] is None  # leave has no tier
    assert vacation[9] == "Yes"

    roles = list(wb["Roles"].iter_rows(min_row=2, values_only=True))
    assert [row[0] for row in roles] == ["Executive Assistant", "Junior Business", "Senior Engineering"]


def test_markdown_report(audit_result):
    markdown = render_markdown_report(audit_result)

    assert markdown.startswith("# Delegation Audit")
    assert "**Efficiency Score:** 40%" in markdown
    assert "### Senior Engineering (1.0h/week, $208/month)" in markdown
    assert "## Your Planning Score" in markdown


def test_markdown_report_without_roles(week_window):
    markdown = render_markdown_report(run_audit([], week_window))

    assert "No delegable time found" in markdown
    assert "**Founder Cost (Annual):** N/A" in markdown
