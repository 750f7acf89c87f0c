#!/usr/bin/env python3
"""
Run a delegation audit over an exported calendar.

Reads a JSON file of calendar event payloads (a list, or an object with an
"events" list), classifies every event, computes metrics and role
recommendations, and writes an Excel workbook plus a markdown summary.

Usage:
    uv run python src/scripts/run_audit.py events.json --start 2025-11-03 --end 2025-11-09 --salary 180000
"""

import argparse
import json
import sys
import traceback
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR
from core.validation import normalize_salary_mode
from models.audit import AuditWindow, CompensationProfile
from services.audit import run_audit
from services.reports import create_audit_excel_report, format_currency, format_hours, render_markdown_report


def parse_date_arg(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def load_events(path: Path) -> list[dict]:
    """Load event payloads from a JSON export."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("events", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of events")
    return data


def main(args: argparse.Namespace):
    """Main entry point."""
    try:
        # 1. Load events and build audit inputs
        window = AuditWindow(args.start, args.end, args.timezone)
        print(f"Auditing {args.start} to {args.end} ({window.day_count} day(s))")

        raw_events = load_events(args.events_file)
        print(f"Loaded {len(raw_events)} event(s) from {args.events_file}")

        compensation = CompensationProfile.from_salary_input(
            args.salary,
            normalize_salary_mode(args.salary_mode),
            equity_percentage=args.equity,
            company_valuation=args.valuation,
            vesting_period_years=args.vesting_years,
        )

        # 2. Classify, aggregate, compute metrics and roles
        result = run_audit(
            raw_events,
            window,
            compensation,
            solo_founder=args.solo_founder,
            exclusions=args.exclude,
        )

        metrics = result.metrics
        leave_count = sum(1 for e in result.events if e.is_leave)
        print(f"\nClassified events: {len(result.events)} ({leave_count} leave)")
        print(f"Events with data issues: {result.issue_count}")
        print(f"Total hours: {format_hours(metrics.total_hours)}")
        print(f"Efficiency score: {metrics.efficiency_score}%")
        print(f"Reclaimable: {format_hours(metrics.reclaimable_hours_per_week)}/week")
        print(f"Delegation arbitrage: {format_currency(metrics.arbitrage)}/year")

        if result.roles:
            print(f"\nRecommended roles ({len(result.roles)}):")
            for role in result.roles:
                print(f"  {role.role_title}: {format_hours(role.hours_per_week)}/week, {len(role.tasks)} task(s)")
        else:
            print("\nNo delegable time found.")

        # 3. Write reports
        output_dir = args.output or OUTPUT_DIR / "audits"
        output_dir.mkdir(parents=True, exist_ok=True)
        stem = f"delegation-audit-{args.start.isoformat()}-{args.end.isoformat()}"

        excel_path = output_dir / f"{stem}.xlsx"
        create_audit_excel_report(result, excel_path)
        print(f"\nSaved Excel report to: {excel_path}")

        markdown_path = output_dir / f"{stem}.md"
        markdown_path.write_text(render_markdown_report(result))
        print(f"Saved markdown report to: {markdown_path}")

        print("\nDone!")

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run a delegation audit over exported calendar events")
    parser.add_argument("events_file", type=Path, help="JSON file of calendar event payloads")
    parser.add_argument("--start", type=parse_date_arg, required=True, help="First audited day (YYYY-MM-DD)")
    parser.add_argument("--end", type=parse_date_arg, required=True, help="Last audited day (YYYY-MM-DD)")
    parser.add_argument("--timezone", default="UTC", help="IANA timezone of the audit window")
    parser.add_argument("--salary", type=float, help="Founder salary (annual, or hourly with --salary-mode hourly)")
    parser.add_argument("--salary-mode", choices=["annual", "hourly"], default="annual")
    parser.add_argument("--equity", type=float, help="Founder equity percentage")
    parser.add_argument("--valuation", type=float, help="Company valuation")
    parser.add_argument("--vesting-years", type=float, help="Equity vesting period in years")
    parser.add_argument("--solo-founder", action="store_true", help="No co-founder to hand FOUNDER work to")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Skip events whose title contains this text (repeatable)",
    )
    parser.add_argument("--output", type=Path, help="Output directory (default: output/audits)")
    args = parser.parse_args()

    main(args)
