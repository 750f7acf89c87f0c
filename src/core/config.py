"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("AUDIT_DB_PATH", PROJECT_ROOT / "data" / "db" / "delegation-audit.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# WORK-YEAR CONSTANTS
# =============================================================================

WORKING_HOURS_PER_YEAR = 2080  # 40h x 52wk
WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
FULL_TIME_HOURS_PER_WEEK = 40
HOURS_PER_DAY = 24

# =============================================================================
# AGGREGATION
# =============================================================================

# Hours credited per day to an all-day event. 8 = one workday, 24 = whole day.
ALL_DAY_EVENT_HOURS = float(os.environ.get("ALL_DAY_EVENT_HOURS", "8"))

# All-day blocks are laid out from this hour so they contend with timed events
WORKDAY_START_HOUR = 9

# =============================================================================
# CLASSIFICATION
# =============================================================================

LARGE_MEETING_ATTENDEES = 5
DEFAULT_BUSINESS_AREA = "Operations"

# Matched case-insensitively as substrings of "title description"
BUSINESS_AREA_KEYWORDS: dict[str, list[str]] = {
    "Strategy/Vision": ["strategy", "vision", "roadmap", "planning", "okr", "goals", "priorities", "mission"],
    "Fundraising": ["investor", "pitch", "fundraising", "due diligence", "term sheet", "cap table", "board"],
    "Executive Hiring": ["executive", "c-level", "vp ", "director", "leadership", "senior hire"],
    "Key Relationships": ["partner ceo", "board member", "advisor", "mentor"],
    "Product": ["feature", "user story", "sprint", "backlog", "requirements", "prd", "prioritization"],
    "Design": ["figma", "design", "ux", "mockup", "wireframe", "prototype", "user research", "usability"],
    "Development": ["code", "bug", "deploy", "testing", "qa", "technical", "programming", "architecture"],
    "Sales": ["sales", "proposal", "deal", "prospect", "demo", "closing", "pipeline", "outreach", "crm"],
    "Marketing": ["content", "blog", "social", "campaign", "seo", "ads", "brand", "copywriting", "newsletter"],
    "Customer Success": ["support", "customer", "ticket", "onboarding", "retention", "churn", "renewal"],
    "Partnerships": ["partnership", "integration", "channel", "reseller", "affiliate", "co-marketing"],
    "Data/Analytics": ["dashboard", "metrics", "kpi", "analytics", "reporting", "sql"],
    "Finance": ["invoice", "expense", "payroll", "accounting", "budget", "billing", "taxes", "bookkeeping"],
    "Legal/Admin": ["contract", "nda", "compliance", "agreement", "legal", "policy"],
    "Recruiting Ops": ["resume", "sourcing", "interview", "applicant", "job posting", "screening"],
    "Operations": ["scheduling", "admin", "travel", "calendar", "logistics", "office", "errands", "facilities"],
}

ENGINEERING_AREAS = {"Development", "Design", "Data/Analytics"}

# Checked in order, last match wins; attendee heuristics applied afterwards
TIER_KEYWORDS: dict[str, list[str]] = {
    "UNIQUE": ["board", "investor", "fundraise", "strategic", "vision", "deep work", "strategy", "my plan"],
    "FOUNDER": ["leadership", "executive", "hiring senior", "partner ceo", "advisor", "offsite"],
    "SENIOR": ["architecture", "technical review", "project planning", "client meeting", "code review"],
    "JUNIOR": ["bug fix", "documentation", "testing", "qa", "status", "sync", "standup", "data entry"],
    "EA": ["scheduling", "travel", "expenses", "admin", "calendar", "invoice", "payroll", "receipts"],
}

# =============================================================================
# LEAVE DETECTION
# =============================================================================

LEAVE_KEYWORDS: dict[str, list[str]] = {
    "vacation": ["vacation", "holiday", "annual leave", "pto", "paid time off"],
    "out_of_office": ["ooo", "out of office", "traveling", "travel day"],
    "leave_types": [
        "sick leave", "sick day", "personal day", "bereavement",
        "parental leave", "maternity", "paternity",
    ],
    "blocked_time": ["time off", "day off", "off work", "not working", "unavailable"],
}

OUT_OF_OFFICE_EVENT_TYPE = "outOfOffice"

# =============================================================================
# PLANNING SCORE
# =============================================================================

VAGUE_TITLES = [
    "call", "meeting", "chat", "sync", "catch up", "touch base", "check in",
    "tbd", "busy", "blocked", "1:1", "quick call", "quick chat",
]

# =============================================================================
# ROLE RECOMMENDATIONS
# =============================================================================

FULL_TIME_THRESHOLD_HOURS = 30  # jd says "Full-time" at or above this load
JD_MAX_TASKS = 10
UNTITLED_TASK_LABEL = "Untitled Task"

DEFAULT_TIER_RATES = {
    "SENIOR_ENG": 100_000.0,
    "SENIOR_BIZ": 100_000.0,
    "JUNIOR_ENG": 50_000.0,
    "JUNIOR_BIZ": 50_000.0,
    "EA": 30_000.0,
}

# =============================================================================
# API CONFIGURATION
# =============================================================================

AUDIT_API_KEY = os.environ.get("AUDIT_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_EVENTS_PER_REQUEST = int(os.environ.get("MAX_EVENTS_PER_REQUEST", "5000"))
API_VERSION = "1.0.0"
