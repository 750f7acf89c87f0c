"""Pydantic request/response models for audit and role endpoints."""

from datetime import date

from pydantic import BaseModel, Field


class EventOverride(BaseModel):
    """A user correction to one classified event."""

    event_id: str
    tier: str | None = None
    vertical: str | None = None
    is_leave: bool | None = None
    reconciled: bool | None = None


class AuditRequest(BaseModel):
    """Run an audit over calendar events fetched for [start_date, end_date]."""

    start_date: date
    end_date: date
    timezone: str = "UTC"
    events: list[dict] = Field(default_factory=list)
    salary: float | None = None
    salary_mode: str = "annual"
    equity_percentage: float | None = None
    company_valuation: float | None = None
    vesting_period_years: float | None = None
    tier_rates: dict[str, float | None] | None = None
    team_composition: dict[str, int] | None = None
    solo_founder: bool | None = None
    exclusions: list[str] = Field(default_factory=list)
    overrides: list[EventOverride] = Field(default_factory=list)


class RoleTaskModel(BaseModel):
    label: str
    hours_per_week: float


class RoleModel(BaseModel):
    id: str
    role_title: str
    tier: str
    vertical: str
    hours_per_week: float
    cost_monthly: float | None = None
    tasks: list[RoleTaskModel] = Field(default_factory=list)
    jd_text: str = ""


class EventResult(BaseModel):
    id: str
    title: str
    tier: str | None  # None for leave
    suggested_tier: str | None
    vertical: str | None
    business_area: str
    confidence: str
    is_leave: bool
    leave_detection_method: str
    reconciled: bool
    overridden: bool
    planning_score: int
    issues: list[str] = Field(default_factory=list)


class PlanningResult(BaseModel):
    score: int
    label: str
    components: dict[str, int]
    assessment: str


class AuditResponse(BaseModel):
    """Metrics snapshot, role recommendations and per-event classifications."""

    metrics: dict
    tier_percentages: dict[str, int]
    roles: list[RoleModel]
    events: list[EventResult]
    planning: PlanningResult | None = None
    total_savings: dict


class RoleMoveRequest(BaseModel):
    roles: list[RoleModel]
    source_role_id: str
    target_role_id: str
    task_index: int
    tier_rates: dict[str, float | None] | None = None


class RoleReorderRequest(BaseModel):
    roles: list[RoleModel]
    from_index: int
    to_index: int


class RolesResponse(BaseModel):
    roles: list[RoleModel]
