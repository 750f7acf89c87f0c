"""
Data models for audit inputs (compensation, window) and derived outputs
(hour totals, metrics snapshot, role recommendations).
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo

from core.config import DEFAULT_TIER_RATES, WORKING_HOURS_PER_YEAR
from models.events import DELEGABLE_TIERS, HIGH_VALUE_TIERS, Tier, Vertical


class SalaryMode(str, Enum):
    ANNUAL = "annual"
    HOURLY = "hourly"


class RateKey(str, Enum):
    SENIOR_ENG = "SENIOR_ENG"
    SENIOR_BIZ = "SENIOR_BIZ"
    JUNIOR_ENG = "JUNIOR_ENG"
    JUNIOR_BIZ = "JUNIOR_BIZ"
    EA = "EA"


# (tier, vertical) -> rate key; UNIVERSAL blends the ENG and BIZ rates
_RATE_KEYS = {
    (Tier.SENIOR, Vertical.ENGINEERING): (RateKey.SENIOR_ENG,),
    (Tier.SENIOR, Vertical.BUSINESS): (RateKey.SENIOR_BIZ,),
    (Tier.SENIOR, Vertical.UNIVERSAL): (RateKey.SENIOR_ENG, RateKey.SENIOR_BIZ),
    (Tier.JUNIOR, Vertical.ENGINEERING): (RateKey.JUNIOR_ENG,),
    (Tier.JUNIOR, Vertical.BUSINESS): (RateKey.JUNIOR_BIZ,),
    (Tier.JUNIOR, Vertical.UNIVERSAL): (RateKey.JUNIOR_ENG, RateKey.JUNIOR_BIZ),
}


@dataclass(frozen=True)
class TierRates:
    """Annual full-time rate per delegable tier/vertical. None = not configured."""

    senior_eng: float | None = None
    senior_biz: float | None = None
    junior_eng: float | None = None
    junior_biz: float | None = None
    ea: float | None = None

    @classmethod
    def defaults(cls) -> "TierRates":
        return cls.from_mapping(DEFAULT_TIER_RATES)

    @classmethod
    def from_mapping(cls, rates: dict) -> "TierRates":
        """Build from a {RateKey or key name: annual rate} mapping."""
        values = {}
        for key, value in rates.items():
            rate_key = key if isinstance(key, RateKey) else RateKey(str(key).upper())
            values[rate_key.value.lower()] = float(value) if value is not None else None
        return cls(**values)

    def get(self, key: RateKey) -> float | None:
        return getattr(self, key.value.lower())

    def annual_rate(self, tier: Tier, vertical: Vertical) -> float | None:
        """
        Annual rate for delegating work of this tier and vertical.

        EA has a single rate. UNIVERSAL work uses the mean of whichever of the
        engineering/business rates are configured. Non-delegable tiers and
        unconfigured rates return None.
        """
        if tier == Tier.EA:
            return self.ea
        keys = _RATE_KEYS.get((tier, vertical))
        if keys is None:
            return None
        known = [rate for rate in (self.get(k) for k in keys) if rate is not None]
        if not known:
            return None
        return sum(known) / len(known)


@dataclass(frozen=True)
class CompensationProfile:
    """Founder compensation and delegation rates for one audit."""

    salary_annual: float | None = None
    salary_mode: SalaryMode = SalaryMode.ANNUAL
    equity_percentage: float | None = None
    company_valuation: float | None = None
    vesting_period_years: float | None = None
    tier_rates: TierRates = field(default_factory=TierRates.defaults)

    @classmethod
    def from_salary_input(
        cls, value: float | None, mode: SalaryMode = SalaryMode.ANNUAL, **kwargs
    ) -> "CompensationProfile":
        """Create from a salary entered either per year or per hour."""
        salary_annual = value
        if value is not None and mode == SalaryMode.HOURLY:
            salary_annual = value * WORKING_HOURS_PER_YEAR
        return cls(salary_annual=salary_annual, salary_mode=mode, **kwargs)

    @property
    def annual_equity_value(self) -> float | None:
        """Vested equity value per year, when all three inputs are known."""
        if (
            self.equity_percentage is None
            or self.company_valuation is None
            or not self.vesting_period_years
        ):
            return None
        return self.company_valuation * self.equity_percentage / 100 / self.vesting_period_years


@dataclass(frozen=True)
class AuditWindow:
    """Inclusive date range an audit covers."""

    start_date: date
    end_date: date
    tz: str = "UTC"

    @property
    def day_count(self) -> int:
        return max((self.end_date - self.start_date).days + 1, 1)

    @property
    def weekly_multiplier(self) -> float:
        """Scales literal-span totals to a weekly run-rate."""
        return 7 / self.day_count

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.tz)

    def local_instant(self, wall_time: datetime) -> datetime:
        """UTC instant of a naive wall-clock time in the window's zone."""
        return wall_time.replace(tzinfo=self.zone).astimezone(timezone.utc)

    @property
    def span_start(self) -> datetime:
        """Local midnight of start_date, as a UTC instant."""
        return self.local_instant(datetime.combine(self.start_date, time.min))

    @property
    def span_end(self) -> datetime:
        """Local midnight after end_date, as a UTC instant."""
        last_day = self.start_date + timedelta(days=self.day_count - 1)
        return self.local_instant(datetime.combine(last_day + timedelta(days=1), time.min))

    @property
    def span_hours(self) -> float:
        """Real elapsed hours, so 23 or 25 on a DST change day."""
        return (self.span_end - self.span_start).total_seconds() / 3600


@dataclass(frozen=True)
class TierHours:
    """Per-tier hour totals for the literal audit span."""

    hours: dict[Tier, float] = field(default_factory=lambda: {tier: 0.0 for tier in Tier})
    by_vertical: dict[tuple[Tier, Vertical], float] = field(default_factory=dict)

    def get(self, tier: Tier) -> float:
        return self.hours.get(tier, 0.0)

    @property
    def total(self) -> float:
        return sum(self.hours.values())

    @property
    def high_value(self) -> float:
        return sum(self.get(tier) for tier in HIGH_VALUE_TIERS)

    @property
    def delegable(self) -> float:
        return sum(self.get(tier) for tier in DELEGABLE_TIERS)


@dataclass(frozen=True)
class AuditMetrics:
    """Immutable metrics snapshot. Never patched, always recomputed."""

    total_hours: float
    hours_by_tier: dict[Tier, float]
    efficiency_score: int
    reclaimable_hours: float
    reclaimable_hours_per_week: float
    founder_cost_total: float | None
    delegated_cost_total: float | None
    arbitrage: float | None
    day_count: int
    planning_score: int | None = None
    leave_hours_excluded: float = 0.0
    leave_days_detected: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["hours_by_tier"] = {tier.value: hours for tier, hours in self.hours_by_tier.items()}
        return data


@dataclass(frozen=True)
class RoleTask:
    label: str
    hours_per_week: float


@dataclass(frozen=True)
class RoleRecommendation:
    """A hypothetical hire clustering same tier/vertical delegable tasks."""

    id: str
    role_title: str
    tier: Tier
    vertical: Vertical
    hours_per_week: float
    cost_monthly: float | None
    tasks: tuple[RoleTask, ...] = ()
    jd_text: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role_title": self.role_title,
            "tier": self.tier.value,
            "vertical": self.vertical.value,
            "hours_per_week": self.hours_per_week,
            "cost_monthly": self.cost_monthly,
            "tasks": [{"label": t.label, "hours_per_week": t.hours_per_week} for t in self.tasks],
            "jd_text": self.jd_text,
        }
