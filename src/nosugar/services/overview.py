"""Budget overview combining the model, activity bonus and ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from nosugar.domain.budget import BudgetResult
from nosugar.domain.stats import BudgetProgress, DaySeriesPoint, WeekSummary
from nosugar.services.activity import ActivityBonusService, apply_daily_cap
from nosugar.services.budget import compute_base_limit
from nosugar.services.coaching import coach_tip
from nosugar.services.ledger import LedgerService
from nosugar.services.profiles import CoefficientService, ProfileService
from nosugar.services.stats import (
    budget_progress,
    last_7_day_series,
    today_total,
    week_summary,
)


@dataclass
class BudgetOverview:
    """Everything the budget screen shows for today."""

    base: BudgetResult
    bonus: int
    effective_limit: int
    today_total: int
    progress: BudgetProgress
    tip: str
    week: list[DaySeriesPoint]
    week_summary: WeekSummary


@dataclass
class WeekView:
    """Seven-day series with its summary."""

    series: list[DaySeriesPoint]
    summary: WeekSummary


@dataclass
class BudgetService:
    """Computes limits and progress for the current user."""

    profile_service: ProfileService
    coefficient_service: CoefficientService
    activity_service: ActivityBonusService
    ledger_service: LedgerService
    timezone_name: str = "UTC"

    def base_limit(self) -> BudgetResult:
        """Return the base limit for the stored profile and coefficients."""
        return compute_base_limit(
            self.profile_service.get_profile(), self.coefficient_service.get()
        )

    def effective_limit(self, today: date | None = None) -> int:
        """Return the base limit plus today's capped activity bonus."""
        bonus = self.activity_service.bonus_for(today or self._now().date())
        return apply_daily_cap(self.base_limit().total, bonus)

    def week(self, now: datetime | None = None) -> WeekView:
        """Return the trailing seven days against the current limit."""
        tz = ZoneInfo(self.timezone_name)
        current = (now or self._now()).astimezone(tz)
        series = last_7_day_series(
            self.ledger_service.list_entries(),
            self.effective_limit(current.date()),
            today=current.date(),
            tz=tz,
        )
        return WeekView(series=series, summary=week_summary(series))

    def overview(self, now: datetime | None = None) -> BudgetOverview:
        """Return today's budget, consumption and weekly series."""
        tz = ZoneInfo(self.timezone_name)
        current = (now or self._now()).astimezone(tz)
        base = self.base_limit()
        bonus = self.activity_service.bonus_for(current.date())
        limit = apply_daily_cap(base.total, bonus)
        entries = self.ledger_service.list_entries()
        consumed = today_total(entries, now=current, tz=tz)
        series = last_7_day_series(entries, limit, today=current.date(), tz=tz)
        return BudgetOverview(
            base=base,
            bonus=bonus,
            effective_limit=limit,
            today_total=consumed,
            progress=budget_progress(consumed, limit),
            tip=coach_tip(consumed, limit),
            week=series,
            week_summary=week_summary(series),
        )

    def _now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone_name))
