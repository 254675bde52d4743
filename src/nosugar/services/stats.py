"""Aggregation of ledger entries into daily and weekly totals."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from nosugar.domain.ledger import ConsumptionEntry
from nosugar.domain.stats import BudgetProgress, DaySeriesPoint, WeekSummary
from nosugar.services.budget import round_half_up

SERIES_DAYS = 7
WARNING_PERCENT = 80
FULL_PERCENT = 100


def day_key(instant: datetime, tz: tzinfo | None = None) -> str:
    """Return the ISO calendar date of an instant in ``tz`` (None: local zone)."""
    return instant.astimezone(tz).date().isoformat()


def rollup_by_day(
    entries: Iterable[ConsumptionEntry], tz: tzinfo | None = None
) -> dict[str, int]:
    """Sum sugar grams per calendar day."""
    totals: dict[str, int] = {}
    for entry in entries:
        key = day_key(entry.logged_at, tz)
        totals[key] = totals.get(key, 0) + entry.sugar_g
    return totals


def last_7_day_series(
    entries: Iterable[ConsumptionEntry],
    current_limit: int,
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> list[DaySeriesPoint]:
    """Return seven daily points, oldest first, ending today.

    Every point is compared against ``current_limit``; limits in effect on
    past days are not reconstructed.
    """
    end = today or datetime.now(tz=tz).date()
    start = end - timedelta(days=SERIES_DAYS - 1)
    rollup = rollup_by_day(entries, tz)
    series = []
    for offset in range(SERIES_DAYS):
        key = (start + timedelta(days=offset)).isoformat()
        total = rollup.get(key, 0)
        series.append(
            DaySeriesPoint(
                day=key,
                total=total,
                limit=current_limit,
                over_limit=total > current_limit,
            )
        )
    return series


def today_total(
    entries: Iterable[ConsumptionEntry],
    *,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> int:
    """Sum entries logged between local midnight and 23:59:59.999 today."""
    local_now = (now or datetime.now(tz=tz)).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = local_now.replace(hour=23, minute=59, second=59, microsecond=999000)
    return sum(entry.sugar_g for entry in entries if start <= entry.logged_at <= end)


def week_summary(series: list[DaySeriesPoint]) -> WeekSummary:
    """Total the series against seven times the daily limit."""
    limit = series[-1].limit if series else 0
    return WeekSummary(
        total=sum(point.total for point in series),
        target=limit * SERIES_DAYS,
        days_over=sum(1 for point in series if point.over_limit),
    )


def budget_progress(consumed: int, limit: int) -> BudgetProgress:
    """Return the share of the limit consumed and its status band."""
    percent = FULL_PERCENT if limit <= 0 else round_half_up(consumed / limit * 100)
    if percent < WARNING_PERCENT:
        status = "ok"
    elif percent < FULL_PERCENT:
        status = "warning"
    else:
        status = "over"
    return BudgetProgress(
        consumed=consumed,
        limit=limit,
        percent=min(FULL_PERCENT, percent),
        status=status,
        limit_reached=consumed >= limit,
    )
