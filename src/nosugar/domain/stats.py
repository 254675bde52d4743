"""Domain models for statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DaySeriesPoint:
    """Total sugar for one calendar day compared against a limit."""

    day: str
    total: int
    limit: int
    over_limit: bool


@dataclass(frozen=True)
class WeekSummary:
    """Seven-day total against seven times the daily limit."""

    total: int
    target: int
    days_over: int


@dataclass(frozen=True)
class BudgetProgress:
    """How much of today's limit has been consumed."""

    consumed: int
    limit: int
    percent: int
    status: str
    limit_reached: bool
