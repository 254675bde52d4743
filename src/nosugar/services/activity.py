"""Activity bonus engine and its history bookkeeping."""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from nosugar.domain.activity import ActivityBonus
from nosugar.services.budget import round_half_up

MIN_QUALIFYING_KCAL = 100
GRAMS_PER_10_KCAL = 0.5
DAILY_BONUS_CAP_G = 20
WEEKLY_BONUS_CAP_G = 60
DAILY_LIMIT_CEILING = 1.3

_logger = logging.getLogger(__name__)


def compute_activity_bonus(
    kcal_today: float, prior_six_days_bonuses: Iterable[int]
) -> ActivityBonus:
    """Return today's bonus after the daily and trailing seven-day caps."""
    raw = 0
    if math.isfinite(kcal_today) and kcal_today >= MIN_QUALIFYING_KCAL:
        raw = round_half_up(kcal_today / 10 * GRAMS_PER_10_KCAL)
    raw = min(raw, DAILY_BONUS_CAP_G)
    headroom = max(0, WEEKLY_BONUS_CAP_G - sum(prior_six_days_bonuses))
    granted = min(raw, headroom)
    return ActivityBonus(granted=granted, weekly_remaining=headroom - granted)


def apply_daily_cap(base_limit: int, bonus: int) -> int:
    """Add the bonus without exceeding 130% of the base limit."""
    return min(base_limit + bonus, round_half_up(base_limit * DAILY_LIMIT_CEILING))


class ActivityBonusRepository(Protocol):
    """Persistence interface for granted bonuses keyed by ISO day."""

    def list_bonuses(self, start: date, end: date) -> dict[str, int]:
        """Return bonuses for days in [start, end]."""

    def upsert_bonus(self, day: date, grams: int) -> None:
        """Store the bonus for a day, replacing any previous value."""


@dataclass
class ActivityBonusService:
    """Records daily activity and keeps the bonus history."""

    repository: ActivityBonusRepository
    timezone_name: str = "UTC"

    def record_activity(self, kcal: float, today: date | None = None) -> ActivityBonus:
        """Compute today's bonus from active energy and persist it."""
        day = today or self._today()
        history = self.repository.list_bonuses(
            day - timedelta(days=6), day - timedelta(days=1)
        )
        prior = [
            history.get((day - timedelta(days=offset)).isoformat(), 0)
            for offset in range(1, 7)
        ]
        bonus = compute_activity_bonus(kcal, prior)
        self.repository.upsert_bonus(day, bonus.granted)
        _logger.info(
            "Activity bonus recorded: day=%s kcal=%s granted=%s remaining=%s",
            day.isoformat(),
            kcal,
            bonus.granted,
            bonus.weekly_remaining,
        )
        return bonus

    def bonus_for(self, day: date | None = None) -> int:
        """Return the bonus stored for a day, or 0."""
        resolved = day or self._today()
        history = self.repository.list_bonuses(resolved, resolved)
        return history.get(resolved.isoformat(), 0)

    def _today(self) -> date:
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
