"""Tests for the consumption aggregator."""

import random
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

from nosugar.domain.ledger import ConsumptionEntry
from nosugar.services.stats import (
    budget_progress,
    day_key,
    last_7_day_series,
    rollup_by_day,
    today_total,
    week_summary,
)


def _entry(logged_at: datetime, grams: int, item: str = "Soda") -> ConsumptionEntry:
    return ConsumptionEntry(
        id=uuid4(), logged_at=logged_at, item=item, sugar_g=grams, source="manual"
    )


def test_rollup_sums_entries_per_day() -> None:
    entries = [
        _entry(datetime(2024, 5, 10, 8, tzinfo=UTC), 10),
        _entry(datetime(2024, 5, 10, 20, tzinfo=UTC), 15),
        _entry(datetime(2024, 5, 9, 12, tzinfo=UTC), 7),
        _entry(datetime(2024, 5, 10, 21, tzinfo=UTC), 15),
    ]

    assert rollup_by_day(entries, UTC) == {"2024-05-10": 40, "2024-05-09": 7}


def test_rollup_is_independent_of_entry_order() -> None:
    base = datetime(2024, 5, 1, tzinfo=UTC)
    entries = [_entry(base + timedelta(hours=7 * i), i % 13 + 1) for i in range(60)]
    shuffled = entries[:]
    random.Random(7).shuffle(shuffled)

    assert rollup_by_day(entries, UTC) == rollup_by_day(shuffled, UTC)
    assert rollup_by_day(entries, UTC) == rollup_by_day(reversed(entries), UTC)


def test_day_key_uses_local_midnight() -> None:
    new_york = ZoneInfo("America/New_York")
    late_evening = datetime(2024, 3, 10, 3, 0, tzinfo=UTC)

    assert day_key(late_evening, UTC) == "2024-03-10"
    assert day_key(late_evening, new_york) == "2024-03-09"


def test_last_7_day_series_shape() -> None:
    today = date(2024, 5, 10)
    entries = [
        _entry(datetime(2024, 5, 10, 9, tzinfo=UTC), 45),
        _entry(datetime(2024, 5, 7, 9, tzinfo=UTC), 30),
        _entry(datetime(2024, 5, 3, 9, tzinfo=UTC), 99),
    ]

    series = last_7_day_series(entries, 30, today=today, tz=UTC)

    assert [point.day for point in series] == [
        "2024-05-04",
        "2024-05-05",
        "2024-05-06",
        "2024-05-07",
        "2024-05-08",
        "2024-05-09",
        "2024-05-10",
    ]
    assert [point.total for point in series] == [0, 0, 0, 30, 0, 0, 45]
    assert all(point.limit == 30 for point in series)
    assert [point.over_limit for point in series] == [
        False,
        False,
        False,
        False,
        False,
        False,
        True,
    ]


def test_last_7_day_series_defaults_to_today() -> None:
    series = last_7_day_series([], 25, tz=UTC)

    assert len(series) == 7
    assert series[-1].day == datetime.now(tz=UTC).date().isoformat()
    assert all(point.total == 0 for point in series)


def test_today_total_covers_whole_local_day() -> None:
    now = datetime(2024, 5, 10, 12, tzinfo=UTC)
    entries = [
        _entry(datetime(2024, 5, 10, 0, 0, tzinfo=UTC), 5),
        _entry(datetime(2024, 5, 10, 23, 59, 59, 999000, tzinfo=UTC), 7),
        _entry(datetime(2024, 5, 11, 0, 0, tzinfo=UTC), 100),
        _entry(datetime(2024, 5, 9, 23, 59, 59, tzinfo=UTC), 100),
    ]

    assert today_total(entries, now=now, tz=UTC) == 12


def test_today_total_agrees_with_rollup() -> None:
    tz = ZoneInfo("Europe/Berlin")
    now = datetime(2024, 5, 10, 12, tzinfo=tz)
    entries = [
        _entry(now - timedelta(hours=hours), 3 + hours) for hours in range(0, 40, 3)
    ]

    rollup = rollup_by_day(entries, tz)

    assert today_total(entries, now=now, tz=tz) == rollup["2024-05-10"]


def test_week_summary_totals_series() -> None:
    entries = [
        _entry(datetime(2024, 5, 10, 9, tzinfo=UTC), 45),
        _entry(datetime(2024, 5, 8, 9, tzinfo=UTC), 20),
    ]
    series = last_7_day_series(entries, 30, today=date(2024, 5, 10), tz=UTC)

    summary = week_summary(series)

    assert summary.total == 65
    assert summary.target == 210
    assert summary.days_over == 1


def test_budget_progress_bands() -> None:
    assert budget_progress(10, 40).status == "ok"
    assert budget_progress(32, 40).status == "warning"
    assert budget_progress(40, 40).status == "over"

    over = budget_progress(50, 40)
    assert over.percent == 100
    assert over.limit_reached is True
    assert budget_progress(39, 40).limit_reached is False
