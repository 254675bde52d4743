"""Tests for the activity bonus engine."""

from datetime import date

import pytest

from nosugar.services.activity import (
    ActivityBonusService,
    apply_daily_cap,
    compute_activity_bonus,
)
from nosugar.services.budget import round_half_up
from tests.conftest import InMemoryActivityRepository


@pytest.mark.parametrize(
    ("kcal", "expected"),
    [
        (0, 0),
        (99, 0),
        (100, 5),
        (150, 8),
        (399, 20),
        (1000, 20),
        (float("nan"), 0),
    ],
)
def test_bonus_from_energy(kcal: float, expected: int) -> None:
    assert compute_activity_bonus(kcal, []).granted == expected


def test_weekly_cap_limits_granted_bonus() -> None:
    bonus = compute_activity_bonus(1000, [10, 10, 10, 10, 10, 8])

    assert bonus.granted == 2
    assert bonus.weekly_remaining == 0


def test_weekly_cap_reports_remaining_headroom() -> None:
    bonus = compute_activity_bonus(400, [10, 0, 0, 0, 0, 0])

    assert bonus.granted == 20
    assert bonus.weekly_remaining == 30


def test_exhausted_week_grants_nothing() -> None:
    bonus = compute_activity_bonus(800, [20, 20, 20, 20, 0, 0])

    assert bonus.granted == 0
    assert bonus.weekly_remaining == 0


def test_apply_daily_cap_examples() -> None:
    assert apply_daily_cap(30, 0) == 30
    assert apply_daily_cap(30, 5) == 35
    assert apply_daily_cap(30, 20) == 39
    assert apply_daily_cap(42, 20) == 55


@pytest.mark.parametrize("base", range(18, 43))
def test_apply_daily_cap_bounds(base: int) -> None:
    ceiling = round_half_up(base * 1.3)
    for bonus in range(31):
        effective = apply_daily_cap(base, bonus)
        assert base <= effective <= ceiling


def test_record_activity_uses_prior_six_days() -> None:
    repository = InMemoryActivityRepository(
        bonuses={
            "2024-05-03": 20,
            "2024-05-04": 20,
            "2024-05-05": 10,
            "2024-05-06": 10,
            "2024-05-07": 10,
            "2024-05-08": 0,
            "2024-05-09": 8,
        }
    )
    service = ActivityBonusService(repository)

    bonus = service.record_activity(1000, today=date(2024, 5, 10))

    # 2024-05-03 is outside the window: 60 - (20 + 10 + 10 + 10 + 0 + 8) = 2
    assert bonus.granted == 2
    assert repository.bonuses["2024-05-10"] == 2


def test_record_activity_overwrites_same_day() -> None:
    repository = InMemoryActivityRepository()
    service = ActivityBonusService(repository)
    today = date(2024, 5, 10)

    first = service.record_activity(200, today=today)
    second = service.record_activity(200, today=today)
    third = service.record_activity(600, today=today)

    assert first == second
    assert first.granted == 10
    assert third.granted == 20
    assert repository.bonuses == {"2024-05-10": 20}


def test_bonus_for_defaults_to_zero() -> None:
    repository = InMemoryActivityRepository(bonuses={"2024-05-10": 12})
    service = ActivityBonusService(repository)

    assert service.bonus_for(date(2024, 5, 10)) == 12
    assert service.bonus_for(date(2024, 5, 11)) == 0
