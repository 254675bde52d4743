"""Domain models for the activity bonus."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActivityBonus:
    """Bonus granted for today and what is left of the weekly allowance."""

    granted: int
    weekly_remaining: int
