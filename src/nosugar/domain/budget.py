"""Domain models for the budget model."""

import math
from dataclasses import dataclass, fields


@dataclass
class Coefficients:
    """Tunable factors read by every budget computation.

    Instances are owned by the caller and may be mutated in place; the next
    computation picks up the change.
    """

    base_male: float = 36
    base_female: float = 25
    base_other: float = 30
    bmi_under: float = 1.05
    bmi_over: float = 0.97
    bmi_obese: float = 0.93
    pancreas_youth: float = 1.05
    pancreas_middle: float = 0.95
    pancreas_senior: float = 0.9
    age_child: float = 0.92
    age_middle: float = 0.97
    age_senior: float = 0.92
    act_high: float = 1.1
    act_low: float = 0.95
    eth_south_asian: float = 0.97
    eth_east_asian: float = 0.98
    eth_hispanic: float = 0.99
    eth_black: float = 0.99
    clamp_min: float = 18
    clamp_max: float = 42

    def to_dict(self) -> dict[str, float]:
        """Return the table as a plain mapping."""
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def update(self, changes: dict[str, float]) -> None:
        """Apply known keys from ``changes`` in place."""
        names = {field.name for field in fields(self)}
        for key, value in changes.items():
            if key in names:
                setattr(self, key, float(value))

    def validate(self) -> list[str]:
        """Return integrity problems; an empty list means the table is usable."""
        problems = []
        for field in fields(self):
            value = getattr(self, field.name)
            if not math.isfinite(value) or value <= 0:
                problems.append(f"{field.name} must be a positive number")
        if self.clamp_min > self.clamp_max:
            problems.append("clamp_min must not exceed clamp_max")
        return problems


@dataclass(frozen=True)
class BudgetResult:
    """Base daily limit with the factors that produced it."""

    total: int
    breakdown: dict[str, float]
