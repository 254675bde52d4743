"""Budget model turning a profile and coefficients into a base daily limit.

All factors are multiplicative. The pancreas-capacity factor is clamped to a
fixed range that the coefficient table cannot widen.
"""

import math

from nosugar.domain.budget import BudgetResult, Coefficients
from nosugar.domain.profile import ActivityLevel, Profile, Sex

PANCREAS_MIN = 0.8
PANCREAS_MAX = 1.1

BMI_UNDERWEIGHT = 18.5
BMI_OVERWEIGHT = 25
BMI_OBESE = 30

AGE_CHILD = 18
AGE_YOUTH = 20
AGE_PANCREAS_MIDDLE = 40
AGE_MIDDLE = 45
AGE_SENIOR = 60

# Evaluated in order; the first group with a matching keyword wins.
ETHNICITY_GROUPS: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("south asian", "indian", "pakistani", "bangladesh", "sri lanka"),
        "eth_south_asian",
    ),
    (("east asian", "chinese", "japanese", "korean"), "eth_east_asian"),
    (("hispanic", "latino"), "eth_hispanic"),
    (("african", "black"), "eth_black"),
)


def compute_base_limit(profile: Profile, coefficients: Coefficients) -> BudgetResult:
    """Return the clamped base limit in grams and its factor breakdown."""
    base = base_for_sex(profile.sex, coefficients)
    bmi = bmi_of(profile.height_cm, profile.weight_kg)
    bmi_adj = bmi_factor(bmi, coefficients)
    pancreas_adj = pancreas_capacity_factor(profile.age, bmi, coefficients)
    age_adj = age_factor(profile.age, coefficients)
    act_adj = activity_factor(profile.activity, coefficients)
    eth_adj = (
        ethnicity_factor(profile.ethnicity, coefficients)
        if profile.use_ethnicity_adjustment
        else 1.0
    )

    limit = base * bmi_adj * pancreas_adj * age_adj * act_adj * eth_adj
    total = round_half_up(clamp(limit, coefficients.clamp_min, coefficients.clamp_max))

    return BudgetResult(
        total=total,
        breakdown={
            "base": base,
            "bmi_adj": round2(bmi_adj),
            "pancreas_adj": round2(pancreas_adj),
            "age_adj": round2(age_adj),
            "act_adj": round2(act_adj),
            "eth_adj": round2(eth_adj),
            "bmi": round2(bmi),
        },
    )


def base_for_sex(sex: Sex, coefficients: Coefficients) -> float:
    """Select the base allowance for a sex; other and unspecified share one."""
    if sex == Sex.MALE:
        return coefficients.base_male
    if sex == Sex.FEMALE:
        return coefficients.base_female
    return coefficients.base_other


def bmi_of(height_cm: float, weight_kg: float) -> float:
    """Return body-mass index, or NaN when the inputs cannot produce one."""
    if not _is_positive(height_cm) or not math.isfinite(weight_kg):
        return math.nan
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def bmi_factor(bmi: float, coefficients: Coefficients) -> float:
    """Return the BMI band multiplier; the normal band is neutral."""
    if bmi < BMI_UNDERWEIGHT:
        return coefficients.bmi_under
    if BMI_OVERWEIGHT <= bmi < BMI_OBESE:
        return coefficients.bmi_over
    if bmi >= BMI_OBESE:
        return coefficients.bmi_obese
    return 1.0


def pancreas_capacity_factor(
    age: int, bmi: float, coefficients: Coefficients
) -> float:
    """Return the age-by-BMI capacity proxy clamped to [0.8, 1.1]."""
    age_part = 1.0
    if age < AGE_YOUTH:
        age_part = coefficients.pancreas_youth
    elif AGE_PANCREAS_MIDDLE <= age < AGE_SENIOR:
        age_part = coefficients.pancreas_middle
    elif age >= AGE_SENIOR:
        age_part = coefficients.pancreas_senior

    bmi_part = 1.0
    if BMI_OVERWEIGHT <= bmi < BMI_OBESE:
        bmi_part = coefficients.bmi_over
    elif bmi >= BMI_OBESE:
        bmi_part = coefficients.bmi_obese

    return clamp(age_part * bmi_part, PANCREAS_MIN, PANCREAS_MAX)


def age_factor(age: int, coefficients: Coefficients) -> float:
    """Return the age-only multiplier."""
    if age < AGE_CHILD:
        return coefficients.age_child
    if AGE_MIDDLE <= age < AGE_SENIOR:
        return coefficients.age_middle
    if age >= AGE_SENIOR:
        return coefficients.age_senior
    return 1.0


def activity_factor(level: ActivityLevel, coefficients: Coefficients) -> float:
    """Return the activity multiplier; moderate is exactly 1."""
    if level == ActivityLevel.HIGH:
        return coefficients.act_high
    if level == ActivityLevel.MODERATE:
        return 1.0
    return coefficients.act_low


def ethnicity_factor(ethnicity: str | None, coefficients: Coefficients) -> float:
    """Match a free-text label against the ethnicity keyword groups."""
    if not ethnicity:
        return 1.0
    label = ethnicity.lower()
    for keywords, attribute in ETHNICITY_GROUPS:
        if any(keyword in label for keyword in keywords):
            return getattr(coefficients, attribute)
    return 1.0


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` to [low, high], letting NaN through."""
    if math.isnan(value):
        return value
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def round2(value: float) -> float:
    """Round to two decimals for display, letting non-finite values through."""
    if not math.isfinite(value):
        return value
    return math.floor(value * 100 + 0.5) / 100


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0
