"""Domain models for the user profile."""

from dataclasses import dataclass
from enum import Enum


class Sex(str, Enum):
    """Sex as entered during onboarding."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNSPECIFIED = "unspecified"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class Profile:
    """Snapshot of the attributes the budget model reads."""

    sex: Sex = Sex.UNSPECIFIED
    age: int = 30
    height_cm: float = 175
    weight_kg: float = 75
    ethnicity: str | None = "prefer-not-to-say"
    activity: ActivityLevel = ActivityLevel.MODERATE
    use_ethnicity_adjustment: bool = False
    name: str = ""
    consent_analytics: bool = False


@dataclass(frozen=True)
class Connections:
    """Data-source toggles. Stored only, nothing is synced."""

    uber_eats: bool = False
    banking: bool = False
    apple_health: bool = False
