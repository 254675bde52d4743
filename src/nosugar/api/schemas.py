"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from nosugar.domain.profile import ActivityLevel, Connections, Profile, Sex


class ProfilePayload(BaseModel):
    """Profile as sent by the onboarding form."""

    sex: Sex = Sex.UNSPECIFIED
    age: int = Field(default=30, ge=0)
    height_cm: float = Field(default=175, gt=0, allow_inf_nan=False)
    weight_kg: float = Field(default=75, gt=0, allow_inf_nan=False)
    ethnicity: str | None = "prefer-not-to-say"
    activity: ActivityLevel = ActivityLevel.MODERATE
    use_ethnicity_adjustment: bool = False
    name: str = ""
    consent_analytics: bool = False

    def to_domain(self) -> Profile:
        """Return the domain profile."""
        return Profile(**self.model_dump())

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfilePayload":
        """Build a payload from a domain profile."""
        return cls(
            sex=profile.sex,
            age=profile.age,
            height_cm=profile.height_cm,
            weight_kg=profile.weight_kg,
            ethnicity=profile.ethnicity,
            activity=profile.activity,
            use_ethnicity_adjustment=profile.use_ethnicity_adjustment,
            name=profile.name,
            consent_analytics=profile.consent_analytics,
        )


class ConnectionsPayload(BaseModel):
    """Data-source toggles."""

    uber_eats: bool = False
    banking: bool = False
    apple_health: bool = False

    def to_domain(self) -> Connections:
        """Return the domain toggles."""
        return Connections(**self.model_dump())


class ManualEntryRequest(BaseModel):
    """Manually typed ledger entry; sugar may carry a unit suffix."""

    item: str
    sugar: str | float


class PresetEntryRequest(BaseModel):
    """Quick-add preset selection."""

    label: str


class ImportRequest(BaseModel):
    """Tabular text to import."""

    text: str


class ActivityRequest(BaseModel):
    """Active energy burned today."""

    kcal: float = Field(ge=0, allow_inf_nan=False)
