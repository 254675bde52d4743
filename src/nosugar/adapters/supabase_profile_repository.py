"""Supabase repository for the profile and connection toggles."""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from supabase import Client

from nosugar.domain.profile import ActivityLevel, Connections, Profile, Sex
from nosugar.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation storing one profile row per key."""

    client: Client
    profile_key: str = "default"

    def get_profile(self) -> Profile | None:
        """Return the stored profile, if present."""
        row = self._get_row("profile")
        payload = row.get("profile") if row else None
        if not isinstance(payload, dict):
            return None
        return _parse_profile(payload)

    def save_profile(self, profile: Profile) -> None:
        """Upsert the profile column."""
        payload = asdict(profile)
        payload["sex"] = profile.sex.value
        payload["activity"] = profile.activity.value
        self._upsert({"profile": payload})

    def get_connections(self) -> Connections | None:
        """Return the stored connection toggles, if present."""
        row = self._get_row("connections")
        payload = row.get("connections") if row else None
        if not isinstance(payload, dict):
            return None
        return Connections(
            uber_eats=bool(payload.get("uber_eats", False)),
            banking=bool(payload.get("banking", False)),
            apple_health=bool(payload.get("apple_health", False)),
        )

    def save_connections(self, connections: Connections) -> None:
        """Upsert the connections column."""
        self._upsert({"connections": asdict(connections)})

    def _get_row(self, column: str) -> dict[str, object] | None:
        response = (
            self.client.table("profiles")
            .select(column)
            .eq("profile_key", self.profile_key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def _upsert(self, values: dict[str, object]) -> None:
        self.client.table("profiles").upsert(
            {
                "profile_key": self.profile_key,
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="profile_key",
        ).execute()


def _parse_profile(payload: dict[str, object]) -> Profile:
    defaults = Profile()
    ethnicity = payload.get("ethnicity", defaults.ethnicity)
    return Profile(
        sex=Sex(payload.get("sex", defaults.sex.value)),
        age=int(payload.get("age", defaults.age)),
        height_cm=float(payload.get("height_cm", defaults.height_cm)),
        weight_kg=float(payload.get("weight_kg", defaults.weight_kg)),
        ethnicity=str(ethnicity) if ethnicity is not None else None,
        activity=ActivityLevel(payload.get("activity", defaults.activity.value)),
        use_ethnicity_adjustment=bool(
            payload.get("use_ethnicity_adjustment", defaults.use_ethnicity_adjustment)
        ),
        name=str(payload.get("name") or ""),
        consent_analytics=bool(
            payload.get("consent_analytics", defaults.consent_analytics)
        ),
    )
