"""Supabase repository for the coefficient table."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nosugar.domain.budget import Coefficients
from nosugar.services.profiles import CoefficientRepository


@dataclass
class SupabaseCoefficientRepository(CoefficientRepository):
    """Supabase implementation keeping the table as a JSON column."""

    client: Client
    profile_key: str = "default"

    def get_coefficients(self) -> Coefficients | None:
        """Return the stored table, filling missing keys with defaults."""
        response = (
            self.client.table("coefficients")
            .select("values")
            .eq("profile_key", self.profile_key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        values = response.data[0].get("values")
        coefficients = Coefficients()
        if isinstance(values, dict):
            coefficients.update(values)
        return coefficients

    def save_coefficients(self, coefficients: Coefficients) -> None:
        """Upsert the table."""
        self.client.table("coefficients").upsert(
            {
                "profile_key": self.profile_key,
                "values": coefficients.to_dict(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="profile_key",
        ).execute()
