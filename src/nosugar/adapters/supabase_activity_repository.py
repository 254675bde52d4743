"""Supabase repository for activity bonus history."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nosugar.services.activity import ActivityBonusRepository


@dataclass
class SupabaseActivityRepository(ActivityBonusRepository):
    """Supabase implementation keyed by profile and day."""

    client: Client
    profile_key: str = "default"

    def list_bonuses(self, start: date, end: date) -> dict[str, int]:
        """Return bonuses for days in the inclusive range."""
        response = (
            self.client.table("activity_bonuses")
            .select("day, bonus_g")
            .eq("profile_key", self.profile_key)
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .execute()
        )
        return {
            str(row["day"]): int(row.get("bonus_g", 0))
            for row in response.data or []
        }

    def upsert_bonus(self, day: date, grams: int) -> None:
        """Store the bonus for a day, replacing any earlier value."""
        self.client.table("activity_bonuses").upsert(
            {"profile_key": self.profile_key, "day": day.isoformat(), "bonus_g": grams},
            on_conflict="profile_key,day",
        ).execute()
