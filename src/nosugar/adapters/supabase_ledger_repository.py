"""Supabase repository for consumption entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nosugar.domain.ledger import ConsumptionEntry
from nosugar.services.ledger import LedgerRepository


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation for the ledger."""

    client: Client
    profile_key: str = "default"

    def add_entries(self, entries: list[ConsumptionEntry]) -> None:
        """Insert entries in one request."""
        payload = [
            {
                "id": str(entry.id),
                "profile_key": self.profile_key,
                "logged_at": entry.logged_at.isoformat(),
                "item": entry.item,
                "sugar_g": entry.sugar_g,
                "source": entry.source,
            }
            for entry in entries
        ]
        if payload:
            self.client.table("consumption_entries").insert(payload).execute()

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry and report whether a row was removed."""
        response = (
            self.client.table("consumption_entries")
            .delete()
            .eq("profile_key", self.profile_key)
            .eq("id", str(entry_id))
            .execute()
        )
        return bool(response.data)

    def list_entries(self) -> list[ConsumptionEntry]:
        """Return all entries, most recent first."""
        response = (
            self.client.table("consumption_entries")
            .select("id, logged_at, item, sugar_g, source")
            .eq("profile_key", self.profile_key)
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def clear(self) -> None:
        """Delete every entry for the profile."""
        self.client.table("consumption_entries").delete().eq(
            "profile_key", self.profile_key
        ).execute()


def _parse_row(row: dict[str, object]) -> ConsumptionEntry:
    logged_at_raw = row.get("logged_at")
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.fromtimestamp(0, tz=UTC)
    )
    if logged_at.tzinfo is None:
        logged_at = logged_at.replace(tzinfo=UTC)
    return ConsumptionEntry(
        id=UUID(str(row["id"])),
        logged_at=logged_at,
        item=str(row.get("item", "")),
        sugar_g=int(row.get("sugar_g", 0)),
        source=str(row.get("source") or "manual"),
    )
