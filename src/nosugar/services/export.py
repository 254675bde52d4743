"""Export document assembly."""

from dataclasses import asdict
from datetime import date, tzinfo

from nosugar.domain.ledger import ConsumptionEntry
from nosugar.domain.profile import Connections, Profile
from nosugar.services.stats import rollup_by_day


def build_export(
    profile: Profile,
    connections: Connections,
    entries: list[ConsumptionEntry],
    tz: tzinfo | None = None,
) -> dict[str, object]:
    """Return the profile, toggles, ledger and daily rollups as plain data."""
    profile_data = asdict(profile)
    profile_data["sex"] = profile.sex.value
    profile_data["activity"] = profile.activity.value
    return {
        "profile": profile_data,
        "connections": asdict(connections),
        "logs": [serialize_entry(entry) for entry in entries],
        "rollups": [
            {"day": day, "sugar": sugar}
            for day, sugar in rollup_by_day(entries, tz).items()
        ],
    }


def export_filename(today: date) -> str:
    """Return the download name for an export made on ``today``."""
    return f"nosugar-export-{today.isoformat()}.json"


def serialize_entry(entry: ConsumptionEntry) -> dict[str, object]:
    """Return a ledger entry as JSON-ready data."""
    return {
        "id": str(entry.id),
        "ts": entry.timestamp_ms,
        "logged_at": entry.logged_at.isoformat(),
        "item": entry.item,
        "sugar_g": entry.sugar_g,
        "source": entry.source,
    }
