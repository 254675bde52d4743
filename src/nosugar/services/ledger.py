"""Consumption ledger service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from nosugar.domain.errors import InvalidEntryError, UnknownPresetError
from nosugar.domain.ledger import ConsumptionEntry, ImportedRow, Preset
from nosugar.services.imports import parse_rows, parse_sugar

PRESETS: tuple[Preset, ...] = (
    Preset("Soda 12oz", 39),
    Preset("Sweetened yogurt (cup)", 18),
    Preset("Chocolate bar", 26),
    Preset("Sports drink 20oz", 34),
    Preset("Iced latte (sweet)", 24),
    Preset("Cookie", 12),
)

SOURCE_MANUAL = "manual"
SOURCE_PRESET = "preset"
SOURCE_IMPORT = "import"

_logger = logging.getLogger(__name__)


class LedgerRepository(Protocol):
    """Persistence interface for consumption entries."""

    def add_entries(self, entries: list[ConsumptionEntry]) -> None:
        """Persist new entries."""

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry, returning False when it does not exist."""

    def list_entries(self) -> list[ConsumptionEntry]:
        """Return all entries, most recent first."""

    def clear(self) -> None:
        """Delete every entry."""


@dataclass
class LedgerService:
    """Application service for adding and removing ledger entries."""

    repository: LedgerRepository
    timezone_name: str = "UTC"

    def add_manual(self, item: str, raw_sugar: str | float) -> ConsumptionEntry:
        """Add a manually typed entry, normalizing the sugar amount."""
        label = item.strip()
        grams = parse_sugar(str(raw_sugar))
        if not label:
            raise InvalidEntryError("Item label is required")
        if grams <= 0:
            raise InvalidEntryError("Sugar amount must be a positive number of grams")
        return self._add(label, grams, SOURCE_MANUAL)

    def add_preset(self, label: str) -> ConsumptionEntry:
        """Add one of the quick-add presets by label."""
        preset = find_preset(label)
        if preset is None:
            raise UnknownPresetError(f"Unknown preset: {label}")
        return self._add(preset.label, preset.grams, SOURCE_PRESET)

    def import_text(self, text: str) -> list[ConsumptionEntry]:
        """Parse tabular text and add every valid row."""
        rows = parse_rows(text, tz=ZoneInfo(self.timezone_name))
        entries = [_entry_from_row(row) for row in rows]
        if entries:
            self.repository.add_entries(entries)
        _logger.info("Imported %s ledger rows", len(entries))
        return entries

    def remove(self, entry_id: UUID) -> bool:
        """Remove an entry by id."""
        return self.repository.delete_entry(entry_id)

    def list_entries(self) -> list[ConsumptionEntry]:
        """Return the ledger, most recent first."""
        return sorted(
            self.repository.list_entries(),
            key=lambda entry: entry.logged_at,
            reverse=True,
        )

    def clear(self) -> None:
        """Remove every entry."""
        self.repository.clear()

    def _add(self, item: str, grams: int, source: str) -> ConsumptionEntry:
        entry = ConsumptionEntry(
            id=uuid4(),
            logged_at=datetime.now(tz=UTC),
            item=item,
            sugar_g=grams,
            source=source,
        )
        self.repository.add_entries([entry])
        return entry


def find_preset(label: str) -> Preset | None:
    """Return the preset with a matching label, ignoring case."""
    wanted = label.strip().lower()
    for preset in PRESETS:
        if preset.label.lower() == wanted:
            return preset
    return None


def _entry_from_row(row: ImportedRow) -> ConsumptionEntry:
    return ConsumptionEntry(
        id=uuid4(),
        logged_at=row.logged_at,
        item=row.item,
        sugar_g=row.sugar_g,
        source=SOURCE_IMPORT,
    )
