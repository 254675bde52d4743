"""Domain models for the consumption ledger."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ConsumptionEntry:
    """A single logged item of added sugar."""

    id: UUID
    logged_at: datetime
    item: str
    sugar_g: int
    source: str

    @property
    def timestamp_ms(self) -> int:
        """Epoch milliseconds of ``logged_at``."""
        return int(self.logged_at.timestamp() * 1000)


@dataclass(frozen=True)
class ImportedRow:
    """A normalized row produced from tabular input."""

    logged_at: datetime
    item: str
    sugar_g: int


@dataclass(frozen=True)
class Preset:
    """Quick-add item with a typical sugar amount."""

    label: str
    grams: int
