"""Normalization of free-form tabular text into ledger rows."""

import logging
import math
import re
from datetime import datetime, tzinfo

from dateutil import parser as date_parser

from nosugar.domain.ledger import ImportedRow
from nosugar.services.budget import round_half_up

_HEADER_PATTERN = re.compile(r"date|item|sugar")
_NON_NUMERIC = re.compile(r"[^0-9.]")
_SHORT_ROW_FIELDS = 2

_logger = logging.getLogger(__name__)


def parse_rows(
    text: str, *, now: datetime | None = None, tz: tzinfo | None = None
) -> list[ImportedRow]:
    """Parse ``date,item,sugar`` or ``item,sugar`` lines into rows.

    Malformed lines are dropped rather than reported, so the result may be
    shorter than the input.
    """
    resolved_now = now or datetime.now(tz=tz).astimezone(tz)
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []
    if _HEADER_PATTERN.search(lines[0].lower()):
        lines = lines[1:]

    rows: list[ImportedRow] = []
    for line in lines:
        cells = line.split(",")
        if len(cells) < _SHORT_ROW_FIELDS:
            continue
        if len(cells) == _SHORT_ROW_FIELDS:
            date_raw, item, sugar_raw = "", cells[0], cells[1]
        else:
            date_raw, item, sugar_raw = cells[0], cells[1], cells[2]
        item = item.strip()
        sugar_g = parse_sugar(sugar_raw)
        if not item or sugar_g <= 0:
            continue
        rows.append(
            ImportedRow(
                logged_at=_parse_date(date_raw, resolved_now, tz),
                item=item,
                sugar_g=sugar_g,
            )
        )

    dropped = len(lines) - len(rows)
    if dropped:
        _logger.debug("Import dropped %s of %s lines", dropped, len(lines))
    return rows


def parse_sugar(raw: str) -> int:
    """Return whole grams from text such as ``"39g"``; unparseable input is 0."""
    cleaned = _NON_NUMERIC.sub("", str(raw))
    try:
        value = float(cleaned)
    except ValueError:
        return 0
    if not math.isfinite(value):
        return 0
    return round_half_up(value)


def _parse_date(raw: str, fallback: datetime, tz: tzinfo | None) -> datetime:
    value = raw.strip()
    if not value:
        return fallback
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return fallback
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz) if tz is not None else parsed.astimezone()
    return parsed
