"""
Badge Repository Module

Loads and saves badge-in entries from badge_data.json and provides the
date-keyed badge map used by the period calculator.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional

from domain.entities import BadgeEntry
from domain.workday_calendar import date_key
from infrastructure.logger import get_logger
from infrastructure.persistence import (
    DataFormatError, coerce_date, ensure_list, ensure_mapping, load_json, save_json
)

logger = get_logger("BadgeRepository")

BADGE_DATA_FILENAME = "badge_data.json"

# Accepted date_time formats on load, in order of preference
DATE_TIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",   # RFC3339 with offset or trailing Z
    "%Y-%m-%dT%H:%M:%S.%f%z",  # RFC3339 with fractional seconds
    "%Y-%m-%dT%H:%M:%S",     # naive, as written by save()
    "%Y-%m-%dT%H:%M:%S.%f",  # naive with fractional seconds
    "%Y-%m-%d",              # date-only fallback
)

# Always written naive to stay compatible with existing data files
DATE_TIME_WRITE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_date_time(value: str) -> Optional[datetime]:
    """
    Parse a badge timestamp in any accepted format.

    Returns:
        The parsed datetime, or None if no format matches
    """
    for fmt in DATE_TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


class BadgeRepository:
    """
    In-memory container for badge entries backed by a JSON file.

    File format:
        {"badge_data": [{"entry_date": "2025-01-02",
                         "date_time": "2025-01-02T09:00:00",
                         "office": "HQ",
                         "is_badged_in": true,
                         "is_flex_credit": false}]}
    """

    def __init__(self, data_dir: Optional[Path] = None, entries: Optional[List[BadgeEntry]] = None):
        self.data_dir = Path(data_dir) if data_dir else Path(".")
        self._entries: List[BadgeEntry] = list(entries or [])

    @property
    def path(self) -> Path:
        return self.data_dir / BADGE_DATA_FILENAME

    def load(self) -> "BadgeRepository":
        """
        Load badge entries from disk, replacing the in-memory entries.

        Raises:
            DataFormatError: If the file or an entry cannot be parsed
        """
        document = ensure_mapping(self.path, load_json(self.path))
        raw_entries = ensure_list(self.path, document.get("badge_data"), "badge_data")

        self._entries = [self._parse_entry(raw) for raw in raw_entries]
        logger.info(f"Loaded {len(self._entries)} badge entries from {self.path}")
        return self

    def save(self) -> None:
        """Save all badge entries to disk."""
        data = {"badge_data": [self._entry_to_dict(e) for e in self._entries]}
        save_json(self.path, data)
        logger.info(f"Saved {len(self._entries)} badge entries to {self.path}")

    def _parse_entry(self, raw: dict) -> BadgeEntry:
        if not isinstance(raw, dict):
            raise DataFormatError(self.path, f"badge entry is not an object: {raw!r}")

        entry_day = coerce_date(self.path, raw.get("entry_date"), "entry_date")

        date_time = None
        raw_time = raw.get("date_time")
        if raw_time:
            date_time = parse_date_time(str(raw_time))
            if date_time is None:
                raise DataFormatError(self.path, f"cannot parse date_time {raw_time!r}")

        return BadgeEntry(
            entry_date=date_key(entry_day),
            date_time=date_time,
            office=raw.get("office", ""),
            is_badged_in=bool(raw.get("is_badged_in", False)),
            is_flex_credit=bool(raw.get("is_flex_credit", False))
        )

    @staticmethod
    def _entry_to_dict(entry: BadgeEntry) -> dict:
        return {
            "entry_date": entry.entry_date,
            "date_time": (
                entry.date_time.strftime(DATE_TIME_WRITE_FORMAT)
                if entry.date_time else entry.entry_date + "T00:00:00"
            ),
            "office": entry.office,
            "is_badged_in": entry.is_badged_in,
            "is_flex_credit": entry.is_flex_credit
        }

    def has(self, key: str) -> bool:
        """Check if an entry exists for a date key."""
        return any(e.entry_date == key for e in self._entries)

    def get(self, key: str) -> Optional[BadgeEntry]:
        """Get the last entry recorded for a date key."""
        found = None
        for entry in self._entries:
            if entry.entry_date == key:
                found = entry
        return found

    def add(self, entry: BadgeEntry) -> None:
        """Append a badge entry."""
        self._entries.append(entry)

    def remove(self, key: str) -> int:
        """Remove every entry for a date key and return how many were removed."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.entry_date != key]
        return before - len(self._entries)

    def all(self) -> List[BadgeEntry]:
        """Get a copy of all entries."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get_badge_map(self, start: date, end: date) -> Dict[str, BadgeEntry]:
        """
        Get entries within [start, end] keyed by date.

        If a date has several entries, the last one wins.
        """
        start_key = date_key(start)
        end_key = date_key(end)
        # Keys are canonical YYYY-MM-DD so string order is date order
        return {
            e.entry_date: e
            for e in self._entries
            if start_key <= e.entry_date <= end_key
        }

    def clone(self) -> "BadgeRepository":
        """Return an independent copy of this repository."""
        entries = [
            BadgeEntry(
                entry_date=e.entry_date,
                date_time=e.date_time,
                office=e.office,
                is_badged_in=e.is_badged_in,
                is_flex_credit=e.is_flex_credit
            )
            for e in self._entries
        ]
        return BadgeRepository(self.data_dir, entries)
