"""
Holiday Repository Module

Loads and saves holidays from holidays.yaml.
"""

from pathlib import Path
from typing import Dict, List, Optional

from domain.entities import Holiday
from domain.workday_calendar import date_key
from infrastructure.logger import get_logger
from infrastructure.persistence import (
    DataFormatError, coerce_date, ensure_list, ensure_mapping, load_yaml, save_yaml
)

logger = get_logger("HolidayRepository")

HOLIDAYS_FILENAME = "holidays.yaml"


class HolidayRepository:
    """
    In-memory container for holidays backed by a YAML file.

    File format:
        holidays:
          - name: New Year's Day
            date: "2025-01-01"
    """

    def __init__(self, data_dir: Optional[Path] = None, holidays: Optional[List[Holiday]] = None):
        self.data_dir = Path(data_dir) if data_dir else Path(".")
        self._holidays: List[Holiday] = list(holidays or [])

    @property
    def path(self) -> Path:
        return self.data_dir / HOLIDAYS_FILENAME

    def load(self) -> "HolidayRepository":
        """Load holidays from disk, replacing the in-memory list."""
        document = ensure_mapping(self.path, load_yaml(self.path))

        holidays = []
        for raw in ensure_list(self.path, document.get("holidays"), "holidays"):
            if not isinstance(raw, dict):
                raise DataFormatError(self.path, f"holiday is not a mapping: {raw!r}")
            day = coerce_date(self.path, raw.get("date"), "holiday date")
            holidays.append(Holiday(name=str(raw.get("name", "")), date=date_key(day)))

        self._holidays = holidays
        logger.info(f"Loaded {len(holidays)} holidays from {self.path}")
        return self

    def save(self) -> None:
        """Save all holidays to disk."""
        data = {"holidays": [{"name": h.name, "date": h.date} for h in self._holidays]}
        save_yaml(self.path, data)
        logger.info(f"Saved {len(self._holidays)} holidays to {self.path}")

    def add(self, holiday: Holiday) -> None:
        self._holidays.append(holiday)

    def all(self) -> List[Holiday]:
        return list(self._holidays)

    def __len__(self) -> int:
        return len(self._holidays)

    def get_holiday_map(self) -> Dict[str, Holiday]:
        """Get holidays keyed by date; a later entry for the same date wins."""
        return {h.date: h for h in self._holidays}
