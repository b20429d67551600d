"""
Period Repository Module

Loads and saves period definitions (e.g. fiscal quarters) from a YAML file
and looks periods up by key or date.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

from domain.entities import Period
from domain.workday_calendar import date_key
from infrastructure.logger import get_logger
from infrastructure.persistence import (
    DataFormatError, PeriodNotFoundError, coerce_date, ensure_list, ensure_mapping,
    load_yaml, save_yaml
)

logger = get_logger("PeriodRepository")

DEFAULT_PERIODS_FILENAME = "workday-fiscal-quarters.yaml"
DEFAULT_CALENDAR_DISPLAY_COLUMNS = 3


class PeriodRepository:
    """
    In-memory container for periods backed by a YAML file.

    File format:
        calendar_display_columns: 3
        timeperiods:
          - key: Q1_2025
            name: Q1
            start_date: "2025-01-01"
            end_date: "2025-03-31"
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        filename: str = "",
        periods: Optional[List[Period]] = None
    ):
        self.data_dir = Path(data_dir) if data_dir else Path(".")
        self.filename = filename or DEFAULT_PERIODS_FILENAME
        self._periods: List[Period] = list(periods or [])
        self._calendar_display_columns = DEFAULT_CALENDAR_DISPLAY_COLUMNS

    @property
    def path(self) -> Path:
        return self.data_dir / self.filename

    @property
    def calendar_display_columns(self) -> int:
        if self._calendar_display_columns <= 0:
            return DEFAULT_CALENDAR_DISPLAY_COLUMNS
        return self._calendar_display_columns

    @calendar_display_columns.setter
    def calendar_display_columns(self, columns: int) -> None:
        self._calendar_display_columns = columns

    def load(self) -> "PeriodRepository":
        """
        Load periods from disk, replacing the in-memory list.

        Raises:
            DataFormatError: If a period's dates cannot be parsed
        """
        document = ensure_mapping(self.path, load_yaml(self.path))

        periods = []
        for raw in ensure_list(self.path, document.get("timeperiods"), "timeperiods"):
            if not isinstance(raw, dict):
                raise DataFormatError(self.path, f"period is not a mapping: {raw!r}")
            key = str(raw.get("key", ""))
            periods.append(Period(
                key=key,
                name=str(raw.get("name", key)),
                start_date=coerce_date(self.path, raw.get("start_date"), f"start_date for {key}"),
                end_date=coerce_date(self.path, raw.get("end_date"), f"end_date for {key}")
            ))

        raw_columns = document.get("calendar_display_columns") or DEFAULT_CALENDAR_DISPLAY_COLUMNS
        try:
            columns = int(raw_columns)
        except (TypeError, ValueError) as e:
            raise DataFormatError(
                self.path, f"calendar_display_columns must be an integer, got {raw_columns!r}"
            ) from e

        self._periods = periods
        self._calendar_display_columns = columns
        logger.info(f"Loaded {len(periods)} periods from {self.path}")
        return self

    def save(self) -> None:
        """Save all periods to disk."""
        data = {
            "calendar_display_columns": self.calendar_display_columns,
            "timeperiods": [
                {
                    "key": p.key,
                    "name": p.name,
                    "start_date": date_key(p.start_date),
                    "end_date": date_key(p.end_date)
                }
                for p in self._periods
            ]
        }
        save_yaml(self.path, data)
        logger.info(f"Saved {len(self._periods)} periods to {self.path}")

    def add(self, period: Period) -> None:
        self._periods.append(period)

    def all(self) -> List[Period]:
        return list(self._periods)

    def __len__(self) -> int:
        return len(self._periods)

    def get_by_key(self, key: str) -> Period:
        """
        Find a period by key.

        Raises:
            PeriodNotFoundError: If no period has the key
        """
        for period in self._periods:
            if period.key == key:
                return period
        raise PeriodNotFoundError(f"time period {key!r} not found")

    def get_by_date(self, day: date) -> Period:
        """
        Find the first period containing a date.

        Raises:
            PeriodNotFoundError: If no period contains the date
        """
        for period in self._periods:
            if period.contains(day):
                return period
        raise PeriodNotFoundError(f"no time period found for date {date_key(day)}")

    def get_current(self, today: Optional[date] = None) -> Period:
        """Find the period containing today (or the given reference date)."""
        return self.get_by_date(today or date.today())

    def periods_in_year(self, year: int) -> List[Period]:
        """Periods whose start date falls in the given calendar year."""
        return [p for p in self._periods if p.start_date.year == year]
