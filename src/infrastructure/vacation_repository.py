"""
Vacation Repository Module

Loads and saves vacations from vacations.yaml and expands vacation ranges
into individual weekday dates.
"""

from pathlib import Path
from typing import Dict, List, Optional

from domain.entities import Vacation
from domain.workday_calendar import date_key, is_weekday, iter_dates, parse_date_key
from infrastructure.logger import get_logger
from infrastructure.persistence import (
    DataFormatError, coerce_date, ensure_list, ensure_mapping, load_yaml, save_yaml
)

logger = get_logger("VacationRepository")

VACATIONS_FILENAME = "vacations.yaml"


class VacationRepository:
    """
    In-memory container for vacations backed by a YAML file.

    File format:
        vacations:
          - destination: Beach
            start_date: "2025-07-07"
            end_date: "2025-07-11"
            approved: true
    """

    def __init__(self, data_dir: Optional[Path] = None, vacations: Optional[List[Vacation]] = None):
        self.data_dir = Path(data_dir) if data_dir else Path(".")
        self._vacations: List[Vacation] = list(vacations or [])

    @property
    def path(self) -> Path:
        return self.data_dir / VACATIONS_FILENAME

    def load(self) -> "VacationRepository":
        """
        Load vacations from disk, replacing the in-memory list.

        Raises:
            DataFormatError: If a vacation has an unparsable date
        """
        document = ensure_mapping(self.path, load_yaml(self.path))

        vacations = []
        for raw in ensure_list(self.path, document.get("vacations"), "vacations"):
            if not isinstance(raw, dict):
                raise DataFormatError(self.path, f"vacation is not a mapping: {raw!r}")
            start = coerce_date(self.path, raw.get("start_date"), "vacation start_date")
            end = coerce_date(self.path, raw.get("end_date"), "vacation end_date")
            vacations.append(Vacation(
                destination=str(raw.get("destination", "")),
                start_date=date_key(start),
                end_date=date_key(end),
                approved=bool(raw.get("approved", False))
            ))

        self._vacations = vacations
        logger.info(f"Loaded {len(vacations)} vacations from {self.path}")
        return self

    def save(self) -> None:
        """Save all vacations to disk."""
        data = {
            "vacations": [
                {
                    "destination": v.destination,
                    "start_date": v.start_date,
                    "end_date": v.end_date,
                    "approved": v.approved
                }
                for v in self._vacations
            ]
        }
        save_yaml(self.path, data)
        logger.info(f"Saved {len(self._vacations)} vacations to {self.path}")

    def add(self, vacation: Vacation) -> None:
        self._vacations.append(vacation)

    def remove(self, start_date: str, end_date: str) -> int:
        """Remove vacations matching both start and end date and return how many were removed."""
        before = len(self._vacations)
        self._vacations = [
            v for v in self._vacations
            if not (v.start_date == start_date and v.end_date == end_date)
        ]
        return before - len(self._vacations)

    def all(self) -> List[Vacation]:
        return list(self._vacations)

    def __len__(self) -> int:
        return len(self._vacations)

    def get_vacation_map(self) -> Dict[str, Vacation]:
        """
        Expand every vacation range into its weekday date keys.

        Weekends are skipped. Holidays are NOT excluded here; the period
        calculator gives holidays precedence over vacation days.
        """
        vacation_map: Dict[str, Vacation] = {}
        for vacation in self._vacations:
            try:
                start = parse_date_key(vacation.start_date)
                end = parse_date_key(vacation.end_date)
            except ValueError:
                logger.warning(
                    f"Skipping vacation with invalid dates: "
                    f"{vacation.start_date} - {vacation.end_date}"
                )
                continue
            for day in iter_dates(start, end):
                if is_weekday(day):
                    vacation_map[date_key(day)] = vacation
        return vacation_map
