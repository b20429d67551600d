"""
Setup Service Module

Initializes a data directory with default configuration and data files.
Existing files are never overwritten.
"""

from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from config.config_manager import ConfigManager
from domain.entities import BadgeEntry, Holiday, Period
from domain.workday_calendar import date_key
from infrastructure.badge_repository import BadgeRepository
from infrastructure.holiday_repository import HolidayRepository
from infrastructure.logger import get_logger
from infrastructure.period_repository import PeriodRepository
from infrastructure.vacation_repository import VacationRepository

logger = get_logger("SetupService")

# US federal holidays observed on weekdays
DEFAULT_HOLIDAYS = [
    ("New Year's Day", "2025-01-01"),
    ("MLK Day", "2025-01-20"),
    ("Presidents' Day", "2025-02-17"),
    ("Memorial Day", "2025-05-26"),
    ("Juneteenth", "2025-06-19"),
    ("Independence Day", "2025-07-04"),
    ("Labor Day", "2025-09-01"),
    ("Columbus Day", "2025-10-13"),
    ("Veterans Day", "2025-11-11"),
    ("Thanksgiving Day", "2025-11-27"),
    ("Christmas Day", "2025-12-25"),
    ("New Year's Day", "2026-01-01"),
    ("MLK Day", "2026-01-19"),
    ("Presidents' Day", "2026-02-16"),
    ("Memorial Day", "2026-05-25"),
    ("Juneteenth", "2026-06-19"),
    ("Independence Day (observed)", "2026-07-03"),
    ("Labor Day", "2026-09-07"),
    ("Columbus Day", "2026-10-12"),
    ("Veterans Day", "2026-11-11"),
    ("Thanksgiving Day", "2026-11-26"),
    ("Christmas Day", "2026-12-25"),
]

QUARTER_BOUNDS = [
    ((1, 1), (3, 31)),
    ((4, 1), (6, 30)),
    ((7, 1), (9, 30)),
    ((10, 1), (12, 31)),
]


def calendar_quarters(year: int) -> List[Period]:
    """Build Q1..Q4 periods for a calendar year, keyed like 'Q1_2025'."""
    periods = []
    for index, ((start_month, start_day), (end_month, end_day)) in enumerate(QUARTER_BOUNDS, start=1):
        periods.append(Period(
            key=f"Q{index}_{year}",
            name=f"Q{index}",
            start_date=date(year, start_month, start_day),
            end_date=date(year, end_month, end_day)
        ))
    return periods


def needs_init(data_dir: Path) -> bool:
    """Check if a data directory is missing or empty."""
    data_dir = Path(data_dir)
    return not data_dir.is_dir() or not any(data_dir.iterdir())


def initialize_data_dir(data_dir: Path, today: Optional[date] = None) -> List[Path]:
    """
    Create default data files that do not exist yet.

    Args:
        data_dir: Directory to initialize (created if missing)
        today: Reference date for sample data; defaults to the current date

    Returns:
        Paths of the files that were created
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    today = today or date.today()
    created: List[Path] = []

    config_manager = ConfigManager.for_data_dir(data_dir)
    if not config_manager.config_path.exists():
        config_manager.save()
        created.append(config_manager.config_path)
    config = config_manager.load()

    periods = PeriodRepository(data_dir, config.settings.active_time_period_file(0))
    if not periods.path.exists():
        for year in (today.year, today.year + 1):
            for period in calendar_quarters(year):
                periods.add(period)
        periods.save()
        created.append(periods.path)

    badges = BadgeRepository(data_dir)
    if not badges.path.exists():
        badges.add(BadgeEntry(
            entry_date=date_key(today),
            date_time=datetime.combine(today, datetime.min.time()),
            office=config.settings.default_office,
            is_badged_in=True
        ))
        badges.save()
        created.append(badges.path)

    holidays = HolidayRepository(data_dir)
    if not holidays.path.exists():
        for name, day in DEFAULT_HOLIDAYS:
            holidays.add(Holiday(name=name, date=day))
        holidays.save()
        created.append(holidays.path)

    vacations = VacationRepository(data_dir)
    if not vacations.path.exists():
        vacations.save()
        created.append(vacations.path)

    logger.info(f"Initialized {len(created)} data files in {data_dir}")
    return created
