"""
Record Service Module

Application layer service that records attendance changes: badge-ins,
flex credits, vacations and holidays. Every change is saved immediately.
"""

from datetime import date, datetime
from pathlib import Path

from config.config_manager import Settings
from domain.entities import BadgeEntry, Holiday, Vacation
from domain.workday_calendar import date_key
from infrastructure.badge_repository import BadgeRepository
from infrastructure.holiday_repository import HolidayRepository
from infrastructure.logger import get_logger
from infrastructure.vacation_repository import VacationRepository

logger = get_logger("RecordService")


class RecordService:
    """
    Records attendance data in a data directory.

    A date holds at most one badge entry: recording a badge-in or flex
    credit replaces whatever was recorded for that date before.
    """

    def __init__(self, data_dir: Path, settings: Settings):
        self.data_dir = Path(data_dir)
        self.settings = settings

    def record_badge(self, day: date, flex: bool = False) -> BadgeEntry:
        """
        Record an office badge-in or a flex credit for a date.

        Office badge-ins use the configured default office; flex credits
        use the configured flex credit label.
        """
        badges = BadgeRepository(self.data_dir).load()
        key = date_key(day)
        badges.remove(key)

        entry = BadgeEntry(
            entry_date=key,
            date_time=datetime.combine(day, datetime.min.time()),
            office=self.settings.flex_credit if flex else self.settings.default_office,
            is_badged_in=True,
            is_flex_credit=flex
        )
        badges.add(entry)
        badges.save()
        logger.info(f"Recorded {'flex credit' if flex else 'badge-in'} for {key}")
        return entry

    def remove_badge(self, day: date) -> bool:
        """Remove the badge entry for a date. Returns False if none existed."""
        badges = BadgeRepository(self.data_dir).load()
        if not badges.remove(date_key(day)):
            return False
        badges.save()
        logger.info(f"Removed badge entry for {date_key(day)}")
        return True

    def add_vacation(
        self,
        start: date,
        end: date,
        destination: str,
        approved: bool = False
    ) -> Vacation:
        """
        Add a vacation, replacing one with the same start and end dates.

        Raises:
            ValueError: If start is after end
        """
        if start > end:
            raise ValueError(f"vacation start {date_key(start)} is after end {date_key(end)}")

        vacations = VacationRepository(self.data_dir).load()
        vacation = Vacation(
            destination=destination.strip(),
            start_date=date_key(start),
            end_date=date_key(end),
            approved=approved
        )
        vacations.remove(vacation.start_date, vacation.end_date)
        vacations.add(vacation)
        vacations.save()
        logger.info(f"Added vacation {vacation.start_date} - {vacation.end_date}")
        return vacation

    def remove_vacation(self, start: date, end: date) -> bool:
        """Remove the vacation with these dates. Returns False if none existed."""
        vacations = VacationRepository(self.data_dir).load()
        if not vacations.remove(date_key(start), date_key(end)):
            return False
        vacations.save()
        logger.info(f"Removed vacation {date_key(start)} - {date_key(end)}")
        return True

    def add_holiday(self, day: date, name: str) -> Holiday:
        """Add a holiday."""
        holidays = HolidayRepository(self.data_dir).load()
        holiday = Holiday(name=name.strip(), date=date_key(day))
        holidays.add(holiday)
        holidays.save()
        logger.info(f"Added holiday {holiday.name} on {holiday.date}")
        return holiday
