"""
Domain Entities Module

Core domain entities using dataclasses for the office attendance tracker.
These entities represent the core business concepts independent of infrastructure.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional


class ComplianceStatus(Enum):
    """Compliance status of a period against the attendance goal."""
    ACHIEVED = "Achieved"
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    IMPOSSIBLE = "Impossible"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Period:
    """
    A named, inclusive date range such as a fiscal quarter.

    Attributes:
        key: Stable identifier (e.g. "Q1_2025")
        name: Display name (e.g. "Q1")
        start_date: First day of the period
        end_date: Last day of the period
    """
    key: str
    name: str
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        """Check if a date falls inside the period."""
        return self.start_date <= day <= self.end_date


@dataclass
class BadgeEntry:
    """
    Represents a single badge-in event.

    Attributes:
        entry_date: Canonical date key (YYYY-MM-DD)
        date_time: Timestamp of the badge event, if known
        office: Office or label where the badge-in happened
        is_badged_in: Whether the day counts as attended
        is_flex_credit: Whether attendance was a flex (remote) credit
    """
    entry_date: str
    date_time: Optional[datetime] = None
    office: str = ""
    is_badged_in: bool = True
    is_flex_credit: bool = False


@dataclass
class Holiday:
    """A holiday on a specific date."""
    name: str
    date: str


@dataclass
class Vacation:
    """
    A vacation spanning an inclusive date range.

    Attributes:
        destination: Free-form label
        start_date: First day (YYYY-MM-DD)
        end_date: Last day (YYYY-MM-DD)
        approved: Whether the vacation was approved
    """
    destination: str
    start_date: str
    end_date: str
    approved: bool = False


@dataclass
class Workday:
    """Status flags for a single weekday inside a period."""
    date: date
    is_badged_in: bool = False
    is_flex_credit: bool = False
    is_holiday: bool = False
    is_vacation: bool = False

    @property
    def key(self) -> str:
        return self.date.isoformat()


@dataclass
class PeriodStats:
    """
    Derived statistics for one period.

    Attributes:
        key: Period key
        name: Period display name
        start_date: First day of the period
        end_date: Last day of the period
        days_badged_in: Qualifying days with a badge-in (past, today and future)
        flex_days: Badge-ins that were flex credits
        days_elapsed: Qualifying days strictly before today
        days_remaining: Qualifying days from today onwards
        qualifying_days: Weekdays that are neither holiday nor vacation
        available_workdays: Weekdays in range (holidays included)
        total_calendar_days: Inclusive calendar day count
        holiday_count: Weekday holidays in range
        vacation_days: Weekday vacation days in range (holidays excluded)
        days_required: Badge-ins needed to meet the goal
        days_still_needed: Remaining badge-ins needed, never negative
        days_off: Elapsed qualifying days without a badge-in
        days_ahead_of_pace: Badge-ins above the proportional expectation
        remaining_missable_days: Remaining days that may be skipped (negative
            when the goal is out of reach)
        current_average: Badge-in rate over elapsed days
        required_future_average: Rate needed over remaining days
        compliance_status: Classified status
        projected_completion_date: Estimated date the goal is met, if any
        workdays: Per-weekday records keyed by YYYY-MM-DD
    """
    key: str
    name: str
    start_date: date
    end_date: date
    days_badged_in: int = 0
    flex_days: int = 0
    days_elapsed: int = 0
    days_remaining: int = 0
    qualifying_days: int = 0
    available_workdays: int = 0
    total_calendar_days: int = 0
    holiday_count: int = 0
    vacation_days: int = 0
    days_required: int = 0
    days_still_needed: int = 0
    days_off: int = 0
    days_ahead_of_pace: int = 0
    remaining_missable_days: int = 0
    current_average: float = 0.0
    required_future_average: float = 0.0
    compliance_status: ComplianceStatus = ComplianceStatus.ON_TRACK
    projected_completion_date: Optional[date] = None
    workdays: Dict[str, Workday] = field(default_factory=dict)

    @property
    def office_days(self) -> int:
        """Badge-ins that were physical office visits."""
        return self.days_badged_in - self.flex_days
