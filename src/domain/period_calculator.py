"""
Period Calculator Module

Derives workday counts, pace, projection and compliance status for a period.
"""

from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional, Sequence

from .compliance import classify_compliance
from .entities import BadgeEntry, Period, PeriodStats
from .workday_calendar import build_workday_skeleton, count_calendar_days

YEAR_PERIOD_KEY = "Year"


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def _round_half_away_div(numerator: int, denominator: int) -> int:
    """Round numerator/denominator (denominator > 0) to nearest int, ties away from zero."""
    rounded = (2 * abs(numerator) + denominator) // (2 * denominator)
    return rounded if numerator >= 0 else -rounded


def _normalize_today(today: Optional[date]) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


class PeriodStatsCalculator:
    """
    Calculates attendance statistics for periods.

    Provides:
    - Per-period statistics (workday classification, pace, projection)
    - Whole-year statistics across several periods

    The calculator never mutates its inputs. Input mappings must not be
    modified concurrently while a calculation is running.
    """

    def __init__(self, goal_percent: int):
        """
        Initialize calculator.

        Args:
            goal_percent: Required office percentage (e.g. 50 means 50%).
                Zero or negative values are used as given.
        """
        self.goal_percent = goal_percent

    def calculate_days_required(self, qualifying_days: int) -> int:
        """Badge-ins required to meet the goal, rounded up."""
        return _ceil_div(qualifying_days * self.goal_percent, 100)

    def calculate(
        self,
        period: Period,
        badges: Mapping[str, BadgeEntry],
        holidays: Mapping[str, Any],
        vacations: Mapping[str, Any],
        today: Optional[date] = None
    ) -> PeriodStats:
        """
        Calculate full statistics for a period.

        Args:
            period: The period to evaluate
            badges: Date key -> BadgeEntry (exact-date lookup)
            holidays: Date key -> holiday info
            vacations: Date key -> vacation info, pre-expanded to weekdays
            today: Reference date; defaults to the current date

        Returns:
            A freshly allocated PeriodStats
        """
        today = _normalize_today(today)
        workdays = build_workday_skeleton(period.start_date, period.end_date)

        available_workdays = 0
        qualifying_days = 0
        days_badged_in = 0
        flex_days = 0
        days_elapsed = 0
        holiday_count = 0
        vacation_days = 0

        for key, workday in workdays.items():
            if key in holidays:
                workday.is_holiday = True
                holiday_count += 1
                available_workdays += 1
                continue

            available_workdays += 1

            if key in vacations:
                workday.is_vacation = True
                vacation_days += 1
                continue

            qualifying_days += 1

            # Today and future days count badge-ins but are not yet elapsed
            if workday.date < today:
                days_elapsed += 1

            entry = badges.get(key)
            if entry is not None and entry.is_badged_in:
                workday.is_badged_in = True
                days_badged_in += 1
                if entry.is_flex_credit:
                    workday.is_flex_credit = True
                    flex_days += 1

        days_remaining = qualifying_days - days_elapsed
        days_required = self.calculate_days_required(qualifying_days)
        days_still_needed = max(0, days_required - days_badged_in)
        days_off = days_elapsed - days_badged_in

        days_ahead_of_pace = 0
        if days_elapsed > 0 and qualifying_days > 0:
            expected = _round_half_away_div(days_elapsed * days_required, qualifying_days)
            days_ahead_of_pace = days_badged_in - expected

        remaining_missable_days = days_remaining - days_still_needed

        current_average = days_badged_in / days_elapsed if days_elapsed > 0 else 0.0
        required_future_average = (
            days_still_needed / days_remaining if days_remaining > 0 else 0.0
        )

        status = classify_compliance(
            days_badged_in,
            days_required,
            days_ahead_of_pace,
            days_still_needed,
            days_remaining
        )

        return PeriodStats(
            key=period.key,
            name=period.name,
            start_date=period.start_date,
            end_date=period.end_date,
            days_badged_in=days_badged_in,
            flex_days=flex_days,
            days_elapsed=days_elapsed,
            days_remaining=days_remaining,
            qualifying_days=qualifying_days,
            available_workdays=available_workdays,
            total_calendar_days=count_calendar_days(period.start_date, period.end_date),
            holiday_count=holiday_count,
            vacation_days=vacation_days,
            days_required=days_required,
            days_still_needed=days_still_needed,
            days_off=days_off,
            days_ahead_of_pace=days_ahead_of_pace,
            remaining_missable_days=remaining_missable_days,
            current_average=current_average,
            required_future_average=required_future_average,
            compliance_status=status,
            projected_completion_date=self.project_completion(
                days_badged_in, days_elapsed, days_still_needed, today
            ),
            workdays=workdays
        )

    @staticmethod
    def project_completion(
        days_badged_in: int,
        days_elapsed: int,
        days_still_needed: int,
        today: date
    ) -> Optional[date]:
        """
        Project the calendar date the goal will be met at the current rate.

        Returns None when nothing is needed any more or no rate is measurable.
        """
        if days_badged_in <= 0 or days_elapsed <= 0 or days_still_needed <= 0:
            return None
        # ceil(still_needed / (badged_in / elapsed))
        estimated_days = _ceil_div(days_still_needed * days_elapsed, days_badged_in)
        return today + timedelta(days=estimated_days)

    def calculate_year(
        self,
        periods: Sequence[Period],
        badges: Mapping[str, BadgeEntry],
        holidays: Mapping[str, Any],
        vacations: Mapping[str, Any],
        today: Optional[date] = None
    ) -> Optional[PeriodStats]:
        """
        Calculate statistics over the span covered by all given periods.

        Args:
            periods: Periods to combine

        Returns:
            PeriodStats for a synthetic "Year" period, or None when
            no periods are given
        """
        if not periods:
            return None

        year_period = Period(
            key=YEAR_PERIOD_KEY,
            name=YEAR_PERIOD_KEY,
            start_date=min(p.start_date for p in periods),
            end_date=max(p.end_date for p in periods)
        )
        return self.calculate(year_period, badges, holidays, vacations, today)
