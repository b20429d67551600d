"""
Unit tests for the period calculator, workday calendar and compliance classifier.
"""

import pytest
from datetime import date, timedelta
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.compliance import classify_compliance
from domain.entities import BadgeEntry, ComplianceStatus, Holiday, Period, Vacation
from domain.period_calculator import PeriodStatsCalculator, _round_half_away_div
from domain.workday_calendar import (
    build_workday_skeleton, count_calendar_days, date_key, is_weekday, iter_dates
)


Q1_2025 = Period("Q1_2025", "Q1", date(2025, 1, 1), date(2025, 3, 31))
Q2_2025 = Period("Q2_2025", "Q2", date(2025, 4, 1), date(2025, 6, 30))

NEW_YEAR = {"2025-01-01": Holiday("New Year's Day", "2025-01-01")}


def badge(key: str, flex: bool = False) -> BadgeEntry:
    return BadgeEntry(entry_date=key, is_badged_in=True, is_flex_credit=flex)


def badges_between(start: date, end: date) -> dict:
    """Badge every weekday in [start, end]."""
    return {date_key(d): badge(date_key(d)) for d in iter_dates(start, end) if is_weekday(d)}


def vacation_days(start: date, end: date) -> dict:
    vacation = Vacation("Trip", date_key(start), date_key(end), True)
    return {date_key(d): vacation for d in iter_dates(start, end) if is_weekday(d)}


@pytest.fixture
def calc():
    return PeriodStatsCalculator(goal_percent=50)


class TestWorkdayCalendar:
    """Tests for weekday enumeration."""

    def test_is_weekday(self):
        assert is_weekday(date(2025, 1, 3))       # Friday
        assert not is_weekday(date(2025, 1, 4))   # Saturday
        assert not is_weekday(date(2025, 1, 5))   # Sunday
        assert is_weekday(date(2025, 1, 6))       # Monday

    def test_skeleton_excludes_weekends(self):
        skeleton = build_workday_skeleton(date(2025, 1, 1), date(2025, 3, 31))

        assert len(skeleton) == 64
        for key, workday in skeleton.items():
            assert workday.date.weekday() < 5
            assert workday.key == key
        assert "2025-01-04" not in skeleton
        assert "2025-01-05" not in skeleton

    def test_skeleton_records_start_unflagged(self):
        workday = build_workday_skeleton(date(2025, 1, 6), date(2025, 1, 6))["2025-01-06"]

        assert not workday.is_badged_in
        assert not workday.is_flex_credit
        assert not workday.is_holiday
        assert not workday.is_vacation

    def test_start_after_end_is_empty(self):
        assert build_workday_skeleton(date(2025, 2, 1), date(2025, 1, 1)) == {}
        assert count_calendar_days(date(2025, 2, 1), date(2025, 1, 1)) == 0

    def test_calendar_days_inclusive(self):
        assert count_calendar_days(date(2025, 1, 1), date(2025, 3, 31)) == 90
        assert count_calendar_days(date(2025, 1, 1), date(2025, 1, 1)) == 1


class TestComplianceClassifier:
    """Tests for rule precedence in classify_compliance."""

    def test_achieved_wins_first(self):
        assert classify_compliance(10, 10, -5, 0, 0) == ComplianceStatus.ACHIEVED

    def test_not_started_is_on_track(self):
        assert classify_compliance(0, 10, 0, 10, 5) == ComplianceStatus.ON_TRACK

    def test_impossible_before_at_risk(self):
        assert classify_compliance(2, 10, -3, 8, 5) == ComplianceStatus.IMPOSSIBLE

    def test_impossible_even_when_ahead(self):
        assert classify_compliance(2, 10, 1, 8, 5) == ComplianceStatus.IMPOSSIBLE

    def test_at_risk_when_behind(self):
        assert classify_compliance(2, 10, -1, 8, 20) == ComplianceStatus.AT_RISK

    def test_on_track_when_on_pace(self):
        assert classify_compliance(5, 10, 0, 5, 20) == ComplianceStatus.ON_TRACK

    def test_str_is_label(self):
        assert str(ComplianceStatus.AT_RISK) == "At Risk"


class TestPeriodStats:
    """Tests for PeriodStatsCalculator.calculate."""

    def test_no_badges_at_period_start(self, calc):
        stats = calc.calculate(Q1_2025, {}, {}, {}, today=date(2025, 1, 1))

        assert stats.days_badged_in == 0
        assert stats.days_elapsed == 0
        assert stats.days_ahead_of_pace == 0
        assert stats.compliance_status == ComplianceStatus.ON_TRACK
        assert stats.projected_completion_date is None

    def test_counts_for_quarter(self, calc):
        stats = calc.calculate(Q1_2025, {}, NEW_YEAR, {}, today=date(2025, 1, 1))

        assert stats.total_calendar_days == 90
        assert stats.available_workdays == 64
        assert stats.holiday_count == 1
        assert stats.qualifying_days == 63
        assert stats.qualifying_days == stats.available_workdays - stats.holiday_count - stats.vacation_days
        assert stats.days_required == 32  # ceil(63 * 50 / 100)
        assert stats.key == "Q1_2025"
        assert stats.name == "Q1"

    def test_impossible_at_end_of_quarter(self, calc):
        stats = calc.calculate(Q1_2025, {}, NEW_YEAR, {}, today=date(2025, 3, 31))

        assert stats.days_badged_in == 0
        assert stats.days_elapsed == 62
        assert stats.days_remaining == 1
        assert stats.days_still_needed == 32
        assert stats.days_ahead_of_pace == -31
        assert stats.remaining_missable_days == -31
        assert stats.compliance_status == ComplianceStatus.IMPOSSIBLE

    def test_achieved_after_two_months(self, calc):
        badges = badges_between(date(2025, 1, 2), date(2025, 2, 28))

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 3, 31))

        assert stats.days_badged_in == 42
        assert stats.days_still_needed == 0
        assert stats.compliance_status == ComplianceStatus.ACHIEVED
        assert stats.projected_completion_date is None

    def test_ahead_of_pace_on_track(self, calc):
        badges = {"2025-01-02": badge("2025-01-02"), "2025-01-03": badge("2025-01-03")}

        stats = calc.calculate(Q1_2025, badges, NEW_YEAR, {}, today=date(2025, 1, 3))

        assert stats.days_elapsed == 1
        assert stats.days_badged_in == 2
        assert stats.days_ahead_of_pace > 0
        assert stats.compliance_status == ComplianceStatus.ON_TRACK

    def test_at_risk_when_behind_pace(self, calc):
        badges = {"2025-01-02": badge("2025-01-02")}

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 1, 14))

        assert stats.days_elapsed == 9
        # expected = 9 * 32 / 64 = 4.5, rounded half away from zero
        assert stats.days_ahead_of_pace == 1 - 5
        assert stats.compliance_status == ComplianceStatus.AT_RISK

    def test_flex_credit_counting(self, calc):
        badges = {
            "2025-01-02": badge("2025-01-02"),
            "2025-01-03": badge("2025-01-03", flex=True),
            "2025-01-06": badge("2025-01-06", flex=True),
        }

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 1, 6))

        assert stats.days_badged_in == 3
        assert stats.flex_days == 2
        assert stats.office_days == 1
        assert stats.workdays["2025-01-03"].is_flex_credit
        assert not stats.workdays["2025-01-02"].is_flex_credit

    def test_entry_not_badged_in_is_ignored(self, calc):
        badges = {"2025-01-02": BadgeEntry("2025-01-02", is_badged_in=False, is_flex_credit=True)}

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 1, 6))

        assert stats.days_badged_in == 0
        assert stats.flex_days == 0

    def test_today_badge_counts_but_is_not_elapsed(self, calc):
        today = date(2025, 1, 6)
        without = calc.calculate(Q1_2025, {}, {}, {}, today=today)
        with_today = calc.calculate(Q1_2025, {"2025-01-06": badge("2025-01-06")}, {}, {}, today=today)

        assert with_today.days_badged_in == without.days_badged_in + 1
        assert with_today.days_elapsed == without.days_elapsed == 3
        assert with_today.workdays["2025-01-06"].is_badged_in

    def test_future_badges_count(self, calc):
        badges = {"2025-03-03": badge("2025-03-03")}

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 1, 2))

        assert stats.days_badged_in == 1
        assert stats.days_elapsed == 1
        assert stats.days_off == 1

    def test_holidays_excluded_from_total(self, calc):
        holidays = dict(NEW_YEAR)
        holidays["2025-01-20"] = Holiday("MLK Day", "2025-01-20")

        stats = calc.calculate(Q1_2025, {}, holidays, {}, today=date(2025, 1, 31))

        assert stats.holiday_count == 2
        assert stats.available_workdays == 64
        assert stats.qualifying_days == stats.available_workdays - 2

    def test_badge_on_holiday_not_counted(self, calc):
        stats = calc.calculate(
            Q1_2025, {"2025-01-01": badge("2025-01-01")}, NEW_YEAR, {}, today=date(2025, 1, 31)
        )

        assert stats.days_badged_in == 0
        assert stats.workdays["2025-01-01"].is_holiday
        assert not stats.workdays["2025-01-01"].is_badged_in

    def test_vacation_days_excluded_from_total(self, calc):
        vacations = vacation_days(date(2025, 1, 6), date(2025, 1, 10))

        stats = calc.calculate(Q1_2025, {"2025-01-07": badge("2025-01-07")}, {}, vacations,
                               today=date(2025, 1, 31))

        assert stats.vacation_days == 5
        assert stats.qualifying_days == 64 - 5
        assert stats.days_badged_in == 0
        assert stats.workdays["2025-01-07"].is_vacation

    def test_holiday_takes_precedence_over_vacation(self, calc):
        holidays = {"2025-01-07": Holiday("Office closed", "2025-01-07")}
        vacations = vacation_days(date(2025, 1, 6), date(2025, 1, 10))

        stats = calc.calculate(Q1_2025, {}, holidays, vacations, today=date(2025, 1, 31))

        assert stats.holiday_count == 1
        assert stats.vacation_days == 4
        assert stats.workdays["2025-01-07"].is_holiday
        assert not stats.workdays["2025-01-07"].is_vacation

    def test_pace_and_projection(self, calc):
        keys = ["2025-01-02", "2025-01-03", "2025-01-06", "2025-01-07", "2025-01-08"]
        badges = {k: badge(k) for k in keys}

        stats = calc.calculate(Q1_2025, badges, {}, {}, today=date(2025, 1, 14))

        assert stats.days_elapsed == 9
        assert stats.days_remaining == 55
        assert stats.days_still_needed == 27
        assert stats.days_off == 4
        assert stats.days_ahead_of_pace == 0
        assert stats.remaining_missable_days == 28
        assert stats.current_average == pytest.approx(5 / 9)
        assert stats.required_future_average == pytest.approx(27 / 55)
        # ceil(27 / (5 / 9)) = 49 calendar days after today
        assert stats.projected_completion_date == date(2025, 1, 14) + timedelta(days=49)
        assert stats.projected_completion_date == date(2025, 3, 4)
        assert stats.compliance_status == ComplianceStatus.ON_TRACK

    def test_averages_zero_without_elapsed_or_remaining(self, calc):
        stats = calc.calculate(Q1_2025, {}, {}, {}, today=date(2025, 1, 1))
        assert stats.current_average == 0.0

        after = calc.calculate(Q1_2025, {}, {}, {}, today=date(2025, 4, 1))
        assert after.days_remaining == 0
        assert after.required_future_average == 0.0

    def test_negative_goal_pace_ties_away_from_zero(self):
        two_days = Period("P", "P", date(2025, 1, 2), date(2025, 1, 3))

        stats = PeriodStatsCalculator(goal_percent=-50).calculate(
            two_days, {}, {}, {}, today=date(2025, 1, 3)
        )

        assert stats.days_required == -1
        # expected = 1 * -1 / 2 = -0.5, rounded to -1
        assert stats.days_ahead_of_pace == 1

    def test_zero_goal_is_not_replaced(self):
        stats = PeriodStatsCalculator(goal_percent=0).calculate(
            Q1_2025, {}, {}, {}, today=date(2025, 2, 1)
        )

        assert stats.days_required == 0
        assert stats.compliance_status == ComplianceStatus.ACHIEVED

    def test_datetime_today_is_normalized(self, calc):
        from datetime import datetime

        by_date = calc.calculate(Q1_2025, {}, {}, {}, today=date(2025, 1, 14))
        by_datetime = calc.calculate(Q1_2025, {}, {}, {}, today=datetime(2025, 1, 14, 17, 30))

        assert by_date == by_datetime

    def test_idempotent(self, calc):
        badges = badges_between(date(2025, 1, 2), date(2025, 1, 20))
        vacations = vacation_days(date(2025, 2, 3), date(2025, 2, 7))

        first = calc.calculate(Q1_2025, badges, NEW_YEAR, vacations, today=date(2025, 2, 10))
        second = calc.calculate(Q1_2025, badges, NEW_YEAR, vacations, today=date(2025, 2, 10))

        assert first == second
        assert first is not second
        assert first.workdays is not second.workdays

    def test_inputs_not_mutated(self, calc):
        badges = {"2025-01-02": badge("2025-01-02")}
        holidays = dict(NEW_YEAR)

        calc.calculate(Q1_2025, badges, holidays, {}, today=date(2025, 1, 10))

        assert list(badges) == ["2025-01-02"]
        assert list(holidays) == ["2025-01-01"]


class TestPaceRounding:
    """Tests for half-away-from-zero division."""

    @pytest.mark.parametrize("numerator, denominator, expected", [
        (9, 2, 5),
        (7, 2, 4),
        (-9, 2, -5),
        (-7, 2, -4),
        (-1, 2, -1),
        (1, 3, 0),
        (-1, 3, 0),
        (0, 5, 0),
    ])
    def test_ties_round_away_from_zero(self, numerator, denominator, expected):
        assert _round_half_away_div(numerator, denominator) == expected

    def test_projection_uses_exact_ceiling(self):
        # 1 badge-in over 49 elapsed days, 1 still needed: exactly 49 days out
        projected = PeriodStatsCalculator.project_completion(1, 49, 1, date(2025, 1, 1))
        assert projected == date(2025, 1, 1) + timedelta(days=49)


class TestYearStats:
    """Tests for PeriodStatsCalculator.calculate_year."""

    def test_no_periods_returns_none(self, calc):
        assert calc.calculate_year([], {}, {}, {}, today=date(2025, 1, 1)) is None

    def test_spans_all_periods(self, calc):
        stats = calc.calculate_year([Q2_2025, Q1_2025], {}, {}, {}, today=date(2025, 1, 1))

        assert stats.key == "Year"
        assert stats.name == "Year"
        assert stats.start_date == date(2025, 1, 1)
        assert stats.end_date == date(2025, 6, 30)
        assert stats.total_calendar_days == 181

    def test_matches_direct_calculation(self, calc):
        badges = badges_between(date(2025, 1, 2), date(2025, 4, 30))
        year_period = Period("Year", "Year", date(2025, 1, 1), date(2025, 6, 30))

        year = calc.calculate_year([Q1_2025, Q2_2025], badges, NEW_YEAR, {}, today=date(2025, 5, 1))
        direct = calc.calculate(year_period, badges, NEW_YEAR, {}, today=date(2025, 5, 1))

        assert year == direct


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
