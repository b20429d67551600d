"""
Text Report Module

Renders period statistics, holidays and vacations as plain text.
"""

from datetime import date
from typing import List, Optional

from domain.entities import Holiday, PeriodStats, Vacation


def format_date(day: date) -> str:
    """Format a date like 'Jan 2, 2025'."""
    return f"{day:%b} {day.day}, {day.year}"


def truncate(text: str, max_len: int) -> str:
    """Shorten text to max_len characters, ending with '...' when cut."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def format_stats(stats: PeriodStats, goal_percent: Optional[int] = None) -> str:
    """
    Render a PeriodStats summary.

    Args:
        stats: Statistics to render
        goal_percent: Goal shown next to the requirement line, if given
    """
    goal_label = f" ({goal_percent}%)" if goal_percent is not None else ""

    lines = [
        f"Period: {stats.name}  ({format_date(stats.start_date)} - {format_date(stats.end_date)})",
        "",
        f"  Status:               {stats.compliance_status}",
        f"  Days ahead of pace:   {stats.days_ahead_of_pace:+d}",
    ]
    if stats.remaining_missable_days >= 0:
        lines.append(f"  Skippable days left:  {stats.remaining_missable_days}")

    lines += [
        "",
        f"  Required badge-ins:   {stats.days_required} of {stats.qualifying_days} total days{goal_label}",
        f"  Badged in:            {stats.days_badged_in}",
        f"  Still needed:         {stats.days_still_needed}",
        "",
        f"  Badge-ins:            {stats.days_badged_in}  "
        f"({stats.office_days} office, {stats.flex_days} flex)",
        "",
        f"  Days worked so far:   {stats.days_elapsed}",
        f"  Days remaining:       {stats.days_remaining}",
    ]
    if stats.days_elapsed > 0:
        lines.append(f"  Current average:      {stats.current_average * 100:.1f}%")
    if stats.days_remaining > 0 and stats.days_still_needed > 0:
        lines.append(f"  Rate needed:          {stats.required_future_average * 100:.1f}%")

    if stats.projected_completion_date is not None:
        lines += [
            "",
            f"  Projected completion: {format_date(stats.projected_completion_date)}",
        ]

    lines += [
        "",
        f"  Holidays:             {stats.holiday_count}",
        f"  Vacation days:        {stats.vacation_days}",
        f"  Days off (remote):    {stats.days_off}",
        f"  Available workdays:   {stats.available_workdays}",
    ]
    return "\n".join(lines) + "\n"


def format_holidays(holidays: List[Holiday]) -> str:
    """Render holidays as a two-column table."""
    if not holidays:
        return "No holidays recorded.\n"

    lines = [
        f"{'Date':<12}  Name",
        f"{'-' * 12}  {'-' * 30}",
    ]
    for holiday in holidays:
        lines.append(f"{holiday.date:<12}  {holiday.name}")
    return "\n".join(lines) + "\n"


def format_vacations(vacations: List[Vacation]) -> str:
    """Render vacations as a numbered table."""
    if not vacations:
        return "No vacations recorded.\n"

    row = "{:<4}  {:<30}  {:<12}  {:<12}  {}"
    lines = [
        row.format("#", "Destination", "Start", "End", "Approved"),
        row.format("-" * 4, "-" * 30, "-" * 12, "-" * 12, "-" * 8),
    ]
    for index, vacation in enumerate(vacations, start=1):
        lines.append(row.format(
            index,
            truncate(vacation.destination, 30),
            vacation.start_date,
            vacation.end_date,
            "Yes" if vacation.approved else "No"
        ))
    return "\n".join(lines) + "\n"
