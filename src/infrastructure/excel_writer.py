"""
Excel Writer Module

Generates formatted Excel reports of period statistics with styling.
Applies color formatting based on compliance status and workday flags.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from domain.entities import ComplianceStatus, PeriodStats, Workday
from infrastructure.logger import get_logger

logger = get_logger("ExcelWriter")

WEEKDAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


def workday_label(workday: Workday) -> str:
    """Short status label for a workday."""
    if workday.is_holiday:
        return "Holiday"
    if workday.is_vacation:
        return "Vacation"
    if workday.is_flex_credit:
        return "Flex"
    if workday.is_badged_in:
        return "Office"
    return ""


def summary_rows(stats: PeriodStats) -> List[Tuple[str, object]]:
    """Label/value pairs shown in exported summaries."""
    projected = stats.projected_completion_date
    return [
        ("Period", stats.name),
        ("Start", stats.start_date.isoformat()),
        ("End", stats.end_date.isoformat()),
        ("Status", str(stats.compliance_status)),
        ("Days ahead of pace", stats.days_ahead_of_pace),
        ("Skippable days left", stats.remaining_missable_days),
        ("Required badge-ins", stats.days_required),
        ("Qualifying days", stats.qualifying_days),
        ("Badged in", stats.days_badged_in),
        ("Office days", stats.office_days),
        ("Flex days", stats.flex_days),
        ("Still needed", stats.days_still_needed),
        ("Days worked so far", stats.days_elapsed),
        ("Days remaining", stats.days_remaining),
        ("Current average", f"{stats.current_average * 100:.1f}%"),
        ("Rate needed", f"{stats.required_future_average * 100:.1f}%"),
        ("Projected completion", projected.isoformat() if projected else ""),
        ("Holidays", stats.holiday_count),
        ("Vacation days", stats.vacation_days),
        ("Days off (remote)", stats.days_off),
        ("Available workdays", stats.available_workdays),
        ("Calendar days", stats.total_calendar_days),
    ]


class ExcelWriter:
    """
    Generates formatted Excel period reports.

    Output format:
    - Sheet "Summary": one label/value row per statistic
    - Sheet "Calendar": one row per weekday with its status

    Styling:
    - Status cell colored by compliance status
    - Calendar rows colored by workday flags
    """

    COLORS = {
        'green': PatternFill(start_color='90EE90', end_color='90EE90', fill_type='solid'),
        'red': PatternFill(start_color='FF6B6B', end_color='FF6B6B', fill_type='solid'),
        'yellow': PatternFill(start_color='FFD700', end_color='FFD700', fill_type='solid'),
        'orange': PatternFill(start_color='FFA500', end_color='FFA500', fill_type='solid'),
        'blue': PatternFill(start_color='6B8CFF', end_color='6B8CFF', fill_type='solid'),
        'purple': PatternFill(start_color='DDA0DD', end_color='DDA0DD', fill_type='solid'),
        'header': PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid'),
    }

    STATUS_COLORS = {
        ComplianceStatus.ACHIEVED: 'green',
        ComplianceStatus.ON_TRACK: 'blue',
        ComplianceStatus.AT_RISK: 'orange',
        ComplianceStatus.IMPOSSIBLE: 'red',
    }

    BORDER = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    def __init__(self):
        self.wb: Optional[Workbook] = None

    def _get_fill(self, color_name: Optional[str]) -> Optional[PatternFill]:
        """Get PatternFill for a color name, None for no color."""
        if not color_name:
            return None
        return self.COLORS.get(color_name)

    @staticmethod
    def workday_color(workday: Workday) -> Optional[str]:
        """Color name for a workday row, None when unmarked."""
        if workday.is_holiday:
            return 'yellow'
        if workday.is_vacation:
            return 'purple'
        if workday.is_flex_credit:
            return 'blue'
        if workday.is_badged_in:
            return 'green'
        return None

    def create_report(self, stats: PeriodStats, output_path: Path) -> Path:
        """
        Create an Excel report for one period.

        Args:
            stats: Period statistics to export
            output_path: Path to save the Excel file

        Returns:
            Path to the created file
        """
        self.wb = Workbook()

        summary_ws = self.wb.active
        summary_ws.title = "Summary"
        self._write_summary_sheet(summary_ws, stats)

        calendar_ws = self.wb.create_sheet("Calendar")
        self._write_calendar_sheet(calendar_ws, stats)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(output_path)
        logger.info(f"Excel report saved: {output_path}")
        return output_path

    def _write_header(self, ws, headers: List[str]) -> None:
        for col, title in enumerate(headers, start=1):
            cell = ws.cell(1, col, title)
            cell.font = Font(bold=True, color='FFFFFF')
            cell.fill = self.COLORS['header']
            cell.alignment = Alignment(horizontal='center')
            cell.border = self.BORDER

    def _write_summary_sheet(self, ws, stats: PeriodStats) -> None:
        self._write_header(ws, ["Statistic", "Value"])

        for row, (label, value) in enumerate(summary_rows(stats), start=2):
            label_cell = ws.cell(row, 1, label)
            label_cell.font = Font(bold=True)
            label_cell.border = self.BORDER

            value_cell = ws.cell(row, 2, value)
            value_cell.alignment = Alignment(horizontal='center')
            value_cell.border = self.BORDER

            if label == "Status":
                fill = self._get_fill(self.STATUS_COLORS.get(stats.compliance_status))
                if fill:
                    value_cell.fill = fill

        ws.column_dimensions['A'].width = 24
        ws.column_dimensions['B'].width = 16

    def _write_calendar_sheet(self, ws, stats: PeriodStats) -> None:
        self._write_header(ws, ["Date", "Weekday", "Status"])

        workdays = sorted(stats.workdays.values(), key=lambda w: w.date)
        for row, workday in enumerate(workdays, start=2):
            cells = [
                ws.cell(row, 1, workday.key),
                ws.cell(row, 2, WEEKDAY_NAMES[workday.date.weekday()]),
                ws.cell(row, 3, workday_label(workday)),
            ]
            fill = self._get_fill(self.workday_color(workday))
            for cell in cells:
                cell.border = self.BORDER
                cell.alignment = Alignment(horizontal='center')
                if fill:
                    cell.fill = fill

        for col, width in enumerate((14, 10, 12), start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.freeze_panes = "A2"
