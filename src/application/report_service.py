"""
Report Service Module

Application layer service that orchestrates loading attendance data,
computing period statistics and exporting reports.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional

from config.config_manager import AppConfig
from domain.entities import Period, PeriodStats
from domain.period_calculator import PeriodStatsCalculator
from infrastructure.badge_repository import BadgeRepository
from infrastructure.holiday_repository import HolidayRepository
from infrastructure.logger import get_logger
from infrastructure.period_repository import PeriodRepository
from infrastructure.vacation_repository import VacationRepository

logger = get_logger("ReportService")


@dataclass
class ReportParams:
    """
    Parameters for the report service.

    Decouples the service from the full AppConfig.
    """
    data_dir: Path
    goal: int
    period_file: str = ""
    custom_font_path: Optional[str] = None


class ReportService:
    """
    Application service for period statistics.

    This service:
    - Loads periods, badge entries, holidays and vacations from the data directory
    - Runs the period calculator on the loaded data
    - Exports statistics to Excel and PDF
    """

    def __init__(self, params: ReportParams):
        self.params = params
        self.periods = PeriodRepository(params.data_dir, params.period_file)
        self.badges = BadgeRepository(params.data_dir)
        self.holidays = HolidayRepository(params.data_dir)
        self.vacations = VacationRepository(params.data_dir)
        self.calculator = PeriodStatsCalculator(params.goal)
        self._loaded = False

    def load(self) -> None:
        """
        Load all data files.

        Raises:
            DataError: If any data file cannot be parsed
        """
        logger.info(f"Loading data from {self.params.data_dir}")
        self.periods.load()
        self.badges.load()
        self.holidays.load()
        self.vacations.load()
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _calculate(self, period: Period, today: Optional[date]) -> PeriodStats:
        stats = self.calculator.calculate(
            period,
            self.badges.get_badge_map(period.start_date, period.end_date),
            self.holidays.get_holiday_map(),
            self.vacations.get_vacation_map(),
            today
        )
        logger.info(
            f"{period.key}: {stats.compliance_status}, "
            f"{stats.days_badged_in}/{stats.days_required} badge-ins"
        )
        return stats

    def period_stats(self, key: str, today: Optional[date] = None) -> PeriodStats:
        """
        Compute statistics for the period with the given key.

        Raises:
            PeriodNotFoundError: If no period has the key
        """
        self._ensure_loaded()
        return self._calculate(self.periods.get_by_key(key), today)

    def current_period_stats(self, today: Optional[date] = None) -> PeriodStats:
        """
        Compute statistics for the period containing today.

        Raises:
            PeriodNotFoundError: If no period contains today
        """
        self._ensure_loaded()
        return self._calculate(self.periods.get_current(today), today)

    def year_stats(self, year: int, today: Optional[date] = None) -> Optional[PeriodStats]:
        """
        Compute statistics spanning all periods that start in a year.

        Returns:
            PeriodStats named "Year", or None if no period starts in the year
        """
        self._ensure_loaded()
        periods = self.periods.periods_in_year(year)
        if not periods:
            logger.info(f"No periods start in {year}")
            return None

        start, end = min(p.start_date for p in periods), max(p.end_date for p in periods)
        return self.calculator.calculate_year(
            periods,
            self.badges.get_badge_map(start, end),
            self.holidays.get_holiday_map(),
            self.vacations.get_vacation_map(),
            today
        )

    def export_excel(self, stats: PeriodStats, output_path: Path) -> Path:
        """Write an Excel report for one period."""
        from infrastructure.excel_writer import ExcelWriter

        logger.info(f"Writing Excel report: {output_path}")
        return ExcelWriter().create_report(stats, output_path)

    def export_pdf(self, stats_list: List[PeriodStats], output_path: Path) -> bool:
        """
        Write a PDF report with one page per period.

        PDF failures are logged and reported as False rather than raised.
        """
        from fpdf.errors import FPDFException

        from infrastructure.pdf_writer import PdfWriter

        logger.info(f"Writing PDF report: {output_path}")
        try:
            PdfWriter(custom_font_path=self.params.custom_font_path).create_report(
                stats_list, output_path
            )
        except (FPDFException, OSError) as e:
            logger.error(f"PDF generation failed: {e}")
            return False
        return True

    @staticmethod
    def build_params_from_config(config: AppConfig, data_dir: Path) -> ReportParams:
        """
        Build ReportParams from AppConfig.

        Args:
            config: Application configuration
            data_dir: Directory holding the data files

        Returns:
            ReportParams ready for ReportService
        """
        return ReportParams(
            data_dir=Path(data_dir),
            goal=config.settings.goal,
            period_file=config.settings.active_time_period_file(0),
            custom_font_path=config.paths.custom_font_path or None
        )
