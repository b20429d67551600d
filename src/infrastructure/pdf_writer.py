"""
PDF Writer Module

Generates PDF period reports using fpdf2.
Replicates the Excel summary sheet with a colored compliance status band.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fpdf import FPDF

from domain.entities import ComplianceStatus, PeriodStats
from infrastructure.excel_writer import summary_rows
from infrastructure.logger import get_logger

logger = get_logger("PdfWriter")

FALLBACK_FONT = "Helvetica"


def format_filename(pattern: str, period_key: str) -> str:
    """
    Format a filename pattern with the period placeholder.

    Args:
        pattern: Filename pattern with {period} placeholder
        period_key: Period key (e.g. "Q1_2025")

    Returns:
        Formatted filename string
    """
    return pattern.format(period=period_key)


# ==============================================================================
# StatsPdf Class (A4 Portrait)
# ==============================================================================
class StatsPdf(FPDF):
    """
    Custom FPDF class for A4 portrait period reports.
    """

    _font_family: str = FALLBACK_FONT

    def __init__(self, title: str = "", custom_font_path: Optional[str] = None):
        super().__init__(orientation='P', unit='mm', format='A4')
        self.title_text = title
        self._setup_font(custom_font_path)

    def _setup_font(self, custom_font_path: Optional[str] = None) -> None:
        """Load a custom TTF font if configured, else use the core font."""
        if not custom_font_path:
            return
        font_path = Path(custom_font_path)
        if not font_path.exists():
            logger.warning(f"Custom font path does not exist: {font_path}")
            return
        try:
            self.add_font("CustomFont", "", str(font_path))
            self._font_family = "CustomFont"
            logger.info(f"Loaded custom font: {font_path.name}")
        except (OSError, RuntimeError) as e:
            logger.warning(f"Cannot load font {font_path}: {e}")

    @property
    def font_family_name(self) -> str:
        return self._font_family

    def header(self) -> None:
        """Draw page header with centered title."""
        self.set_font(self._font_family, '', 14)
        self.cell(0, 10, self.title_text, align='C', new_x='LMARGIN', new_y='NEXT')
        self.ln(3)

    def footer(self) -> None:
        """Draw page footer with page number."""
        self.set_y(-12)
        self.set_font(self._font_family, '', 8)
        self.cell(0, 10, f'Page {self.page_no()}/{{nb}}', align='C')


# ==============================================================================
# PdfWriter Class
# ==============================================================================
class PdfWriter:
    """
    Generates PDF period reports, one page per period.
    """

    # RGB Color definitions (matching ExcelWriter)
    COLORS: Dict[str, Tuple[int, int, int]] = {
        'green': (144, 238, 144),
        'red': (255, 107, 107),
        'orange': (255, 165, 0),
        'blue': (107, 140, 255),
        'header': (68, 114, 196),
        'white': (255, 255, 255),
    }

    STATUS_COLORS: Dict[ComplianceStatus, str] = {
        ComplianceStatus.ACHIEVED: 'green',
        ComplianceStatus.ON_TRACK: 'blue',
        ComplianceStatus.AT_RISK: 'orange',
        ComplianceStatus.IMPOSSIBLE: 'red',
    }

    LABEL_COL_WIDTH = 70
    VALUE_COL_WIDTH = 50
    ROW_HEIGHT = 7
    BAND_HEIGHT = 10

    def __init__(self, custom_font_path: Optional[str] = None):
        self._custom_font_path = custom_font_path

    def create_report(
        self,
        stats_list: List[PeriodStats],
        output_path: Path,
        title: str = "Office Attendance Report"
    ) -> None:
        """
        Create a PDF report with one page per period.

        An empty list returns early without creating a file.
        """
        if not stats_list:
            return

        pdf = StatsPdf(title=title, custom_font_path=self._custom_font_path)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=15)

        for stats in stats_list:
            pdf.add_page()
            self._draw_period(pdf, stats)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        logger.info(f"PDF report saved: {output_path}")

    def _draw_period(self, pdf: StatsPdf, stats: PeriodStats) -> None:
        """Draw a status band and the summary table for one period."""
        color = self.COLORS[self.STATUS_COLORS[stats.compliance_status]]
        table_width = self.LABEL_COL_WIDTH + self.VALUE_COL_WIDTH

        pdf.set_font(pdf.font_family_name, '', 12)
        pdf.set_fill_color(*color)
        pdf.set_text_color(0, 0, 0)
        pdf.cell(
            table_width, self.BAND_HEIGHT,
            f"{stats.name}: {stats.compliance_status}",
            border=1, align='C', fill=True, new_x='LMARGIN', new_y='NEXT'
        )
        pdf.ln(4)

        # Header row
        pdf.set_font(pdf.font_family_name, '', 10)
        pdf.set_fill_color(*self.COLORS['header'])
        pdf.set_text_color(255, 255, 255)
        pdf.cell(self.LABEL_COL_WIDTH, self.ROW_HEIGHT, "Statistic", border=1, align='C', fill=True)
        pdf.cell(
            self.VALUE_COL_WIDTH, self.ROW_HEIGHT, "Value",
            border=1, align='C', fill=True, new_x='LMARGIN', new_y='NEXT'
        )

        pdf.set_text_color(0, 0, 0)
        for label, value in summary_rows(stats):
            pdf.cell(self.LABEL_COL_WIDTH, self.ROW_HEIGHT, label, border=1)
            pdf.cell(
                self.VALUE_COL_WIDTH, self.ROW_HEIGHT, str(value),
                border=1, align='C', new_x='LMARGIN', new_y='NEXT'
            )
