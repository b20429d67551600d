"""
Unit tests for PdfWriter period report generation.
"""

import pytest
from datetime import date
from pathlib import Path
import tempfile

import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities import BadgeEntry, Period
from domain.period_calculator import PeriodStatsCalculator
from infrastructure.pdf_writer import FALLBACK_FONT, PdfWriter, StatsPdf, format_filename


class TestFormatFilename:
    """Tests for format_filename utility function."""

    def test_basic_formatting(self):
        assert format_filename("RTO_{period}.pdf", "Q1_2025") == "RTO_Q1_2025.pdf"

    def test_pattern_without_placeholder(self):
        assert format_filename("report.pdf", "Q1_2025") == "report.pdf"


class TestStatsPdf:
    """Tests for StatsPdf class."""

    def test_initialization(self):
        pdf = StatsPdf(title="Test Report")
        assert pdf.title_text == "Test Report"
        assert pdf.font_family_name == FALLBACK_FONT

    def test_missing_custom_font_falls_back(self):
        pdf = StatsPdf(title="Test", custom_font_path="/no/such/font.ttf")
        assert pdf.font_family_name == FALLBACK_FONT


class TestPdfWriter:
    """Tests for PdfWriter class."""

    @pytest.fixture
    def quarter_stats(self):
        calc = PeriodStatsCalculator(50)
        q1 = Period("Q1_2025", "Q1", date(2025, 1, 1), date(2025, 3, 31))
        q2 = Period("Q2_2025", "Q2", date(2025, 4, 1), date(2025, 6, 30))
        badges = {"2025-01-02": BadgeEntry("2025-01-02")}
        return [
            calc.calculate(q1, badges, {}, {}, today=date(2025, 3, 31)),
            calc.calculate(q2, {}, {}, {}, today=date(2025, 4, 1)),
        ]

    def test_create_report_empty_list(self):
        """Empty stats list returns early without a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "test.pdf"

            PdfWriter().create_report([], output_path)

            assert not output_path.exists()

    def test_create_report_generates_file(self, quarter_stats):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "output" / "report.pdf"

            PdfWriter().create_report(quarter_stats, output_path)

            assert output_path.exists()
            assert output_path.read_bytes().startswith(b"%PDF")

    def test_one_page_per_period(self, quarter_stats):
        pdf = StatsPdf(title="Pages")
        writer = PdfWriter()
        for stats in quarter_stats:
            pdf.add_page()
            writer._draw_period(pdf, stats)

        assert pdf.page_no() == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
