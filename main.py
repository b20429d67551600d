"""
Office Attendance Tracker

Tracks office badge-in days against a compliance goal over fiscal periods
and reports pace, projection and compliance status.
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from application.record_service import RecordService
from application.report_service import ReportService
from application.setup_service import initialize_data_dir, needs_init
from application.text_report import format_holidays, format_stats, format_vacations
from config.config_manager import DEFAULT_DATA_DIR, ConfigManager
from infrastructure.holiday_repository import HolidayRepository
from infrastructure.persistence import DataError
from infrastructure.pdf_writer import format_filename
from infrastructure.vacation_repository import VacationRepository


def _parse_date(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="rto",
        description="Track office badge-in days and compliance with return-to-office goals."
    )
    parser.add_argument(
        "--data-dir", default=DEFAULT_DATA_DIR,
        help=f"directory holding data files (default: {DEFAULT_DATA_DIR})"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="initialize data files with defaults")

    stats_parser = subparsers.add_parser(
        "stats", help="print statistics for a time period (current period if omitted)"
    )
    stats_parser.add_argument("period_key", nargs="?", help="period key, e.g. Q1_2025")
    stats_parser.add_argument("--year", type=int, help="aggregate all periods starting in YEAR")
    stats_parser.add_argument("--today", type=_parse_date, help="reference date (YYYY-MM-DD)")
    stats_parser.add_argument(
        "--excel", nargs="?", const="", metavar="PATH",
        help="also write an Excel report (to the configured output location if PATH is omitted)"
    )
    stats_parser.add_argument(
        "--pdf", nargs="?", const="", metavar="PATH",
        help="also write a PDF report (to the configured output location if PATH is omitted)"
    )

    badge_parser = subparsers.add_parser(
        "badge", help="record an office badge-in (or flex credit) for a date"
    )
    badge_parser.add_argument("date", type=_parse_date, help="date (YYYY-MM-DD)")
    badge_mode = badge_parser.add_mutually_exclusive_group()
    badge_mode.add_argument("--flex", action="store_true", help="record a flex credit instead")
    badge_mode.add_argument("--remove", action="store_true", help="remove the entry for the date")

    holidays_parser = subparsers.add_parser("holidays", help="list or add holidays")
    holiday_actions = holidays_parser.add_subparsers(dest="action")
    holiday_add = holiday_actions.add_parser("add", help="add a holiday")
    holiday_add.add_argument("date", type=_parse_date, help="date (YYYY-MM-DD)")
    holiday_add.add_argument("name", help="holiday name")

    vacations_parser = subparsers.add_parser("vacations", help="list, add or remove vacations")
    vacation_actions = vacations_parser.add_subparsers(dest="action")
    vacation_add = vacation_actions.add_parser("add", help="add a vacation")
    vacation_add.add_argument("start", type=_parse_date, help="first day (YYYY-MM-DD)")
    vacation_add.add_argument("end", type=_parse_date, help="last day (YYYY-MM-DD)")
    vacation_add.add_argument("destination", help="destination or label")
    vacation_add.add_argument("--approved", action="store_true", help="mark as approved")
    vacation_remove = vacation_actions.add_parser("remove", help="remove a vacation")
    vacation_remove.add_argument("start", type=_parse_date, help="first day (YYYY-MM-DD)")
    vacation_remove.add_argument("end", type=_parse_date, help="last day (YYYY-MM-DD)")
    return parser


def run_stats(args, data_dir: Path) -> int:
    """Print period statistics and write optional exports."""
    config = ConfigManager.for_data_dir(data_dir).load()
    service = ReportService(ReportService.build_params_from_config(config, data_dir))

    if args.year is not None:
        stats = service.year_stats(args.year, args.today)
        if stats is None:
            print(f"No time periods found for {args.year}.")
            return 1
    elif args.period_key:
        stats = service.period_stats(args.period_key, args.today)
    else:
        stats = service.current_period_stats(args.today)

    sys.stdout.write(format_stats(stats, config.settings.goal))

    output = config.output_settings
    output_dir = Path(output.output_dir or ".")

    if args.excel is not None:
        excel_path = Path(args.excel) if args.excel else output_dir / format_filename(
            output.filename_pattern, stats.key
        )
        service.export_excel(stats, excel_path)

    if args.pdf is not None or output.generate_pdf:
        pdf_path = Path(args.pdf) if args.pdf else output_dir / format_filename(
            output.pdf_filename_pattern, stats.key
        )
        if not service.export_pdf([stats], pdf_path):
            print(f"Warning: PDF report could not be written to {pdf_path}", file=sys.stderr)
    return 0


def run_badge(args, recorder: RecordService) -> int:
    """Record or remove a badge entry."""
    if args.remove:
        if not recorder.remove_badge(args.date):
            print(f"No badge entry for {args.date.isoformat()}.")
            return 1
        print(f"Removed badge entry for {args.date.isoformat()}.")
        return 0

    entry = recorder.record_badge(args.date, flex=args.flex)
    kind = "flex credit" if entry.is_flex_credit else "badge-in"
    print(f"Recorded {kind} for {entry.entry_date} ({entry.office}).")
    return 0


def run_holidays(args, data_dir: Path, recorder: RecordService) -> int:
    """List holidays or add one."""
    if args.action == "add":
        holiday = recorder.add_holiday(args.date, args.name)
        print(f"Added holiday {holiday.name} on {holiday.date}.")
        return 0

    sys.stdout.write(format_holidays(HolidayRepository(data_dir).load().all()))
    return 0


def run_vacations(args, data_dir: Path, recorder: RecordService) -> int:
    """List, add or remove vacations."""
    if args.action == "add":
        vacation = recorder.add_vacation(args.start, args.end, args.destination, args.approved)
        print(f"Added vacation {vacation.start_date} - {vacation.end_date} ({vacation.destination}).")
        return 0
    if args.action == "remove":
        if not recorder.remove_vacation(args.start, args.end):
            print(f"No vacation from {args.start.isoformat()} to {args.end.isoformat()}.")
            return 1
        print(f"Removed vacation {args.start.isoformat()} - {args.end.isoformat()}.")
        return 0

    sys.stdout.write(format_vacations(VacationRepository(data_dir).load().all()))
    return 0


def main(argv=None) -> int:
    """Application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    data_dir = Path(args.data_dir)

    if args.command == "stats" and args.period_key and args.year is not None:
        parser.error("stats: give either a period key or --year, not both")
    if args.command == "vacations" and args.action == "add" and args.start > args.end:
        parser.error("vacations add: start date is after end date")

    try:
        if args.command == "init":
            created = initialize_data_dir(data_dir)
            print(f"Initialized data files in: {data_dir} ({len(created)} created)")
            return 0

        if needs_init(data_dir):
            print("Data directory not initialized. Running 'rto init'...", file=sys.stderr)
            initialize_data_dir(data_dir)

        if args.command == "stats":
            return run_stats(args, data_dir)

        recorder = RecordService(data_dir, ConfigManager.for_data_dir(data_dir).load().settings)
        if args.command == "badge":
            return run_badge(args, recorder)
        if args.command == "holidays":
            return run_holidays(args, data_dir, recorder)
        if args.command == "vacations":
            return run_vacations(args, data_dir, recorder)
    except (DataError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
