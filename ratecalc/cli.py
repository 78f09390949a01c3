"""
ratecalc/cli.py

Command-line front end: analyse one ShipStation CSV export and print the
store and special orders report, optionally exporting it as CSV or Excel.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from ratecalc.config import ReportSettings, get_report_settings
from ratecalc.domain.datasets import DateRange
from ratecalc.logging_utils import configure_logging
from ratecalc.reporting.console_reporter import render_report
from ratecalc.reporting.excel_exporter import save_excel_report
from ratecalc.reporting.report_exporter import save_csv_report
from ratecalc.services.csv_reader_service import list_csv_files, read_csv_file
from ratecalc.services.date_filter import parse_date_range
from ratecalc.services.metrics_service import get_metrics_service

logger = logging.getLogger(__name__)

_DEFAULT_EXPORT = "__default__"


class SelectionError(ValueError):
    """
    Raised when no input file could be chosen interactively.
    """


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calculate_rates",
        description="Calculate shipping rates and store metrics from a ShipStation CSV export.",
    )
    parser.add_argument(
        "filename",
        nargs="?",
        default=None,
        help="CSV file to analyse; looked up in the orders directory when not found as given.",
    )
    parser.add_argument("-s", "--store-only", action="store_true", help="Show store metrics only.")
    parser.add_argument("-t", "--tag-only", action="store_true", help="Show special orders only.")
    parser.add_argument("-c", "--compact", action="store_true", help="Print tables without details.")
    parser.add_argument(
        "-d",
        "--date-range",
        dest="date_range",
        default=None,
        help="Inclusive filter in MM/DD/YY-MM/DD/YY format.",
    )
    parser.add_argument(
        "--export-csv",
        nargs="?",
        const=_DEFAULT_EXPORT,
        default=None,
        metavar="PATH",
        help="Write the report as CSV (default name in the output directory).",
    )
    parser.add_argument(
        "--export-excel",
        nargs="?",
        const=_DEFAULT_EXPORT,
        default=None,
        metavar="PATH",
        help="Write the report as an Excel workbook.",
    )
    return parser


def choose_file(settings: ReportSettings, input_func: Callable[[str], str]) -> Path:
    """
    List the orders directory and ask which CSV to analyse.
    """

    files = list_csv_files(settings.orders_dir)
    if not files:
        raise SelectionError(f"No CSV files found in {settings.orders_dir}.")

    print(f"\nCSV files in {settings.orders_dir}:")
    for index, path in enumerate(files, start=1):
        print(f"  {index}. {path.name}")

    answer = input_func("Select a file number: ").strip()
    try:
        choice = int(answer)
    except ValueError as exc:
        raise SelectionError(f"Invalid selection: {answer!r}") from exc
    if not 1 <= choice <= len(files):
        raise SelectionError(f"Selection out of range: {choice}")
    return files[choice - 1]


def _export_target(value: str) -> Path | None:
    return None if value == _DEFAULT_EXPORT else Path(value)


def main(
    argv: Sequence[str] | None = None,
    *,
    input_func: Callable[[str], str] = input,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    settings = get_report_settings()

    try:
        date_range: DateRange | None
        if args.filename is None:
            file_path = choose_file(settings, input_func)
            date_range = parse_date_range(
                args.date_range
                if args.date_range is not None
                else input_func("Date range (MM/DD/YY-MM/DD/YY, empty for all): ")
            )
        else:
            file_path = Path(args.filename)
            date_range = parse_date_range(args.date_range)

        dataset = read_csv_file(file_path, orders_dir=settings.orders_dir)
        report = get_metrics_service().build_report(dataset, date_range=date_range)

        print(f"\nAnalysing {dataset.source_name}: {report.record_count} records")
        if date_range is not None:
            print(f"Period: {date_range.period_name}")
        print(
            render_report(
                report,
                preferred_order=settings.store_display_order,
                include_stores=not args.tag_only,
                include_tags=not args.store_only,
                compact=args.compact,
            )
        )

        if args.export_csv is not None:
            path = save_csv_report(
                report,
                output_dir=settings.output_dir,
                output_path=_export_target(args.export_csv),
                preferred_order=settings.store_display_order,
            )
            print(f"\nCSV report saved to {path}")
        if args.export_excel is not None:
            path = save_excel_report(
                report,
                output_dir=settings.output_dir,
                output_path=_export_target(args.export_excel),
                preferred_order=settings.store_display_order,
            )
            print(f"Excel report saved to {path}")
    except (OSError, ValueError) as exc:
        logger.debug("calculate_rates failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0
