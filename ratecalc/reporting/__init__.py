"""
ratecalc/reporting package marker.
"""

from ratecalc.reporting.console_reporter import render_report
from ratecalc.reporting.excel_exporter import build_excel_report, save_excel_report
from ratecalc.reporting.report_exporter import build_csv_report, save_csv_report

__all__ = [
    "render_report",
    "build_excel_report",
    "save_excel_report",
    "build_csv_report",
    "save_csv_report",
]
