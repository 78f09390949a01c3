"""
ratecalc/reporting/excel_exporter.py

Excel workbook export of a metrics report.

Sheets
------
Overview        : report metadata and the headline totals
Store Metrics   : one row per store with every numeric field, plus TOTAL
Special Orders  : one row per tag with counts, shares and costs, plus TOTAL

Cells hold numbers, not formatted strings, so the workbook stays sortable.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import pandas as pd

from ratecalc.domain.datasets import MetricsReport
from ratecalc.logging_utils import log_event
from ratecalc.reporting.formatting import TAG_DESCRIPTIONS, period_from_source
from shipping_metrics.summary import order_stores, sort_tags

logger = logging.getLogger(__name__)

OVERVIEW_SHEET = "Overview"
STORE_SHEET = "Store Metrics"
TAG_SHEET = "Special Orders"

STORE_COLUMNS: dict[str, str] = {
    "count": "Orders",
    "total_order_value": "Order Value",
    "average_order_value": "AOV",
    "total_rate": "Ship Cost",
    "average_rate": "Avg Ship Cost",
    "total_shipping_paid": "Ship Paid",
    "average_shipping_paid": "Avg Ship Paid",
    "shipping_profit": "Ship Profit",
    "shipping_profit_margin": "Ship Margin %",
    "net_revenue": "Net Revenue",
    "net_revenue_margin": "Net Margin %",
}


def build_overview_frame(report: MetricsReport) -> pd.DataFrame:
    summary = report.store_summary
    tag_summary = report.tag_summary
    rows = [
        ("Source File", report.source_name),
        ("Period", report.period_name or period_from_source(report.source_name)),
        ("Records Analysed", report.record_count),
        ("Stores", summary.store_count),
        ("Total Orders", summary.total_orders),
        ("Total Order Value", summary.total_order_value),
        ("Total Ship Cost", summary.total_rate),
        ("Total Ship Paid", summary.total_shipping_paid),
        ("Total Ship Profit", summary.total_shipping_profit),
        ("Ship Margin %", summary.shipping_profit_margin),
        ("Total Net Revenue", summary.total_net_revenue),
        ("Net Margin %", summary.net_revenue_margin),
        ("Special Orders", tag_summary.total_tagged_orders),
        ("Special Orders % of All", tag_summary.percent_of_all_orders),
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def build_store_frame(report: MetricsReport, preferred_order: Sequence[str] = ()) -> pd.DataFrame:
    """
    Numeric store table; the last row is TOTAL.
    """
    records = []
    for store in order_stores(report.store_metrics, preferred_order):
        entry = report.store_metrics[store].to_dict()
        records.append({"Store": store, **{label: entry[key] for key, label in STORE_COLUMNS.items()}})

    summary = report.store_summary
    records.append(
        {
            "Store": "TOTAL",
            "Orders": summary.total_orders,
            "Order Value": summary.total_order_value,
            "AOV": summary.average_order_value,
            "Ship Cost": summary.total_rate,
            "Avg Ship Cost": None,
            "Ship Paid": summary.total_shipping_paid,
            "Avg Ship Paid": None,
            "Ship Profit": summary.total_shipping_profit,
            "Ship Margin %": summary.shipping_profit_margin,
            "Net Revenue": summary.total_net_revenue,
            "Net Margin %": summary.net_revenue_margin,
        }
    )
    return pd.DataFrame(records, columns=["Store", *STORE_COLUMNS.values()])


def build_tag_frame(report: MetricsReport) -> pd.DataFrame:
    """
    Numeric special orders table; the last row is TOTAL.
    """
    summary = report.tag_summary
    records = []
    for tag in sort_tags(report.tag_metrics):
        entry = report.tag_metrics[tag]
        share = summary.shares[tag]
        records.append(
            {
                "Tag": tag,
                "Description": TAG_DESCRIPTIONS.get(tag, ""),
                "Orders": entry.count,
                "% of All Orders": share.percent_of_all_orders,
                "% of Special Orders": share.percent_of_tagged_orders,
                "Total Ship Cost": entry.total_rate,
                "% of Special Cost": share.percent_of_tagged_cost,
                "Avg Ship Cost": entry.average_rate,
            }
        )
    records.append(
        {
            "Tag": "TOTAL",
            "Description": "",
            "Orders": summary.total_tagged_orders,
            "% of All Orders": summary.percent_of_all_orders,
            "% of Special Orders": 100.0 if summary.total_tagged_orders else 0.0,
            "Total Ship Cost": summary.total_rate,
            "% of Special Cost": 100.0 if summary.total_rate else 0.0,
            "Avg Ship Cost": summary.average_rate,
        }
    )
    return pd.DataFrame(records)


def _autosize_columns(writer: pd.ExcelWriter, sheet_name: str, frame: pd.DataFrame) -> None:
    worksheet = writer.sheets[sheet_name]
    for index, column in enumerate(frame.columns, start=1):
        values = [str(column), *(str(value) for value in frame[column].tolist())]
        width = min(max(len(value) for value in values) + 2, 60)
        worksheet.column_dimensions[worksheet.cell(row=1, column=index).column_letter].width = width


def write_workbook(
    report: MetricsReport,
    target: Path | io.BytesIO,
    *,
    preferred_order: Sequence[str] = (),
) -> None:
    """
    Write the three report sheets to a path or an in-memory buffer.
    """
    frames = {
        OVERVIEW_SHEET: build_overview_frame(report),
        STORE_SHEET: build_store_frame(report, preferred_order),
        TAG_SHEET: build_tag_frame(report),
    }
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        for sheet_name, frame in frames.items():
            frame.to_excel(writer, sheet_name=sheet_name, index=False)
            _autosize_columns(writer, sheet_name, frame)


def build_excel_report(report: MetricsReport, *, preferred_order: Sequence[str] = ()) -> bytes:
    """
    Workbook bytes, e.g. for a download button.
    """
    buffer = io.BytesIO()
    write_workbook(report, buffer, preferred_order=preferred_order)
    return buffer.getvalue()


def default_workbook_name(source_name: str | None, *, now: datetime | None = None) -> str:
    timestamp = (now or datetime.now(tz=timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{period_from_source(source_name)}_ShipStation_Report_{timestamp}.xlsx"


def save_excel_report(
    report: MetricsReport,
    *,
    output_dir: Path,
    output_path: Path | None = None,
    preferred_order: Sequence[str] = (),
) -> Path:
    """
    Write the workbook and return its path.
    """
    target = output_path or output_dir / default_workbook_name(report.source_name)
    target.parent.mkdir(parents=True, exist_ok=True)
    write_workbook(report, target, preferred_order=preferred_order)
    log_event(logger, logging.INFO, "excel_report_written", path=str(target))
    return target
