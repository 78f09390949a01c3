"""
ratecalc/reporting/report_exporter.py

CSV text export of a metrics report.

The file starts with a UTF-8 byte order mark so spreadsheet tools detect the
encoding, then holds the store section, per-store summaries, the special
orders section and per-tag details, one quoted cell per field.
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import pandas as pd

from ratecalc.domain.datasets import MetricsReport
from ratecalc.logging_utils import log_event
from ratecalc.reporting.console_reporter import build_store_table, build_tag_table
from ratecalc.reporting.formatting import (
    STORE_LEGEND,
    TAG_DESCRIPTIONS,
    TAG_LEGEND,
    format_currency,
    format_percentage,
    period_from_source,
)
from shipping_metrics.summary import sort_stores_by_count, sort_tags

logger = logging.getLogger(__name__)

BOM = "\ufeff"


def default_report_name(source_name: str | None, *, now: datetime | None = None) -> str:
    """
    ``<period>_ShipStation_Report_<YYYY-MM-DDTHH-MM-SS>.csv``
    """
    timestamp = (now or datetime.now(tz=timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{period_from_source(source_name)}_ShipStation_Report_{timestamp}.csv"


def _table_rows(table: pd.DataFrame, first_header: str) -> list[list[str]]:
    rows = [[first_header, *[str(column) for column in table.columns]]]
    for label, values in table.iterrows():
        rows.append([str(label), *[str(value) for value in values]])
    return rows


def build_report_rows(
    report: MetricsReport,
    *,
    preferred_order: Sequence[str] = (),
) -> list[list[str]]:
    """
    Report content as rows of cells; blank rows separate sections.
    """
    period = report.period_name or period_from_source(report.source_name)
    rows: list[list[str]] = [[f"ShipStation Analytics Report for {period}"], []]

    rows.extend([["STORE METRICS"], []])
    if not report.store_metrics:
        rows.append(["No store data found"])
    else:
        rows.extend(_table_rows(build_store_table(report, preferred_order), "Metric"))
        rows.extend([[], ["Legend:"]])
        rows.extend([[item] for item in STORE_LEGEND])

        rows.extend([[], ["Stores Summary:"]])
        for store in sort_stores_by_count(report.store_metrics):
            entry = report.store_metrics[store]
            rows.extend(
                [
                    [f"{store}:"],
                    [f"Orders: {entry.count} orders (AOV: {format_currency(entry.average_order_value)})"],
                    [
                        f"Revenue: {format_currency(entry.total_order_value)} -> "
                        f"{format_currency(entry.net_revenue)} "
                        f"({format_percentage(entry.net_revenue_margin)} margin)"
                    ],
                    [
                        f"Shipping: Cost: {format_currency(entry.total_rate)} vs "
                        f"Paid: {format_currency(entry.total_shipping_paid)} = "
                        f"{format_currency(entry.shipping_profit)} "
                        f"({format_percentage(entry.shipping_profit_margin)} margin)"
                    ],
                    [],
                ]
            )

        summary = report.store_summary
        rows.extend(
            [
                ["Overall Summary:"],
                [f"Total Orders: {summary.total_orders}"],
                [
                    f"Total Revenue: {format_currency(summary.total_order_value)} -> "
                    f"{format_currency(summary.total_net_revenue)} "
                    f"({format_percentage(summary.net_revenue_margin)} margin)"
                ],
                [
                    f"Total Shipping: Cost: {format_currency(summary.total_rate)} vs "
                    f"Paid: {format_currency(summary.total_shipping_paid)} = "
                    f"{format_currency(summary.total_shipping_profit)} "
                    f"({format_percentage(summary.shipping_profit_margin)} margin)"
                ],
            ]
        )

    rows.extend([[], ["SPECIAL ORDERS ANALYSIS"], []])
    if not report.tag_metrics:
        rows.append(["No special orders data found"])
        return rows

    rows.extend(_table_rows(build_tag_table(report), "Metric"))
    rows.extend([[], ["Legend:"]])
    rows.extend([[item] for item in TAG_LEGEND])
    rows.extend([[], ["Special Order Categories:"]])
    rows.extend([[f"- {tag}: {description}"] for tag, description in TAG_DESCRIPTIONS.items()])

    tag_summary = report.tag_summary
    rows.extend([[], ["Detailed Special Orders Analysis:"]])
    for tag in sort_tags(report.tag_metrics):
        entry = report.tag_metrics[tag]
        share = tag_summary.shares[tag]
        rows.extend(
            [
                [f"{tag}:"],
                [
                    f"Orders: {entry.count} orders ({share.percent_of_tagged_orders:.1f}% of special "
                    f"orders, {share.percent_of_all_orders:.1f}% of all orders)"
                ],
                [
                    f"Shipping: Total: {format_currency(entry.total_rate)} "
                    f"({share.percent_of_tagged_cost:.1f}% of special orders cost) "
                    f"Avg: {format_currency(entry.average_rate)}"
                ],
                [],
            ]
        )

    rows.extend(
        [
            ["Special Orders Summary:"],
            [
                f"Total Special Orders: {tag_summary.total_tagged_orders} "
                f"({tag_summary.percent_of_all_orders:.1f}% of all orders)"
            ],
            [f"Total Shipping Cost: {format_currency(tag_summary.total_rate)}"],
            [f"Average Cost per Order: {format_currency(tag_summary.average_rate)}"],
            [f"Unique Categories: {tag_summary.unique_tags}"],
        ]
    )
    return rows


def build_csv_report(report: MetricsReport, *, preferred_order: Sequence[str] = ()) -> str:
    """
    Render the report as CSV text, BOM included.
    """
    buffer = io.StringIO()
    buffer.write(BOM)
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for row in build_report_rows(report, preferred_order=preferred_order):
        writer.writerow(row)
    return buffer.getvalue()


def save_csv_report(
    report: MetricsReport,
    *,
    output_dir: Path,
    output_path: Path | None = None,
    preferred_order: Sequence[str] = (),
) -> Path:
    """
    Write the CSV report and return its path.

    ``output_path`` wins over ``output_dir`` + the default file name.
    """
    target = output_path or output_dir / default_report_name(report.source_name)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(build_csv_report(report, preferred_order=preferred_order), encoding="utf-8")
    log_event(logger, logging.INFO, "csv_report_written", path=str(target))
    return target
