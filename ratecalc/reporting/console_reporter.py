"""
ratecalc/reporting/console_reporter.py

Plain-text rendering of a metrics report for the terminal.

Tables are laid out with metrics as rows and stores (or tags) as columns,
plus a TOTAL column, and rendered through pandas.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from ratecalc.domain.datasets import MetricsReport
from ratecalc.reporting.formatting import (
    STORE_LEGEND,
    TAG_DESCRIPTIONS,
    TAG_LEGEND,
    format_currency,
    format_percentage,
    share_of,
    with_share,
)
from shipping_metrics.summary import order_stores, sort_tags

TOTAL_COLUMN = "TOTAL"


def build_store_table(report: MetricsReport, preferred_order: Sequence[str] = ()) -> pd.DataFrame:
    """
    Store comparison table: one column per store plus TOTAL.
    """
    stores = order_stores(report.store_metrics, preferred_order)
    summary = report.store_summary
    metrics = report.store_metrics

    rows: dict[str, list[str]] = {
        "Orders": [
            with_share(str(metrics[s].count), share_of(metrics[s].count, summary.total_orders))
            for s in stores
        ]
        + [str(summary.total_orders)],
        "Order Value": [
            with_share(
                format_currency(metrics[s].total_order_value),
                share_of(metrics[s].total_order_value, summary.total_order_value),
            )
            for s in stores
        ]
        + [format_currency(summary.total_order_value)],
        "AOV": [format_currency(metrics[s].average_order_value) for s in stores]
        + [format_currency(summary.average_order_value)],
        "Ship Cost": [
            with_share(
                format_currency(metrics[s].total_rate),
                share_of(metrics[s].total_rate, summary.total_rate),
            )
            for s in stores
        ]
        + [format_currency(summary.total_rate)],
        "Ship Paid": [
            with_share(
                format_currency(metrics[s].total_shipping_paid),
                share_of(metrics[s].total_shipping_paid, summary.total_shipping_paid),
            )
            for s in stores
        ]
        + [format_currency(summary.total_shipping_paid)],
        "Ship Profit": [format_currency(metrics[s].shipping_profit) for s in stores]
        + [format_currency(summary.total_shipping_profit)],
        "Ship Margin": [format_percentage(metrics[s].shipping_profit_margin) for s in stores]
        + [format_percentage(summary.shipping_profit_margin)],
        "Net Revenue": [
            with_share(
                format_currency(metrics[s].net_revenue),
                share_of(metrics[s].net_revenue, summary.total_net_revenue),
            )
            for s in stores
        ]
        + [format_currency(summary.total_net_revenue)],
        "Net Margin": [format_percentage(metrics[s].net_revenue_margin) for s in stores]
        + [format_percentage(summary.net_revenue_margin)],
    }
    return pd.DataFrame.from_dict(rows, orient="index", columns=[*stores, TOTAL_COLUMN])


def build_tag_table(report: MetricsReport) -> pd.DataFrame:
    """
    Special orders table: one column per tag plus TOTAL.
    """
    tags = sort_tags(report.tag_metrics)
    summary = report.tag_summary
    metrics = report.tag_metrics

    rows: dict[str, list[str]] = {
        "Orders": [str(metrics[t].count) for t in tags] + [str(summary.total_tagged_orders)],
        "% of All Orders": [f"{summary.shares[t].percent_of_all_orders:.1f}%" for t in tags]
        + [f"{summary.percent_of_all_orders:.1f}%"],
        "Total Shipping Cost": [format_currency(metrics[t].total_rate) for t in tags]
        + [format_currency(summary.total_rate)],
        "Avg Shipping Cost": [format_currency(metrics[t].average_rate) for t in tags]
        + [format_currency(summary.average_rate)],
    }
    return pd.DataFrame.from_dict(rows, orient="index", columns=[*tags, TOTAL_COLUMN])


def render_store_section(
    report: MetricsReport,
    *,
    preferred_order: Sequence[str] = (),
    compact: bool = False,
) -> str:
    lines = ["", "=== Store Metrics ==="]
    if not report.store_metrics:
        lines.append("No store data found")
        return "\n".join(lines)

    period = report.period_name or "Current Period"
    lines.append(f"{period} Store Shipping Analytics")
    lines.append(build_store_table(report, preferred_order).to_string())
    if compact:
        return "\n".join(lines)

    lines.extend(["", "Legend:"])
    lines.extend(f"- {item}" for item in STORE_LEGEND)

    lines.extend(["", "Stores Summary:"])
    for store in order_stores(report.store_metrics, preferred_order):
        entry = report.store_metrics[store]
        lines.extend(
            [
                "",
                f"{store}:",
                f"Orders: {entry.count} orders (AOV: {format_currency(entry.average_order_value)})",
                f"Revenue: {format_currency(entry.total_order_value)} -> "
                f"{format_currency(entry.net_revenue)} "
                f"({format_percentage(entry.net_revenue_margin)} margin)",
                f"Shipping: Cost: {format_currency(entry.total_rate)} vs "
                f"Paid: {format_currency(entry.total_shipping_paid)} = "
                f"{format_currency(entry.shipping_profit)} "
                f"({format_percentage(entry.shipping_profit_margin)} margin)",
            ]
        )

    summary = report.store_summary
    lines.extend(
        [
            "",
            "Overall Summary:",
            f"Total Orders: {summary.total_orders}",
            f"Total Revenue: {format_currency(summary.total_order_value)} -> "
            f"{format_currency(summary.total_net_revenue)} "
            f"({format_percentage(summary.net_revenue_margin)} margin)",
            f"Total Shipping: Cost: {format_currency(summary.total_rate)} vs "
            f"Paid: {format_currency(summary.total_shipping_paid)} = "
            f"{format_currency(summary.total_shipping_profit)} "
            f"({format_percentage(summary.shipping_profit_margin)} margin)",
        ]
    )
    return "\n".join(lines)


def render_tag_section(report: MetricsReport, *, compact: bool = False) -> str:
    lines = ["", "=== Special Orders Analysis ==="]
    if not report.tag_metrics:
        lines.append("No special orders data found")
        return "\n".join(lines)

    lines.append(build_tag_table(report).to_string())
    if compact:
        return "\n".join(lines)

    lines.extend(["", "Legend:"])
    lines.extend(f"- {item}" for item in TAG_LEGEND)

    lines.extend(["", "Special Order Categories:"])
    lines.extend(f"- {tag}: {description}" for tag, description in TAG_DESCRIPTIONS.items())

    summary = report.tag_summary
    lines.extend(["", "Detailed Special Orders Analysis:"])
    for tag in sort_tags(report.tag_metrics):
        entry = report.tag_metrics[tag]
        share = summary.shares[tag]
        lines.extend(
            [
                "",
                f"{tag}:",
                f"Orders: {entry.count} orders ({share.percent_of_tagged_orders:.1f}% of special "
                f"orders, {share.percent_of_all_orders:.1f}% of all orders)",
                f"Shipping: Total: {format_currency(entry.total_rate)} "
                f"({share.percent_of_tagged_cost:.1f}% of special orders cost) "
                f"Avg: {format_currency(entry.average_rate)}",
            ]
        )

    lines.extend(
        [
            "",
            "Special Orders Summary:",
            f"Total Special Orders: {summary.total_tagged_orders} "
            f"({summary.percent_of_all_orders:.1f}% of all orders)",
            f"Total Shipping Cost: {format_currency(summary.total_rate)}",
            f"Average Cost per Order: {format_currency(summary.average_rate)}",
            f"Unique Categories: {summary.unique_tags}",
        ]
    )
    return "\n".join(lines)


def render_report(
    report: MetricsReport,
    *,
    preferred_order: Sequence[str] = (),
    include_stores: bool = True,
    include_tags: bool = True,
    compact: bool = False,
) -> str:
    """
    Full console report text; sections can be switched off individually.
    """
    sections: list[str] = []
    if include_stores:
        sections.append(
            render_store_section(report, preferred_order=preferred_order, compact=compact)
        )
    if include_tags:
        sections.append(render_tag_section(report, compact=compact))
    return "\n".join(sections)
