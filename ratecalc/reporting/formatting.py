"""
ratecalc/reporting/formatting.py

Shared labels and value formatting for console, CSV and Excel reports.
"""

from __future__ import annotations

from pathlib import PurePath

DEFAULT_PERIOD = "Current_Period"

TAG_DESCRIPTIONS: dict[str, str] = {
    "Fulfillment Error": "Orders with errors made by warehouse staff",
    "Giveaways": "Free products given for promotional purposes",
    "Influencer": "Orders sent to influencers for promotion",
    "Not Delivered": "Orders that were not delivered to customers",
    "Replacement": "Replacement orders for damaged products",
}

STORE_LEGEND: tuple[str, ...] = (
    "AOV = Average Order Value",
    "Ship = Shipping",
    "Net Margin = Net Revenue / Order Value",
    "Ship Margin = Shipping Profit / Shipping Paid",
)

TAG_LEGEND: tuple[str, ...] = (
    "% of All Orders = Orders with this special category / Total orders across all stores",
    "Avg Shipping Cost = Total shipping cost / Number of orders",
)


def format_currency(value: float) -> str:
    """``12.5`` -> ``"$12.50"``; negatives keep their sign: ``"$-3.00"``."""
    return f"${value:.2f}"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def with_share(text: str, share: float) -> str:
    """Append a one-decimal share, e.g. ``"$10.00 (25.0%)"``."""
    return f"{text} ({share:.1f}%)"


def share_of(value: float, total: float) -> float:
    if total == 0:
        return 0.0
    return value / total * 100


def period_from_source(source_name: str | None) -> str:
    """
    Report period label from the analysed file name ("Feb-March 2025.csv" -> "Feb-March 2025").
    """
    if not source_name:
        return DEFAULT_PERIOD
    path = PurePath(source_name)
    if path.suffix.lower() != ".csv" or not path.stem:
        return DEFAULT_PERIOD
    return path.stem
