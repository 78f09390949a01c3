"""
shipping_metrics/summary.py

Cross-store and cross-tag totals used by every report renderer.

The number of orders across all stores is an explicit argument of
:func:`summarize_tags`; callers take it from :func:`summarize_stores`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Sequence

from shipping_metrics.numeric import round_currency, round_percent, safe_ratio_percent
from shipping_metrics.store_metrics import StoreMetricsEntry
from shipping_metrics.tag_metrics import TagMetricsEntry


@dataclass(frozen=True)
class StoreSummary:
    """
    Totals over every store (the TOTAL column of the store table).
    """

    total_orders: int
    total_order_value: float
    total_rate: float
    total_shipping_paid: float
    total_shipping_profit: float
    total_net_revenue: float
    average_order_value: float
    shipping_profit_margin: float
    net_revenue_margin: float
    store_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TagShare:
    """
    One tag's share of tagged orders, tagged cost and all orders (percent, 1 decimal).
    """

    percent_of_tagged_orders: float
    percent_of_tagged_cost: float
    percent_of_all_orders: float


@dataclass(frozen=True)
class TagSummary:
    """
    Totals over every tag (the TOTAL column of the special orders table).
    """

    total_tagged_orders: int
    total_rate: float
    average_rate: float
    unique_tags: int
    total_orders: int
    percent_of_all_orders: float
    shares: dict[str, TagShare] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize_stores(store_metrics: Mapping[str, StoreMetricsEntry]) -> StoreSummary:
    """
    Sum finalized store entries into overall totals.

    Overall margins are recomputed from the summed totals, not averaged.
    """
    entries = list(store_metrics.values())
    total_orders = sum(entry.count for entry in entries)
    total_order_value = round_currency(sum(entry.total_order_value for entry in entries))
    total_rate = round_currency(sum(entry.total_rate for entry in entries))
    total_shipping_paid = round_currency(sum(entry.total_shipping_paid for entry in entries))
    total_shipping_profit = round_currency(sum(entry.shipping_profit for entry in entries))
    total_net_revenue = round_currency(sum(entry.net_revenue for entry in entries))

    return StoreSummary(
        total_orders=total_orders,
        total_order_value=total_order_value,
        total_rate=total_rate,
        total_shipping_paid=total_shipping_paid,
        total_shipping_profit=total_shipping_profit,
        total_net_revenue=total_net_revenue,
        average_order_value=round_currency(total_order_value / total_orders) if total_orders else 0.0,
        shipping_profit_margin=round_currency(
            safe_ratio_percent(total_shipping_profit, total_shipping_paid)
        ),
        net_revenue_margin=round_currency(safe_ratio_percent(total_net_revenue, total_order_value)),
        store_count=len(entries),
    )


def summarize_tags(
    tag_metrics: Mapping[str, TagMetricsEntry],
    total_orders: int,
) -> TagSummary:
    """
    Sum tag entries and compute each tag's percentage shares.

    Parameters
    ----------
    tag_metrics:
        Output of :func:`shipping_metrics.tag_metrics.aggregate_by_tag`.
    total_orders:
        Orders across all stores, usually ``summarize_stores(...).total_orders``.
        Percentages of all orders are ``0.0`` when it is zero.
    """
    total_tagged_orders = sum(entry.count for entry in tag_metrics.values())
    total_rate = round_currency(sum(entry.total_rate for entry in tag_metrics.values()))

    shares = {
        tag: TagShare(
            percent_of_tagged_orders=round_percent(
                safe_ratio_percent(entry.count, total_tagged_orders)
            ),
            percent_of_tagged_cost=round_percent(safe_ratio_percent(entry.total_rate, total_rate)),
            percent_of_all_orders=round_percent(safe_ratio_percent(entry.count, total_orders)),
        )
        for tag, entry in tag_metrics.items()
    }

    return TagSummary(
        total_tagged_orders=total_tagged_orders,
        total_rate=total_rate,
        average_rate=round_currency(total_rate / total_tagged_orders) if total_tagged_orders else 0.0,
        unique_tags=len(tag_metrics),
        total_orders=total_orders,
        percent_of_all_orders=round_percent(safe_ratio_percent(total_tagged_orders, total_orders)),
        shares=shares,
    )


def sort_stores_by_count(store_metrics: Mapping[str, StoreMetricsEntry]) -> list[str]:
    """Store names by descending order count, ties broken by name."""
    return sorted(store_metrics, key=lambda name: (-store_metrics[name].count, name))


def order_stores(
    store_metrics: Mapping[str, StoreMetricsEntry],
    preferred: Sequence[str] = (),
) -> list[str]:
    """
    Display order for store columns.

    Names listed in ``preferred`` come first, in that order; the remaining
    stores follow by descending order count.
    """
    ordered = [name for name in preferred if name in store_metrics]
    seen = set(ordered)
    ordered.extend(name for name in sort_stores_by_count(store_metrics) if name not in seen)
    return ordered


def sort_tags(tag_metrics: Mapping[str, TagMetricsEntry]) -> list[str]:
    """Tag names alphabetically."""
    return sorted(tag_metrics)
