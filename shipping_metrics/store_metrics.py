"""
shipping_metrics/store_metrics.py

Per-store shipping and revenue metrics.

Formulas
--------
Average Rate          = total_rate / count
AOV                   = total_order_value / count
Average Ship Paid     = total_shipping_paid / count
Shipping Profit       = total_shipping_paid - total_rate
Shipping Margin (%)   = shipping_profit / total_shipping_paid * 100
Net Revenue           = total_order_value - total_rate
Net Margin (%)        = net_revenue / total_order_value * 100

Margins are ``0.0`` when their denominator is zero. Every currency and
percentage output is rounded to 2 decimals (half away from zero); derived
values are computed from the rounded totals so a report always adds up.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

from shipping_metrics.field_normalizer import (
    FIELD_ORDER_TOTAL,
    FIELD_RATE,
    FIELD_SHIPPING_PAID,
    FIELD_STORE,
)
from shipping_metrics.numeric import extract_numeric, round_currency, safe_ratio_percent

UNKNOWN_STORE = "Unknown"


@dataclass(frozen=True)
class StoreMetricsEntry:
    """
    Finalized metrics for one store.
    """

    count: int
    total_rate: float
    total_order_value: float
    total_shipping_paid: float
    average_rate: float
    average_order_value: float
    average_shipping_paid: float
    shipping_profit: float
    shipping_profit_margin: float
    net_revenue: float
    net_revenue_margin: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class _StoreAccumulator:
    count: int = 0
    total_rate: float = 0.0
    total_order_value: float = 0.0
    total_shipping_paid: float = 0.0

    def add(self, *, rate: float, order_total: float, shipping_paid: float) -> None:
        self.count += 1
        self.total_rate += rate
        self.total_order_value += order_total
        self.total_shipping_paid += shipping_paid

    def finalize(self) -> StoreMetricsEntry:
        total_rate = round_currency(self.total_rate)
        total_order_value = round_currency(self.total_order_value)
        total_shipping_paid = round_currency(self.total_shipping_paid)

        shipping_profit = round_currency(total_shipping_paid - total_rate)
        net_revenue = round_currency(total_order_value - total_rate)

        return StoreMetricsEntry(
            count=self.count,
            total_rate=total_rate,
            total_order_value=total_order_value,
            total_shipping_paid=total_shipping_paid,
            average_rate=round_currency(_average(self.total_rate, self.count)),
            average_order_value=round_currency(_average(self.total_order_value, self.count)),
            average_shipping_paid=round_currency(_average(self.total_shipping_paid, self.count)),
            shipping_profit=shipping_profit,
            shipping_profit_margin=round_currency(
                safe_ratio_percent(shipping_profit, total_shipping_paid)
            ),
            net_revenue=net_revenue,
            net_revenue_margin=round_currency(safe_ratio_percent(net_revenue, total_order_value)),
        )


def _average(total: float, count: int) -> float:
    if count == 0:
        return 0.0
    return total / count


def store_name(record: Mapping[str, Any]) -> str:
    """Return the record's store, or ``"Unknown"`` when blank or missing."""
    value = record.get(FIELD_STORE)
    if value is None:
        return UNKNOWN_STORE
    name = str(value).strip()
    return name or UNKNOWN_STORE


def aggregate_by_store(records: Iterable[Mapping[str, Any]]) -> dict[str, StoreMetricsEntry]:
    """
    Aggregate canonical records into one metrics entry per store.

    Parameters
    ----------
    records:
        Canonical records; never mutated.

    Returns
    -------
    dict[str, StoreMetricsEntry]
        Empty when ``records`` is empty. Key order carries no meaning.
    """
    accumulators: dict[str, _StoreAccumulator] = {}

    for record in records:
        store = store_name(record)
        accumulator = accumulators.get(store)
        if accumulator is None:
            accumulator = accumulators[store] = _StoreAccumulator()
        accumulator.add(
            rate=extract_numeric(record.get(FIELD_RATE)),
            order_total=extract_numeric(record.get(FIELD_ORDER_TOTAL)),
            shipping_paid=extract_numeric(record.get(FIELD_SHIPPING_PAID)),
        )

    return {store: accumulator.finalize() for store, accumulator in accumulators.items()}
