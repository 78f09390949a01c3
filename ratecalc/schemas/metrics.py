"""
ratecalc/schemas/metrics.py

Response schemas for the metrics upload endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ratecalc.domain.datasets import MetricsReport


class StoreMetricsResponse(BaseModel):
    """
    API response model for one store's aggregated metrics.
    """

    count: int = Field(..., ge=1)
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


class TagMetricsResponse(BaseModel):
    """
    API response model for one tag's aggregated metrics.
    """

    count: int = Field(..., ge=1)
    total_rate: float
    average_rate: float
    percent_of_tagged_orders: float = Field(..., ge=0)
    percent_of_tagged_cost: float
    percent_of_all_orders: float = Field(..., ge=0)


class StoreSummaryResponse(BaseModel):
    total_orders: int = Field(..., ge=0)
    total_order_value: float
    total_rate: float
    total_shipping_paid: float
    total_shipping_profit: float
    total_net_revenue: float
    average_order_value: float
    shipping_profit_margin: float
    net_revenue_margin: float
    store_count: int = Field(..., ge=0)


class TagSummaryResponse(BaseModel):
    total_tagged_orders: int = Field(..., ge=0)
    total_rate: float
    average_rate: float
    unique_tags: int = Field(..., ge=0)
    percent_of_all_orders: float = Field(..., ge=0)


class MetricsReportResponse(BaseModel):
    """
    API response model for a full metrics report.
    """

    source_name: str
    period_name: str | None = None
    record_count: int = Field(..., ge=0)
    stores: dict[str, StoreMetricsResponse] = Field(default_factory=dict)
    tags: dict[str, TagMetricsResponse] = Field(default_factory=dict)
    store_summary: StoreSummaryResponse
    tag_summary: TagSummaryResponse

    @classmethod
    def from_report(cls, report: MetricsReport) -> "MetricsReportResponse":
        tag_summary = report.tag_summary
        tags: dict[str, TagMetricsResponse] = {}
        for tag, entry in report.tag_metrics.items():
            share = tag_summary.shares[tag]
            tags[tag] = TagMetricsResponse(
                count=entry.count,
                total_rate=entry.total_rate,
                average_rate=entry.average_rate,
                percent_of_tagged_orders=share.percent_of_tagged_orders,
                percent_of_tagged_cost=share.percent_of_tagged_cost,
                percent_of_all_orders=share.percent_of_all_orders,
            )

        return cls(
            source_name=report.source_name,
            period_name=report.period_name,
            record_count=report.record_count,
            stores={
                store: StoreMetricsResponse(**entry.to_dict())
                for store, entry in report.store_metrics.items()
            },
            tags=tags,
            store_summary=StoreSummaryResponse(**report.store_summary.to_dict()),
            tag_summary=TagSummaryResponse(
                total_tagged_orders=tag_summary.total_tagged_orders,
                total_rate=tag_summary.total_rate,
                average_rate=tag_summary.average_rate,
                unique_tags=tag_summary.unique_tags,
                percent_of_all_orders=tag_summary.percent_of_all_orders,
            ),
        )
