"""
ratecalc/schemas package marker.
"""

from ratecalc.schemas.metrics import (
    MetricsReportResponse,
    StoreMetricsResponse,
    StoreSummaryResponse,
    TagMetricsResponse,
    TagSummaryResponse,
)

__all__ = [
    "MetricsReportResponse",
    "StoreMetricsResponse",
    "StoreSummaryResponse",
    "TagMetricsResponse",
    "TagSummaryResponse",
]
