"""
ratecalc/domain package marker.
"""

from ratecalc.domain.datasets import DateRange, MetricsReport, RawDataset

__all__ = [
    "DateRange",
    "MetricsReport",
    "RawDataset",
]
