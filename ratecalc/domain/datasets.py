"""
ratecalc/domain/datasets.py

Domain models passed between the reader, the metrics service and the
report renderers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from shipping_metrics.store_metrics import StoreMetricsEntry
from shipping_metrics.summary import StoreSummary, TagSummary
from shipping_metrics.tag_metrics import TagMetricsEntry


@dataclass(frozen=True)
class RawDataset:
    """
    Parsed export file: ordered headers plus one string mapping per row.
    """

    headers: tuple[str, ...]
    rows: list[dict[str, str]]
    source_name: str
    skipped_rows: int = 0


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive day range selected by the user.
    """

    start: date
    end: date
    period_name: str
    label: str


@dataclass(frozen=True)
class MetricsReport:
    """
    Everything a renderer needs for one analysed file.
    """

    store_metrics: dict[str, StoreMetricsEntry]
    tag_metrics: dict[str, TagMetricsEntry]
    store_summary: StoreSummary
    tag_summary: TagSummary
    record_count: int
    source_name: str
    period_name: str | None = None
    headers: tuple[str, ...] = field(default_factory=tuple)
