"""
ratecalc/services/metrics_service.py

Service layer running one dataset through the metrics pipeline:

    1. optional date-range filter on the raw rows
    2. field normalization against the dataset headers
    3. store and tag aggregation
    4. cross-store / cross-tag summaries

Empty results are surfaced here as exceptions; the core itself never raises.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from ratecalc.domain.datasets import DateRange, MetricsReport, RawDataset
from ratecalc.logging_utils import log_event
from ratecalc.services.date_filter import filter_by_date_range
from shipping_metrics.field_normalizer import FieldNormalizer
from shipping_metrics.store_metrics import aggregate_by_store
from shipping_metrics.summary import summarize_stores, summarize_tags
from shipping_metrics.tag_metrics import aggregate_by_tag

logger = logging.getLogger(__name__)


class EmptyDatasetError(ValueError):
    """
    Raised when no rows remain to analyse (empty file or nothing in range).
    """


class NoStoreDataError(ValueError):
    """
    Raised when aggregation produced no store entries.
    """


class MetricsService:
    """
    Coordinates filtering, normalization and aggregation for one dataset.
    """

    def __init__(self, *, normalizer: FieldNormalizer | None = None) -> None:
        self._normalizer = normalizer or FieldNormalizer()

    def build_report(
        self,
        dataset: RawDataset,
        *,
        date_range: DateRange | None = None,
    ) -> MetricsReport:
        """
        Compute store and tag metrics for ``dataset``.

        Raises
        ------
        EmptyDatasetError
            The dataset, or what is left of it after filtering, has no rows.
        NoStoreDataError
            Aggregation returned no stores.
        """
        rows = dataset.rows
        if not rows:
            raise EmptyDatasetError(f"No records found in {dataset.source_name}.")

        if date_range is not None:
            rows = filter_by_date_range(rows, date_range.start, date_range.end)
            if not rows:
                raise EmptyDatasetError(
                    f"No records in {dataset.source_name} fall within {date_range.period_name}."
                )

        records = self._normalizer.normalize_all(rows, dataset.headers)
        store_metrics = aggregate_by_store(records)
        if not store_metrics:
            raise NoStoreDataError("No store data found.")
        tag_metrics = aggregate_by_tag(records)

        store_summary = summarize_stores(store_metrics)
        tag_summary = summarize_tags(tag_metrics, store_summary.total_orders)

        log_event(
            logger,
            logging.INFO,
            "metrics_computed",
            source=dataset.source_name,
            records=len(records),
            stores=len(store_metrics),
            tags=len(tag_metrics),
            period=date_range.period_name if date_range else None,
        )
        return MetricsReport(
            store_metrics=store_metrics,
            tag_metrics=tag_metrics,
            store_summary=store_summary,
            tag_summary=tag_summary,
            record_count=len(records),
            source_name=dataset.source_name,
            period_name=date_range.period_name if date_range else None,
            headers=dataset.headers,
        )


@lru_cache(maxsize=1)
def get_metrics_service() -> MetricsService:
    """
    Return a cached metrics service instance.
    """

    return MetricsService()
