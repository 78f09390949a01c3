"""
shipping_metrics package: normalization and aggregation engine.
"""

from shipping_metrics.field_normalizer import (
    CANONICAL_FIELDS,
    DEFAULT_FIELD_ALIASES,
    FieldNormalizer,
    normalize,
    resolve_field,
)
from shipping_metrics.numeric import extract_numeric, looks_numeric
from shipping_metrics.store_metrics import StoreMetricsEntry, aggregate_by_store
from shipping_metrics.summary import StoreSummary, TagSummary, summarize_stores, summarize_tags
from shipping_metrics.tag_metrics import TagMetricsEntry, aggregate_by_tag, split_tags

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_FIELD_ALIASES",
    "FieldNormalizer",
    "normalize",
    "resolve_field",
    "extract_numeric",
    "looks_numeric",
    "StoreMetricsEntry",
    "aggregate_by_store",
    "StoreSummary",
    "TagSummary",
    "summarize_stores",
    "summarize_tags",
    "TagMetricsEntry",
    "aggregate_by_tag",
    "split_tags",
]
