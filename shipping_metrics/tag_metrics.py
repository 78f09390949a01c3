"""
shipping_metrics/tag_metrics.py

Per-tag ("special order") shipping metrics.

A record tagged ``"Giveaways, Influencer"`` counts as one full order, with
its full rate, for *each* tag. Tag totals therefore do not add up to the
overall shipping total when orders carry several tags. Repeated tags on one
record are counted every time they appear.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

from shipping_metrics.field_normalizer import FIELD_RATE, FIELD_TAGS
from shipping_metrics.numeric import extract_numeric, round_currency


@dataclass(frozen=True)
class TagMetricsEntry:
    """
    Finalized metrics for one tag.
    """

    count: int
    total_rate: float
    average_rate: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def split_tags(value: Any) -> list[str]:
    """
    Split a comma-separated tag cell into trimmed, non-empty labels.

    Order and duplicates are preserved.
    """
    if value is None:
        return []
    text = str(value)
    if not text.strip():
        return []
    return [piece.strip() for piece in text.split(",") if piece.strip()]


def aggregate_by_tag(records: Iterable[Mapping[str, Any]]) -> dict[str, TagMetricsEntry]:
    """
    Aggregate canonical records into one metrics entry per tag.

    Records without tags contribute nothing.
    """
    counts: dict[str, int] = {}
    totals: dict[str, float] = {}

    for record in records:
        tags = split_tags(record.get(FIELD_TAGS))
        if not tags:
            continue
        rate = extract_numeric(record.get(FIELD_RATE))
        for tag in tags:
            counts[tag] = counts.get(tag, 0) + 1
            totals[tag] = totals.get(tag, 0.0) + rate

    return {
        tag: TagMetricsEntry(
            count=count,
            total_rate=round_currency(totals[tag]),
            average_rate=round_currency(totals[tag] / count) if count else 0.0,
        )
        for tag, count in counts.items()
    }
