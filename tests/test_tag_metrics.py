"""
tests/test_tag_metrics.py

Pytest unit tests for per-tag aggregation.
"""

from __future__ import annotations

import pytest

from shipping_metrics.field_normalizer import normalize
from shipping_metrics.tag_metrics import aggregate_by_tag, split_tags


class TestSplitTags:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Giveaways", ["Giveaways"]),
            (" A , B ,, ", ["A", "B"]),
            ("A, B, A", ["A", "B", "A"]),
            ("", []),
            ("   ", []),
            (None, []),
        ],
    )
    def test_split(self, value: object, expected: list[str]) -> None:
        assert split_tags(value) == expected


class TestAggregateByTag:
    def test_single_tagged_order(self) -> None:
        records = [
            normalize({"Store": "X", "Rate": "$5.00", "Tags": "Giveaways"}),
            normalize({"Store": "X", "Rate": "3", "Tags": ""}),
        ]
        metrics = aggregate_by_tag(records)

        assert list(metrics) == ["Giveaways"]
        assert metrics["Giveaways"].count == 1
        assert metrics["Giveaways"].total_rate == 5.00
        assert metrics["Giveaways"].average_rate == 5.00

    def test_repeated_tag_counts_twice(self) -> None:
        metrics = aggregate_by_tag([normalize({"Rate": "2.00", "Tags": "A, B, A"})])
        assert metrics["A"].count == 2
        assert metrics["A"].total_rate == 4.00
        assert metrics["B"].count == 1
        assert metrics["B"].total_rate == 2.00

    def test_multi_tag_order_contributes_full_rate_to_each(self) -> None:
        metrics = aggregate_by_tag(
            [normalize({"Rate": "10", "Tags": "Giveaways, Influencer"})]
        )
        assert metrics["Giveaways"].total_rate == 10.0
        assert metrics["Influencer"].total_rate == 10.0

    def test_untagged_records_contribute_nothing(self) -> None:
        records = [normalize({"Rate": "1"}), {"Rate": 2, "Tags": None}, {"Rate": 3}]
        assert aggregate_by_tag(records) == {}

    def test_average_rate(self) -> None:
        records = [normalize({"Rate": rate, "Tags": "Replacement"}) for rate in ("1", "2", "2")]
        entry = aggregate_by_tag(records)["Replacement"]
        assert entry.count == 3
        assert entry.total_rate == 5.00
        assert entry.average_rate == 1.67
