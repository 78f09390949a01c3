"""
tests/test_numeric.py

Pytest unit tests for numeric coercion and rounding helpers.

Coverage
--------
- extract_numeric on currency strings, blanks, None and native numbers
- looks_numeric by column keyword and by value shape
- half-away-from-zero rounding for currency and percentages
- safe_ratio_percent zero-denominator handling
"""

from __future__ import annotations

import math

import pytest

from shipping_metrics.numeric import (
    extract_numeric,
    is_numeric_field_name,
    looks_numeric,
    round_currency,
    round_percent,
    safe_ratio_percent,
)


# ---------------------------------------------------------------------------
# extract_numeric
# ---------------------------------------------------------------------------


class TestExtractNumeric:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("$1,234.56", 1234.56),
            ("", 0.0),
            (None, 0.0),
            (42, 42.0),
            (3.5, 3.5),
            ("  7.25 ", 7.25),
            ("-$4.10", -4.10),
            ("USD 12", 12.0),
            ("abc", 0.0),
            ("1.2.3", 1.2),
            ("-", 0.0),
            (".5", 0.5),
        ],
    )
    def test_parses_leading_number(self, raw: object, expected: float) -> None:
        assert extract_numeric(raw) == pytest.approx(expected)

    def test_non_finite_numbers_become_zero(self) -> None:
        assert extract_numeric(float("nan")) == 0.0
        assert extract_numeric(float("inf")) == 0.0

    def test_booleans_are_not_numbers(self) -> None:
        assert extract_numeric(True) == 0.0

    def test_result_is_always_finite(self) -> None:
        for raw in ("$", "--", "..", "1e999", object()):
            assert math.isfinite(extract_numeric(raw))


# ---------------------------------------------------------------------------
# looks_numeric
# ---------------------------------------------------------------------------


class TestLooksNumeric:
    @pytest.mark.parametrize(
        "field_name",
        ["Rate", "Shipping Cost", "Order Total", "Amount Paid", "Item Qty", "POSTAGE"],
    )
    def test_keyword_columns_are_numeric(self, field_name: str) -> None:
        assert is_numeric_field_name(field_name)
        assert looks_numeric(field_name, "n/a")

    @pytest.mark.parametrize("value", ["$12.00", "1234", "99", "5."])
    def test_amount_shaped_values_are_numeric(self, value: str) -> None:
        assert looks_numeric("Notes", value)

    @pytest.mark.parametrize("value", ["Shopify Store", "12 items", "", "2024-01-05", "1,2,3", "1,234"])
    def test_text_values_are_not_numeric(self, value: str) -> None:
        assert not looks_numeric("Notes", value)

    def test_non_string_value_in_plain_column(self) -> None:
        assert not looks_numeric("Store", None)


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


class TestRounding:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.005, 1.01),
            (2.675, 2.68),
            (-1.005, -1.01),
            (0.1 + 0.2, 0.3),
            (10.0, 10.0),
        ],
    )
    def test_round_currency_half_away_from_zero(self, value: float, expected: float) -> None:
        assert round_currency(value) == expected

    def test_round_percent_uses_one_decimal(self) -> None:
        assert round_percent(33.333) == 33.3
        assert round_percent(66.65) == 66.7

    def test_negative_zero_is_normalized(self) -> None:
        result = round_currency(-0.001)
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    def test_safe_ratio_percent(self) -> None:
        assert safe_ratio_percent(1, 4) == 25.0
        assert safe_ratio_percent(5, 0) == 0.0

    @pytest.mark.parametrize("value", [1e27, -1e27, 1.5e300])
    def test_large_values_keep_their_magnitude(self, value: float) -> None:
        assert round_currency(value) == value
        assert round_percent(value) == value

    def test_large_half_cent_rounds_away_from_zero(self) -> None:
        assert round_currency(123456789012.125) == 123456789012.13
