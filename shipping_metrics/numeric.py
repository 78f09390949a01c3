"""
shipping_metrics/numeric.py

Numeric coercion and rounding helpers shared by the normalizer and the
aggregators.

Coercion rules
--------------
A raw CSV cell is treated as numeric when either

* its column name contains one of :data:`NUMERIC_FIELD_KEYWORDS`
  (case-insensitive substring match), or
* its value looks like an amount: optional ``$``, digits, optional decimal
  part. Thousands separators are only handled in keyword columns.

Numeric cells are stripped of everything except digits, ``.`` and ``-``
and the leading number is parsed. Anything unparseable becomes ``0.0``;
these helpers never raise.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

NUMERIC_FIELD_KEYWORDS: tuple[str, ...] = (
    "rate",
    "cost",
    "price",
    "total",
    "amount",
    "shipping",
    "paid",
    "value",
    "weight",
    "quantity",
    "qty",
    "postage",
)

_AMOUNT_PATTERN = re.compile(r"^\$?\d+(?:\.\d*)?$")
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")

_TWO_PLACES = Decimal("0.01")
_ONE_PLACE = Decimal("0.1")
_QUANTIZE_PRECISION = 400


def is_numeric_field_name(field_name: str) -> bool:
    """Return True when the column name carries a currency/quantity keyword."""
    lowered = field_name.strip().lower()
    return any(keyword in lowered for keyword in NUMERIC_FIELD_KEYWORDS)


def looks_numeric(field_name: str, raw_value: Any) -> bool:
    """
    Decide whether a raw cell should be coerced to a number.

    Pure predicate over the column name and the raw cell value.
    """
    if is_numeric_field_name(field_name):
        return True
    if not isinstance(raw_value, str):
        return False
    return bool(_AMOUNT_PATTERN.match(raw_value.strip()))


def extract_numeric(value: Any) -> float:
    """
    Coerce any cell value into a finite float.

    ``None``, blanks and unparseable strings yield ``0.0``. Numbers pass
    through unless they are NaN or infinite.

    >>> extract_numeric("$1,234.56")
    1234.56
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0

    cleaned = _NON_NUMERIC_CHARS.sub("", str(value))
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return 0.0
    try:
        number = float(match.group(0))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def _quantize(value: float, places: Decimal) -> float:
    if not math.isfinite(value):
        return 0.0
    with localcontext() as context:
        # Room for the integer digits of any finite float plus the decimals.
        context.prec = _QUANTIZE_PRECISION
        rounded = Decimal(repr(value)).quantize(places, rounding=ROUND_HALF_UP)
    result = float(rounded)
    # Avoid "-0.0" leaking into reports.
    return result if result != 0 else 0.0


def round_currency(value: float) -> float:
    """Round to 2 decimals, half away from zero."""
    return _quantize(value, _TWO_PLACES)


def round_percent(value: float) -> float:
    """Round a percentage to 1 decimal, half away from zero."""
    return _quantize(value, _ONE_PLACE)


def safe_ratio_percent(numerator: float, denominator: float) -> float:
    """``numerator / denominator * 100``, or ``0.0`` when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100
