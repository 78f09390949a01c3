"""
shipping_metrics/field_normalizer.py

Maps raw ShipStation export rows onto the canonical record schema.

Export versions label the same data differently ("Rate", "Shipping Cost",
"Postage" ...). Resolution is data driven: :data:`DEFAULT_FIELD_ALIASES`
lists, per canonical field, the known alternative headers in precedence
order, and :func:`resolve_field` consults it.

Resolution order for each canonical field
-----------------------------------------
1. The canonical name itself, exact match.
2. Aliases in table order, exact match (first hit wins).
3. Canonical name and aliases again, case-insensitive exact match against
   the full header list.

The normalizer never raises. Unresolved numeric fields become ``0.0`` and
unresolved text fields become ``""``.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from shipping_metrics.numeric import extract_numeric, looks_numeric

FIELD_STORE = "Store"
FIELD_RATE = "Rate"
FIELD_ORDER_TOTAL = "Order Total"
FIELD_SHIPPING_PAID = "Shipping Paid"
FIELD_TAGS = "Tags"

CANONICAL_FIELDS: tuple[str, ...] = (
    FIELD_STORE,
    FIELD_RATE,
    FIELD_ORDER_TOTAL,
    FIELD_SHIPPING_PAID,
    FIELD_TAGS,
)

NUMERIC_CANONICAL_FIELDS: frozenset[str] = frozenset(
    {FIELD_RATE, FIELD_ORDER_TOTAL, FIELD_SHIPPING_PAID}
)

DEFAULT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    FIELD_STORE: ("Marketplace", "Channel", "Source", "Platform"),
    FIELD_RATE: (
        "ShippingRate",
        "Shipping Rate",
        "Cost",
        "Shipping Cost",
        "Postage Cost",
        "Postage",
    ),
    FIELD_ORDER_TOTAL: (
        "OrderTotal",
        "Total",
        "Order Amount",
        "OrderAmount",
        "Order Value",
        "OrderValue",
    ),
    FIELD_SHIPPING_PAID: (
        "Shipping",
        "ShippingPaid",
        "Customer Shipping",
        "CustomerShipping",
        "Shipping Charge",
    ),
    FIELD_TAGS: ("Tag", "Labels", "Label", "Categories", "Category"),
}

CanonicalRecord = dict[str, Any]


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def coerce_values(raw_record: Mapping[str, Any]) -> dict[str, Any]:
    """
    Trim keys and coerce numeric-looking cells to floats.

    Cells that do not look numeric are passed through unchanged.
    """
    coerced: dict[str, Any] = {}
    for raw_key, raw_value in raw_record.items():
        if raw_key is None:
            continue
        key = str(raw_key).strip()
        if looks_numeric(key, raw_value):
            coerced[key] = extract_numeric(raw_value)
        else:
            coerced[key] = raw_value
    return coerced


def resolve_field(
    record: Mapping[str, Any],
    canonical_field: str,
    *,
    headers: Sequence[str] = (),
    aliases: Mapping[str, Sequence[str]] | None = None,
) -> str | None:
    """
    Return the record key that supplies ``canonical_field``, or None.

    ``headers`` is the full header list of the source file; it feeds the
    case-insensitive fallback together with the record's own keys.
    """
    alias_table = aliases if aliases is not None else DEFAULT_FIELD_ALIASES
    candidates = (canonical_field, *alias_table.get(canonical_field, ()))

    for candidate in candidates:
        if _is_present(record.get(candidate)):
            return candidate

    lookup: dict[str, str] = {}
    for header in (*headers, *record.keys()):
        if header is None:
            continue
        trimmed = str(header).strip()
        lookup.setdefault(trimmed.lower(), trimmed)

    for candidate in candidates:
        match = lookup.get(candidate.lower())
        if match is not None and _is_present(record.get(match)):
            return match
    return None


class FieldNormalizer:
    """
    Produces canonical records from raw ShipStation rows.

    Stateless apart from the alias table, so one instance can normalize any
    number of files.
    """

    def __init__(self, *, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in (aliases or DEFAULT_FIELD_ALIASES).items()
        }

    def normalize(
        self,
        raw_record: Mapping[str, Any],
        all_headers: Sequence[str] | None = None,
    ) -> CanonicalRecord:
        """
        Normalize one raw record.

        The returned mapping holds every input column (keys trimmed) plus the
        canonical keys ``Store``, ``Rate``, ``Order Total``, ``Shipping Paid``
        and ``Tags``.
        """
        headers = tuple(all_headers) if all_headers is not None else tuple(raw_record.keys())
        raw_by_key = {
            str(key).strip(): value for key, value in raw_record.items() if key is not None
        }
        record = coerce_values(raw_record)

        for canonical_field in CANONICAL_FIELDS:
            # Presence is judged on the raw cell: a blank "Rate" coerced to
            # 0.0 must still fall through to its aliases.
            source_key = resolve_field(
                raw_by_key,
                canonical_field,
                headers=headers,
                aliases=self._aliases,
            )
            if canonical_field in NUMERIC_CANONICAL_FIELDS:
                value = record.get(source_key) if source_key is not None else None
                record[canonical_field] = extract_numeric(value)
            else:
                # Text fields come from the raw cell so "2024" stays "2024".
                value = raw_by_key.get(source_key) if source_key is not None else None
                record[canonical_field] = _as_text(value)

        return record

    def normalize_all(
        self,
        raw_records: Sequence[Mapping[str, Any]],
        all_headers: Sequence[str] | None = None,
    ) -> list[CanonicalRecord]:
        """Normalize a whole dataset against one header list."""
        return [self.normalize(raw, all_headers) for raw in raw_records]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


_default_normalizer = FieldNormalizer()


def normalize(
    raw_record: Mapping[str, Any],
    all_headers: Sequence[str] | None = None,
) -> CanonicalRecord:
    """Module-level shortcut using the default alias table."""
    return _default_normalizer.normalize(raw_record, all_headers)
