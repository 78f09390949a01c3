"""
ratecalc/services/date_filter.py

Date-range narrowing of raw export rows.

Range input uses the ``MM/DD/YY-MM/DD/YY`` form (two-digit years mean
20YY). Each row is dated by the first non-empty field among
:data:`DATE_FIELDS` that parses; rows without any usable date are kept.
Both ends of the range are inclusive at day granularity.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Mapping, Sequence, TypeVar

from ratecalc.domain.datasets import DateRange
from ratecalc.logging_utils import log_event

logger = logging.getLogger(__name__)

DATE_FIELDS: tuple[str, ...] = ("Order Date", "OrderDate", "Date", "Ship Date", "ShipDate")

_RANGE_PATTERN = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{2})\s*-\s*(\d{1,2})/(\d{1,2})/(\d{2})$"
)
_US_DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{2,4})\b")
_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")

RecordT = TypeVar("RecordT", bound=Mapping[str, Any])


class DateRangeError(ValueError):
    """
    Raised when a date range string is malformed or inverted.
    """


def _build_date(year: int, month: int, day: int, *, label: str) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateRangeError(f"Invalid {label} date") from exc


def format_period_name(start: date, end: date) -> str:
    """
    Human label for a range, e.g. ``"Feb 1-Mar 15, 2025"``.
    """

    return f"{start:%b} {start.day}-{end:%b} {end.day}, {end.year}"


def parse_date_range(text: str | None) -> DateRange | None:
    """
    Parse ``MM/DD/YY-MM/DD/YY``. Blank input means "no filter" and returns None.
    """

    if text is None or not text.strip():
        return None

    match = _RANGE_PATTERN.match(text.strip())
    if match is None:
        raise DateRangeError(
            "Please enter a valid date range in MM/DD/YY-MM/DD/YY format or leave empty"
        )

    start_month, start_day, start_year, end_month, end_day, end_year = (
        int(group) for group in match.groups()
    )
    start = _build_date(2000 + start_year, start_month, start_day, label="start")
    end = _build_date(2000 + end_year, end_month, end_day, label="end")
    if start > end:
        raise DateRangeError("Start date must be before end date")

    return DateRange(
        start=start,
        end=end,
        period_name=format_period_name(start, end),
        label=f"{start:%m/%d/%y}-{end:%m/%d/%y}",
    )


def parse_record_date(value: Any) -> date | None:
    """
    Parse a row's date cell; ``MM/DD/YYYY`` first, then ISO. None when unusable.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    us_match = _US_DATE_PATTERN.match(text)
    if us_match is not None:
        month, day, year = (int(group) for group in us_match.groups())
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            return None

    iso_match = _ISO_DATE_PATTERN.match(text)
    if iso_match is not None:
        year, month, day = (int(group) for group in iso_match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None
    return None


def record_date(record: Mapping[str, Any], fields: Sequence[str] = DATE_FIELDS) -> date | None:
    """
    Date of the first populated, parseable date field of a row.
    """

    for field_name in fields:
        value = record.get(field_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        parsed = parse_record_date(value)
        if parsed is not None:
            return parsed
    return None


def filter_by_date_range(
    records: Sequence[RecordT],
    start: date,
    end: date,
) -> list[RecordT]:
    """
    Keep rows dated within ``[start, end]``; undated rows pass through.
    """

    kept: list[RecordT] = []
    for record in records:
        dated = record_date(record)
        if dated is None or start <= dated <= end:
            kept.append(record)

    log_event(
        logger,
        logging.INFO,
        "date_filter_applied",
        start=start.isoformat(),
        end=end.isoformat(),
        rows_before=len(records),
        rows_after=len(kept),
    )
    if records and not kept:
        logger.warning(
            "No records match the date filter. Check that dates in the CSV use MM/DD/YYYY."
        )
    return kept
