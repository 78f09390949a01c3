"""
ratecalc/services/csv_reader_service.py

Locates and parses ShipStation CSV exports into raw datasets.

Files are looked up as given first, then inside the configured orders
directory ("ShipStation Orders" by default). Only CSV is accepted; Excel
exports are rejected with a hint to re-export as CSV.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Mapping

from ratecalc.domain.datasets import RawDataset
from ratecalc.logging_utils import log_event

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = frozenset({".csv"})
EXCEL_EXTENSIONS = frozenset({".xlsx", ".xls"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVFileNotFoundError(FileNotFoundError):
    """
    Raised when the export file exists neither as given nor in the orders directory.
    """


class UnsupportedFileTypeError(ValueError):
    """
    Raised for file extensions the reader cannot parse.
    """


class CSVHeaderValidationError(ValueError):
    """
    Raised when the CSV header row is missing or empty.
    """


# ---------------------------------------------------------------------------
# File lookup
# ---------------------------------------------------------------------------


def ensure_orders_dir(orders_dir: Path) -> None:
    """
    Create the orders directory when missing. Failures are logged, not raised.
    """

    if orders_dir.exists():
        return
    try:
        orders_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Created orders directory: %s", orders_dir)
    except OSError as exc:
        logger.warning("Could not create orders directory %s: %s", orders_dir, exc)


def resolve_file_path(file_path: str | Path, orders_dir: Path) -> Path:
    """
    Return the existing path for ``file_path``, checking the orders directory second.
    """

    ensure_orders_dir(orders_dir)

    candidate = Path(file_path)
    if candidate.exists():
        return candidate

    in_orders_dir = orders_dir / candidate
    if in_orders_dir.exists():
        return in_orders_dir

    raise CSVFileNotFoundError(
        f"File not found: {file_path}. Also checked in {orders_dir} directory."
    )


def list_csv_files(orders_dir: Path) -> list[Path]:
    """
    Return the CSV files of the orders directory sorted by name.
    """

    if not orders_dir.is_dir():
        return []
    return sorted(
        (path for path in orders_dir.iterdir() if path.is_file() and path.suffix.lower() == ".csv"),
        key=lambda path: path.name.lower(),
    )


def validate_extension(path: Path) -> None:
    """
    Reject anything but CSV files.
    """

    extension = path.suffix.lower()
    if extension in EXCEL_EXTENSIONS:
        raise UnsupportedFileTypeError(
            "Excel files are not yet supported. Please export as CSV from ShipStation."
        )
    if extension not in CSV_EXTENSIONS:
        raise UnsupportedFileTypeError("File must be a CSV or Excel file")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _is_completely_empty_row(row: Mapping[str, str | None]) -> bool:
    return all(value is None or not str(value).strip() for value in row.values())


def _parse_rows(reader: csv.DictReader, source_name: str) -> RawDataset:
    headers = reader.fieldnames or []
    if not any(header and header.strip() for header in headers):
        raise CSVHeaderValidationError("CSV header row is missing.")

    rows: list[dict[str, str]] = []
    skipped = 0
    for raw_row in reader:
        # csv.DictReader stores surplus cells under the None key.
        row = {key: ("" if value is None else value) for key, value in raw_row.items() if key is not None}
        if _is_completely_empty_row(row):
            skipped += 1
            continue
        rows.append(row)

    log_event(
        logger,
        logging.INFO,
        "csv_read",
        source=source_name,
        rows=len(rows),
        skipped_rows=skipped,
        headers=len(headers),
    )
    return RawDataset(
        headers=tuple(headers),
        rows=rows,
        source_name=source_name,
        skipped_rows=skipped,
    )


def read_csv_lines(lines: Iterable[str], source_name: str) -> RawDataset:
    """
    Parse already-decoded CSV text lines.
    """

    return _parse_rows(csv.DictReader(lines), source_name)


def read_csv_stream(raw_file: BinaryIO, source_name: str = "upload.csv") -> RawDataset:
    """
    Parse a binary CSV stream (e.g. an HTTP upload). The stream is not closed.
    """

    raw_file.seek(0)
    text_stream = io.TextIOWrapper(raw_file, encoding="utf-8-sig", newline="")
    try:
        return read_csv_lines(text_stream, source_name)
    except UnicodeDecodeError as exc:
        raise CSVHeaderValidationError(f"CSV is not valid UTF-8: {exc}") from exc
    finally:
        text_stream.detach()


def read_csv_file(file_path: str | Path, *, orders_dir: Path) -> RawDataset:
    """
    Resolve, validate and parse one CSV export file.
    """

    resolved = resolve_file_path(file_path, orders_dir)
    validate_extension(resolved)

    try:
        with resolved.open("r", encoding="utf-8-sig", newline="") as handle:
            return read_csv_lines(handle, resolved.name)
    except FileNotFoundError as exc:
        raise CSVFileNotFoundError(f"File not found: {file_path}") from exc
    except UnicodeDecodeError as exc:
        raise CSVHeaderValidationError(f"Failed to parse CSV: {exc}") from exc
