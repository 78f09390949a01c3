"""
tests/test_csv_reader_service.py

Pytest tests for locating and parsing ShipStation CSV exports.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from ratecalc.services.csv_reader_service import (
    CSVFileNotFoundError,
    CSVHeaderValidationError,
    UnsupportedFileTypeError,
    list_csv_files,
    read_csv_file,
    read_csv_lines,
    read_csv_stream,
    resolve_file_path,
)


class TestResolveFilePath:
    def test_existing_path_is_returned(self, sample_csv_path: Path, orders_dir: Path) -> None:
        assert resolve_file_path(sample_csv_path, orders_dir) == sample_csv_path

    def test_falls_back_to_orders_dir(
        self,
        sample_csv_path: Path,
        orders_dir: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_file_path("Feb-March 2025.csv", orders_dir) == orders_dir / "Feb-March 2025.csv"

    def test_missing_file_names_both_locations(self, orders_dir: Path) -> None:
        with pytest.raises(CSVFileNotFoundError) as exc_info:
            resolve_file_path("nope.csv", orders_dir)
        message = str(exc_info.value)
        assert "nope.csv" in message
        assert str(orders_dir) in message

    def test_missing_orders_dir_is_created(self, tmp_path: Path) -> None:
        orders_dir = tmp_path / "new orders"
        with pytest.raises(CSVFileNotFoundError):
            resolve_file_path("nope.csv", orders_dir)
        assert orders_dir.is_dir()


class TestReadCSVFile:
    def test_reads_rows_and_headers(self, sample_csv_path: Path, orders_dir: Path) -> None:
        dataset = read_csv_file(sample_csv_path, orders_dir=orders_dir)

        assert dataset.source_name == "Feb-March 2025.csv"
        assert dataset.headers[:3] == ("Order #", "Order Date", "Store")
        assert len(dataset.rows) == 4
        assert dataset.rows[3]["Tags"] == "Giveaways, Influencer"
        assert dataset.skipped_rows == 0

    @pytest.mark.parametrize("name", ["orders.xlsx", "orders.xls"])
    def test_excel_is_rejected_with_hint(self, orders_dir: Path, name: str) -> None:
        path = orders_dir / name
        path.write_bytes(b"PK")
        with pytest.raises(UnsupportedFileTypeError, match="export as CSV"):
            read_csv_file(path, orders_dir=orders_dir)

    def test_other_extensions_are_rejected(self, orders_dir: Path) -> None:
        path = orders_dir / "orders.txt"
        path.write_text("a,b\n1,2\n", encoding="utf-8")
        with pytest.raises(UnsupportedFileTypeError, match="CSV or Excel"):
            read_csv_file(path, orders_dir=orders_dir)

    def test_bom_is_stripped_from_first_header(self, orders_dir: Path) -> None:
        path = orders_dir / "bom.csv"
        path.write_bytes("\ufeffStore,Rate\nShopify Store,1\n".encode("utf-8"))
        dataset = read_csv_file(path, orders_dir=orders_dir)
        assert dataset.headers == ("Store", "Rate")
        assert dataset.rows[0]["Store"] == "Shopify Store"

    def test_empty_file_has_no_header(self, orders_dir: Path) -> None:
        path = orders_dir / "empty.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(CSVHeaderValidationError):
            read_csv_file(path, orders_dir=orders_dir)


class TestParsing:
    def test_blank_rows_are_skipped_and_counted(self) -> None:
        dataset = read_csv_lines(["Store,Rate", "A,1", ",", "B,2"], "inline.csv")
        assert [row["Store"] for row in dataset.rows] == ["A", "B"]
        assert dataset.skipped_rows == 1

    def test_short_and_long_rows(self) -> None:
        dataset = read_csv_lines(["Store,Rate", "A", "B,2,extra"], "inline.csv")
        assert dataset.rows[0] == {"Store": "A", "Rate": ""}
        assert dataset.rows[1] == {"Store": "B", "Rate": "2"}

    def test_read_stream_leaves_stream_open(self, sample_csv_text: str) -> None:
        stream = io.BytesIO(sample_csv_text.encode("utf-8"))
        dataset = read_csv_stream(stream, source_name="upload.csv")
        assert len(dataset.rows) == 4
        assert not stream.closed

    def test_read_stream_rejects_non_utf8(self) -> None:
        with pytest.raises(CSVHeaderValidationError):
            read_csv_stream(io.BytesIO(b"Store,Rate\n\xff\xfe,1\n"))


def test_list_csv_files_sorted(orders_dir: Path) -> None:
    for name in ("b.csv", "A.csv", "notes.txt"):
        (orders_dir / name).write_text("Store\n", encoding="utf-8")
    assert [path.name for path in list_csv_files(orders_dir)] == ["A.csv", "b.csv"]
    assert list_csv_files(orders_dir / "missing") == []
