"""
tests/test_reporting.py

Pytest tests for console, CSV and Excel report rendering.
"""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from ratecalc.reporting.console_reporter import (
    TOTAL_COLUMN,
    build_store_table,
    build_tag_table,
    render_report,
)
from ratecalc.reporting.excel_exporter import (
    OVERVIEW_SHEET,
    STORE_SHEET,
    TAG_SHEET,
    build_excel_report,
    save_excel_report,
)
from ratecalc.reporting.formatting import (
    format_currency,
    format_percentage,
    period_from_source,
    with_share,
)
from ratecalc.reporting.report_exporter import (
    BOM,
    build_csv_report,
    default_report_name,
    save_csv_report,
)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    def test_currency_and_percentage(self) -> None:
        assert format_currency(12.5) == "$12.50"
        assert format_currency(-3) == "$-3.00"
        assert format_percentage(20) == "20.00%"
        assert with_share("$10.00", 25) == "$10.00 (25.0%)"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("Feb-March 2025.csv", "Feb-March 2025"),
            ("orders.CSV", "orders"),
            ("upload", "Current_Period"),
            (None, "Current_Period"),
        ],
    )
    def test_period_from_source(self, source: str | None, expected: str) -> None:
        assert period_from_source(source) == expected


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


class TestConsoleReporter:
    def test_store_table_columns_follow_preferred_order(self, sample_report) -> None:
        table = build_store_table(sample_report, ["Walmart Store", "Shopify Store"])
        assert list(table.columns) == ["Walmart Store", "Shopify Store", "Temu Store", TOTAL_COLUMN]
        assert table.loc["Orders", "Shopify Store"] == "2 (50.0%)"
        assert table.loc["Orders", TOTAL_COLUMN] == "4"
        assert table.loc["Ship Margin", "Shopify Store"] == "20.00%"

    def test_tag_table(self, sample_report) -> None:
        table = build_tag_table(sample_report)
        assert list(table.columns) == ["Giveaways", "Influencer", "Replacement", TOTAL_COLUMN]
        assert table.loc["% of All Orders", "Giveaways"] == "50.0%"
        assert table.loc["Avg Shipping Cost", "Giveaways"] == "$3.50"

    def test_full_report_sections(self, sample_report) -> None:
        text = render_report(sample_report)
        assert "=== Store Metrics ===" in text
        assert "Stores Summary:" in text
        assert "Overall Summary:" in text
        assert "=== Special Orders Analysis ===" in text
        assert "Unique Categories: 3" in text

    def test_compact_and_section_switches(self, sample_report) -> None:
        text = render_report(sample_report, compact=True, include_tags=False)
        assert "=== Store Metrics ===" in text
        assert "Stores Summary:" not in text
        assert "Special Orders" not in text


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------


class TestCSVExport:
    def test_starts_with_bom_and_title(self, sample_report) -> None:
        text = build_csv_report(sample_report)
        assert text.startswith(BOM)

        rows = list(csv.reader(io.StringIO(text[len(BOM):])))
        assert rows[0] == ["ShipStation Analytics Report for Feb-March 2025"]
        assert ["STORE METRICS"] in rows
        assert ["SPECIAL ORDERS ANALYSIS"] in rows
        assert ["Total Orders: 4"] in rows

    def test_store_table_rows(self, sample_report) -> None:
        rows = list(csv.reader(io.StringIO(build_csv_report(sample_report)[len(BOM):])))
        header = next(row for row in rows if row and row[0] == "Metric")
        assert header[-1] == "TOTAL"

    def test_default_name(self) -> None:
        name = default_report_name("Feb-March 2025.csv", now=datetime(2025, 3, 31, 9, 5, 7))
        assert name == "Feb-March 2025_ShipStation_Report_2025-03-31T09-05-07.csv"

    def test_save_to_output_dir(self, sample_report, tmp_path: Path) -> None:
        path = save_csv_report(sample_report, output_dir=tmp_path / "out")
        assert path.parent == tmp_path / "out"
        assert path.name.startswith("Feb-March 2025_ShipStation_Report_")
        assert path.read_text(encoding="utf-8").startswith(BOM)

    def test_explicit_output_path(self, sample_report, tmp_path: Path) -> None:
        target = tmp_path / "custom.csv"
        assert save_csv_report(sample_report, output_dir=tmp_path / "unused", output_path=target) == target
        assert target.exists()


# ---------------------------------------------------------------------------
# Excel export
# ---------------------------------------------------------------------------


class TestExcelExport:
    def test_workbook_sheets(self, sample_report, tmp_path: Path) -> None:
        path = save_excel_report(sample_report, output_dir=tmp_path)
        assert path.suffix == ".xlsx"

        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == [OVERVIEW_SHEET, STORE_SHEET, TAG_SHEET]

        stores = sheets[STORE_SHEET]
        assert stores["Store"].tolist()[-1] == "TOTAL"
        shopify = stores[stores["Store"] == "Shopify Store"].iloc[0]
        assert shopify["Orders"] == 2
        assert shopify["Ship Margin %"] == pytest.approx(20.0)

        tags = sheets[TAG_SHEET]
        giveaways = tags[tags["Tag"] == "Giveaways"].iloc[0]
        assert giveaways["Orders"] == 2
        assert giveaways["Total Ship Cost"] == pytest.approx(7.0)

    def test_in_memory_workbook(self, sample_report) -> None:
        data = build_excel_report(sample_report)
        assert data[:2] == b"PK"
        overview = pd.read_excel(io.BytesIO(data), sheet_name=OVERVIEW_SHEET)
        assert "Total Orders" in overview["Metric"].tolist()
