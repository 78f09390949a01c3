from __future__ import annotations

from pathlib import Path

import pytest

from ratecalc.config import get_api_settings, get_report_settings
from ratecalc.domain.datasets import MetricsReport
from ratecalc.services.csv_reader_service import read_csv_lines
from ratecalc.services.metrics_service import MetricsService

SAMPLE_CSV = (
    "Order #,Order Date,Store,Rate,Order Total,Shipping Paid,Tags\n"
    "1001,02/01/2025,Shopify Store,$5.00,$50.00,$7.00,Giveaways\n"
    "1002,02/10/2025,Shopify Store,3,30,3,\n"
    "1003,03/05/2025,Walmart Store,$4.00,$20.00,$0.00,Replacement\n"
    "1004,03/20/2025,Temu Store,$2.00,$10.00,$2.00,\"Giveaways, Influencer\"\n"
)


@pytest.fixture()
def sample_csv_text() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def orders_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "ShipStation Orders"
    directory.mkdir()
    return directory


@pytest.fixture()
def sample_csv_path(orders_dir: Path) -> Path:
    path = orders_dir / "Feb-March 2025.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture()
def sample_report() -> MetricsReport:
    dataset = read_csv_lines(SAMPLE_CSV.splitlines(), "Feb-March 2025.csv")
    return MetricsService().build_report(dataset)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_report_settings.cache_clear()
    get_api_settings.cache_clear()
    yield
    get_report_settings.cache_clear()
    get_api_settings.cache_clear()
