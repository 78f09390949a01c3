from __future__ import annotations

from pathlib import Path

import pytest

from ratecalc.config import (
    DEFAULT_MAX_UPLOAD_BYTES,
    DEFAULT_STORE_DISPLAY_ORDER,
    get_api_settings,
    get_log_level,
    get_report_settings,
)


class TestReportSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("SHIPSTATION_ORDERS_DIR", "REPORT_OUTPUT_DIR", "STORE_DISPLAY_ORDER"):
            monkeypatch.delenv(name, raising=False)

        settings = get_report_settings()

        assert settings.orders_dir == Path("ShipStation Orders")
        assert settings.output_dir == Path.home() / "Downloads"
        assert settings.store_display_order == DEFAULT_STORE_DISPLAY_ORDER

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("SHIPSTATION_ORDERS_DIR", str(tmp_path / "in"))
        monkeypatch.setenv("REPORT_OUTPUT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("STORE_DISPLAY_ORDER", " Temu Store, ,Shopify Store ")

        settings = get_report_settings()

        assert settings.orders_dir == tmp_path / "in"
        assert settings.output_dir == tmp_path / "out"
        assert settings.store_display_order == ("Temu Store", "Shopify Store")

    def test_settings_are_cached(self) -> None:
        assert get_report_settings() is get_report_settings()


class TestAPISettings:
    def test_default_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("API_MAX_UPLOAD_BYTES", raising=False)
        assert get_api_settings().max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES

    def test_invalid_limit_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_MAX_UPLOAD_BYTES", "lots")
        assert get_api_settings().max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES


def test_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level() == "DEBUG"
