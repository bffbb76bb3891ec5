from __future__ import annotations

import pytest

from app.config import INT_SETTINGS, DashboardSettings, get_dashboard_settings
from app.main import _validate_env


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (*INT_SETTINGS, "DASHBOARD_CURRENCY_SYMBOL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_dashboard_settings.cache_clear()
    yield
    get_dashboard_settings.cache_clear()


def test_defaults() -> None:
    settings = get_dashboard_settings()
    assert settings == DashboardSettings()
    assert settings.max_upload_bytes == 50 * 1024 * 1024


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_SAMPLE_ROWS", "5")
    monkeypatch.setenv("DASHBOARD_MAX_CHART_GROUPS", "8")
    monkeypatch.setenv("DASHBOARD_CURRENCY_SYMBOL", " € ")

    settings = get_dashboard_settings()
    assert settings.sample_rows == 5
    assert settings.max_chart_groups == 8
    assert settings.currency_symbol == "€"


def test_invalid_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_RAW_POINT_LIMIT", "lots")
    monkeypatch.setenv("DASHBOARD_CURRENCY_SYMBOL", "   ")

    settings = get_dashboard_settings()
    assert settings.raw_point_limit == 500
    assert settings.currency_symbol == "$"


def test_values_are_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DASHBOARD_MAX_UPLOAD_MB", "0")
    monkeypatch.setenv("DASHBOARD_FILTER_MAX_UNIQUE", "1")

    settings = get_dashboard_settings()
    assert settings.max_upload_mb == 1
    assert settings.filter_max_unique == 2


class TestValidateEnv:
    def test_passes_with_valid_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DASHBOARD_SAMPLE_ROWS", "10")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        _validate_env()

    def test_collects_every_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DASHBOARD_SAMPLE_ROWS", "abc")
        monkeypatch.setenv("DASHBOARD_MAX_UPLOAD_MB", "-3")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(RuntimeError) as exc_info:
            _validate_env()

        message = str(exc_info.value)
        assert "DASHBOARD_SAMPLE_ROWS='abc'" in message
        assert "DASHBOARD_MAX_UPLOAD_MB=-3" in message
        assert "LOG_LEVEL='LOUD'" in message
