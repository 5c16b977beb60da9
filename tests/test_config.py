import logging
from pathlib import Path

import pytest

from config import Settings, configure_logging
from storage import LocalStorage


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SPENDLENS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SPENDLENS_TREND_MONTHS", "3")

    settings = Settings()

    assert settings.trend_months == 3
    assert settings.data_path == tmp_path
    assert LocalStorage(settings).expenses_path == tmp_path / "expenses.json"


def test_configure_logging_sets_root_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG
        configure_logging("not-a-level")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
