"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Runtime settings, overridable through SPENDLENS_* variables."""

    data_dir: str = "data"
    expenses_file: str = "expenses.json"
    budgets_file: str = "budgets.json"
    preferences_file: str = "preferences.json"

    trend_months: int = 6
    period_window_years: int = 5

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="SPENDLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()


def configure_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
