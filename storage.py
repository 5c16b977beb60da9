"""JSON persistence for expenses, budgets and preferences."""

from __future__ import annotations

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import TypeAdapter, ValidationError

from budgets import normalize_budgets
from config import Settings
from models import Expense
from preferences import AppPreferences

logger = logging.getLogger(__name__)

_EXPENSE_LIST = TypeAdapter(list[Expense])


def _read_json(target: Path) -> Any:
    """Parsed JSON payload, or None when the file is missing or unreadable."""
    if not target.exists():
        return None
    try:
        return json.loads(target.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Could not read %s: %s", target, exc)
        return None


def _write_json(target: Path, payload: Any) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return target


def parse_expenses(payload: Any) -> list[Expense]:
    """Validate a decoded expense array; raises ValueError when malformed."""
    if not isinstance(payload, list):
        raise ValueError("Expense data must be a JSON array.")
    try:
        return _EXPENSE_LIST.validate_python(payload)
    except ValidationError as exc:
        raise ValueError(f"Malformed expense data: {exc.error_count()} error(s)") from exc


def load_expenses(path: str | Path) -> list[Expense]:
    """Load expenses from disk; missing or malformed data loads as empty."""
    target = Path(path).expanduser()
    payload = _read_json(target)
    if payload is None:
        return []
    try:
        return parse_expenses(payload)
    except ValueError as exc:
        logger.warning("Ignoring expenses in %s: %s", target, exc)
        return []


def save_expenses(path: str | Path, expenses: Iterable[Expense]) -> Path:
    """Save expenses to disk and return the saved path."""
    target = Path(path).expanduser()
    return _write_json(target, [expense.to_record() for expense in expenses])


def load_budgets(path: str | Path) -> dict[str, float]:
    target = Path(path).expanduser()
    payload = _read_json(target)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        logger.warning("Ignoring budgets in %s: expected a JSON object", target)
        return {}
    return normalize_budgets(payload)


def save_budgets(path: str | Path, budgets: dict[str, float]) -> Path:
    target = Path(path).expanduser()
    return _write_json(target, normalize_budgets(budgets))


def load_preferences(path: str | Path) -> AppPreferences:
    target = Path(path).expanduser()
    payload = _read_json(target)
    if not isinstance(payload, dict):
        return AppPreferences()
    try:
        return AppPreferences.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Ignoring preferences in %s: %s", target, exc)
        return AppPreferences()


def save_preferences(path: str | Path, preferences: AppPreferences) -> Path:
    target = Path(path).expanduser()
    return _write_json(target, preferences.model_dump(mode="json"))


def default_export_name(today: datetime.date | None = None) -> str:
    today = today or datetime.date.today()
    return f"spendlens_export_{today.isoformat()}.json"


class LocalStorage:
    """File-backed storage collaborator rooted at the configured data folder."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.root = self.settings.data_path

    @property
    def expenses_path(self) -> Path:
        return self.root / self.settings.expenses_file

    @property
    def budgets_path(self) -> Path:
        return self.root / self.settings.budgets_file

    @property
    def preferences_path(self) -> Path:
        return self.root / self.settings.preferences_file

    def load_expenses(self) -> list[Expense]:
        return load_expenses(self.expenses_path)

    def save_expenses(self, expenses: Iterable[Expense]) -> Path:
        return save_expenses(self.expenses_path, expenses)

    def load_budgets(self) -> dict[str, float]:
        return load_budgets(self.budgets_path)

    def save_budgets(self, budgets: dict[str, float]) -> Path:
        return save_budgets(self.budgets_path, budgets)

    def load_preferences(self) -> AppPreferences:
        return load_preferences(self.preferences_path)

    def save_preferences(self, preferences: AppPreferences) -> Path:
        return save_preferences(self.preferences_path, preferences)

    def export_expenses(self, directory: str | Path, file_name: str | None = None) -> Path:
        """Write the stored expenses to a standalone JSON file."""
        name = file_name or default_export_name()
        if not name.endswith(".json"):
            name = f"{name}.json"
        target = Path(directory).expanduser() / name
        saved = save_expenses(target, self.load_expenses())
        logger.info("Exported expenses to %s", saved)
        return saved

    def import_expenses(self, path: str | Path) -> list[Expense]:
        """Replace stored expenses with the contents of an export file."""
        source = Path(path).expanduser()
        if not source.exists():
            raise FileNotFoundError(f"Import file does not exist: {source}")
        try:
            payload = json.loads(source.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Import file is not valid JSON: {source}") from exc
        expenses = parse_expenses(payload)
        self.save_expenses(expenses)
        logger.info("Imported %d expenses from %s", len(expenses), source)
        return expenses

    def reset(self) -> None:
        self.save_expenses([])
        self.save_budgets({})
        logger.info("Cleared stored expenses and budgets")
