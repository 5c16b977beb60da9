"""Facade wiring storage, ledger, budgets and period selection to the analytics engine."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Any, Callable

from analytics import AnalyticsSnapshot, build_snapshot
from budgets import BudgetBook
from config import Settings, configure_logging
from formatting import format_amount
from insights import Insight, derive_insights
from ledger import ExpenseLedger
from period import PeriodSelector, SelectionResult
from preferences import AppPreferences
from storage import LocalStorage

logger = logging.getLogger(__name__)


class ExpenseTracker:
    """Entry point for a presentation layer.

    Nothing is recomputed implicitly; callers ask for ``snapshot()`` whenever
    they need fresh analytics.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        storage: LocalStorage | None = None,
        today: Callable[[], datetime.date] | None = None,
        clock: Callable[[], datetime.datetime] | None = None,
    ) -> None:
        self.settings = settings or Settings()
        configure_logging(self.settings.log_level)
        self.storage = storage or LocalStorage(self.settings)
        self._today = today or datetime.date.today
        self.preferences = self.storage.load_preferences()
        self.ledger = ExpenseLedger(
            self.storage.load_expenses(),
            save=self.storage.save_expenses,
            default_category=self.preferences.default_category,
            clock=clock,
        )
        self.budgets = BudgetBook(self.storage.load_budgets(), save=self.storage.save_budgets)
        self.selector = PeriodSelector(today=self._today, window_years=self.settings.period_window_years)

    def snapshot(self) -> AnalyticsSnapshot:
        return build_snapshot(
            self.ledger.expenses,
            self.selector.month,
            self.selector.year,
            budgets=self.budgets.budgets,
            today=self._today(),
            trend_months=self.settings.trend_months,
        )

    def insights(self) -> list[Insight]:
        return derive_insights(self.snapshot())

    def select_period(self, month: int, year: int) -> SelectionResult:
        return self.selector.select(month, year)

    def set_budget(self, amount: float, month: int | None = None, year: int | None = None) -> None:
        """Upsert the budget for the given month, defaulting to the selection."""
        self.budgets.set_budget_for(
            month if month is not None else self.selector.month,
            year if year is not None else self.selector.year,
            amount,
        )

    def update_preferences(self, **changes: Any) -> AppPreferences:
        merged = {**self.preferences.model_dump(), **changes}
        self.preferences = AppPreferences.model_validate(merged)
        self.storage.save_preferences(self.preferences)
        self.ledger.default_category = self.preferences.default_category
        return self.preferences

    def format_amount(self, value: float) -> str:
        return format_amount(value, self.preferences)

    def export_expenses(self, directory: str | Path, file_name: str | None = None) -> Path:
        return self.storage.export_expenses(directory, file_name)

    def import_expenses(self, path: str | Path) -> int:
        expenses = self.storage.import_expenses(path)
        self.ledger.replace_all(expenses)
        return len(expenses)

    def reset_all_data(self) -> None:
        self.storage.reset()
        self.ledger.replace_all([])
        self.budgets.clear()
        logger.info("All expense and budget data reset")
