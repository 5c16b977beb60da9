import datetime
import logging
from pathlib import Path

from config import Settings
from models import Category
from preferences import Theme
from tracker import ExpenseTracker

TODAY = datetime.date(2024, 3, 20)


def _tracker(tmp_path: Path) -> ExpenseTracker:
    return ExpenseTracker(
        settings=Settings(data_dir=str(tmp_path)),
        today=lambda: TODAY,
        clock=lambda: datetime.datetime(2024, 3, 20, 12, 0),
    )


def test_snapshot_reflects_ledger_and_budget(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)
    tracker.ledger.add_expense("Groceries", 80, Category.FOOD)
    tracker.ledger.add_expense("Power", 40, Category.UTILITIES, date=datetime.datetime(2024, 3, 2, 9))
    tracker.set_budget(600)

    snapshot = tracker.snapshot()

    assert snapshot.total_spent == 120.0
    assert snapshot.current_budget == 600.0
    assert snapshot.average_daily_spend == 6.0
    assert snapshot.days_remaining_in_month == 11
    assert snapshot.ranked_categories()[0] == (Category.FOOD, 80.0)


def test_future_period_is_rejected_without_changing_snapshot(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)

    result = tracker.select_period(4, 2024)

    assert result.accepted is False
    assert (tracker.snapshot().month, tracker.snapshot().year) == (3, 2024)
    assert tracker.select_period(2, 2024).accepted is True
    assert tracker.snapshot().month == 2


def test_state_survives_reload(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)
    tracker.ledger.quick_add("groceries")
    tracker.set_budget(250, month=2, year=2024)
    tracker.update_preferences(currency_code="GBP", theme="dark")

    reloaded = _tracker(tmp_path)

    assert len(reloaded.ledger) == 1
    assert reloaded.budgets.get_budget("02-2024") == 250.0
    assert reloaded.preferences.currency_code == "GBP"
    assert reloaded.preferences.theme is Theme.DARK
    assert reloaded.format_amount(12) == "£12.00"


def test_default_category_follows_preferences(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)
    tracker.update_preferences(default_category="healthcare")

    expense = tracker.ledger.add_expense("Pharmacy", 15)
    assert expense.category is Category.HEALTHCARE


def test_export_import_and_reset(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)
    tracker.ledger.add_expense("Rent", 900, Category.RENT)
    tracker.set_budget(1000)
    exported = tracker.export_expenses(tmp_path / "exports")

    tracker.reset_all_data()
    assert tracker.snapshot().total_spent == 0.0
    assert tracker.snapshot().current_budget is None

    assert tracker.import_expenses(exported) == 1
    assert tracker.snapshot().total_spent == 900.0
    assert _tracker(tmp_path).snapshot().total_spent == 900.0


def test_insights_are_derived_from_current_snapshot(tmp_path: Path) -> None:
    tracker = _tracker(tmp_path)
    tracker.ledger.add_expense("Concert", 60, Category.ENTERTAINMENT, date=datetime.datetime(2024, 3, 16, 20))
    tracker.set_budget(50)

    kinds = {insight.kind: insight for insight in tracker.insights()}
    assert kinds["biggest_category"].label == "Entertainment"
    assert kinds["budget"].label == "over budget"


def test_log_level_setting_configures_root_logger(tmp_path: Path) -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        ExpenseTracker(settings=Settings(data_dir=str(tmp_path), log_level="DEBUG"), today=lambda: TODAY)
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)
