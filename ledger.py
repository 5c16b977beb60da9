"""Expense list maintenance: add, quick-add, edit, delete and month grouping."""

from __future__ import annotations

import datetime
import logging
import uuid
from typing import Any, Callable, Iterable

from models import Category, Expense, clean_title, parse_amount

logger = logging.getLogger(__name__)

QUICK_ADD_PRESETS: dict[str, dict[str, Any]] = {
    "coffee": {"title": "Coffee", "amount": 5.0, "category": Category.FOOD},
    "bus": {"title": "Bus Ticket", "amount": 2.5, "category": Category.TRANSPORTATION},
    "groceries": {"title": "Groceries", "amount": 20.0, "category": Category.SHOPPING},
}

_EDITABLE_FIELDS = {"title", "amount", "date", "category"}


def expenses_for_month(expenses: Iterable[Expense], month: int, year: int) -> list[Expense]:
    return [
        expense
        for expense in expenses
        if expense.local_date.month == int(month) and expense.local_date.year == int(year)
    ]


def group_for_listing(expenses: Iterable[Expense], month: int, year: int) -> list[tuple[Category, list[Expense]]]:
    """Month expenses grouped by category name, newest first within a group."""
    groups: dict[Category, list[Expense]] = {}
    for expense in expenses_for_month(expenses, month, year):
        groups.setdefault(expense.category, []).append(expense)
    return [
        (category, sorted(groups[category], key=lambda e: e.local_date, reverse=True))
        for category in sorted(groups, key=lambda c: c.display_name)
    ]


class ExpenseLedger:
    """Caller-owned expense list that is saved after every mutation."""

    def __init__(
        self,
        expenses: Iterable[Expense] | None = None,
        save: Callable[[list[Expense]], Any] | None = None,
        default_category: Category = Category.FOOD,
        clock: Callable[[], datetime.datetime] | None = None,
    ) -> None:
        self._expenses = list(expenses or [])
        self._save = save
        self.default_category = default_category
        self._clock = clock or datetime.datetime.now

    @property
    def expenses(self) -> list[Expense]:
        return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def _persist(self) -> None:
        if self._save is not None:
            self._save(list(self._expenses))

    def _index_of(self, expense_id: uuid.UUID | str) -> int:
        wanted = str(expense_id)
        for idx, expense in enumerate(self._expenses):
            if str(expense.id) == wanted:
                return idx
        raise KeyError(f"Unknown expense id: {wanted}")

    def get(self, expense_id: uuid.UUID | str) -> Expense:
        return self._expenses[self._index_of(expense_id)]

    def add_expense(
        self,
        title: str,
        amount: str | float,
        category: Category | str | None = None,
        date: datetime.datetime | None = None,
    ) -> Expense:
        expense = Expense(
            title=clean_title(title),
            amount=parse_amount(amount),
            date=date or self._clock(),
            category=self.default_category if category is None else Category.coerce(category),
        )
        self._expenses.append(expense)
        self._persist()
        logger.info("Added expense %s (%s, %.2f)", expense.id, expense.category.value, expense.amount)
        return expense

    def quick_add(self, preset: str, date: datetime.datetime | None = None) -> Expense:
        """Add one of the predefined one-tap expenses."""
        try:
            values = QUICK_ADD_PRESETS[str(preset).lower()]
        except KeyError:
            raise KeyError(f"Unknown quick-add preset: {preset}") from None
        return self.add_expense(values["title"], values["amount"], values["category"], date=date)

    def update_expense(self, expense_id: uuid.UUID | str, **changes: Any) -> Expense:
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
        idx = self._index_of(expense_id)
        if "title" in changes:
            changes["title"] = clean_title(changes["title"])
        if "amount" in changes:
            changes["amount"] = parse_amount(changes["amount"])
        if "category" in changes:
            changes["category"] = Category.coerce(changes["category"])
        updated = Expense.model_validate({**self._expenses[idx].model_dump(), **changes})
        self._expenses[idx] = updated
        self._persist()
        logger.info("Updated expense %s", updated.id)
        return updated

    def delete_expense(self, expense_id: uuid.UUID | str) -> Expense:
        removed = self._expenses.pop(self._index_of(expense_id))
        self._persist()
        logger.info("Deleted expense %s", removed.id)
        return removed

    def delete_at(self, offsets: Iterable[int]) -> list[Expense]:
        """Remove expenses by list position."""
        positions = sorted({int(offset) for offset in offsets}, reverse=True)
        for position in positions:
            if not 0 <= position < len(self._expenses):
                raise IndexError(f"Expense position out of range: {position}")
        removed = [self._expenses.pop(position) for position in positions]
        self._persist()
        return list(reversed(removed))

    def replace_all(self, expenses: Iterable[Expense]) -> None:
        self._expenses = list(expenses)
        self._persist()

    def for_month(self, month: int, year: int) -> list[Expense]:
        return expenses_for_month(self._expenses, month, year)

    def grouped_for_month(self, month: int, year: int) -> list[tuple[Category, list[Expense]]]:
        return group_for_listing(self._expenses, month, year)
