"""Monthly budget lookup and upsert."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^(\d{2})-(\d{4})$")


def budget_key(month: int, year: int) -> str:
    """Zero-padded "MM-YYYY" key for a calendar month."""
    month = int(month)
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return f"{month:02d}-{int(year)}"


def parse_budget_key(key: str) -> tuple[int, int]:
    """Return (month, year) for a "MM-YYYY" key."""
    match = _KEY_PATTERN.match(str(key).strip())
    if not match:
        raise ValueError(f"Invalid budget key: {key!r}. Expected MM-YYYY.")
    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid budget key: {key!r}. Month out of range.")
    return month, year


def normalize_budgets(raw: Any) -> dict[str, float]:
    """Keep only well-formed "MM-YYYY" keys with numeric values."""
    if not isinstance(raw, dict):
        return {}
    out: dict[str, float] = {}
    for key, value in raw.items():
        try:
            month, year = parse_budget_key(key)
        except ValueError:
            logger.warning("Skipping budget with invalid key %r", key)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            logger.warning("Skipping budget %s with non-numeric amount %r", key, value)
            continue
        out[budget_key(month, year)] = float(value)
    return out


class BudgetBook:
    """In-memory budget map that persists every edit immediately.

    ``save`` is the storage collaborator's budget writer; it is called
    synchronously after each upsert so an edit is never held only in memory.
    """

    def __init__(
        self,
        budgets: dict[str, float] | None = None,
        save: Callable[[dict[str, float]], Any] | None = None,
    ) -> None:
        self._budgets = normalize_budgets(budgets or {})
        self._save = save

    @property
    def budgets(self) -> dict[str, float]:
        return dict(self._budgets)

    def get_budget(self, key: str) -> float | None:
        month, year = parse_budget_key(key)
        return self._budgets.get(budget_key(month, year))

    def set_budget(self, key: str, amount: float) -> None:
        month, year = parse_budget_key(key)
        normalized = budget_key(month, year)
        action = "Updated" if normalized in self._budgets else "Set"
        self._budgets[normalized] = float(amount)
        if self._save is not None:
            self._save(dict(self._budgets))
        logger.info("%s budget for %s to %.2f", action, normalized, float(amount))

    def budget_for(self, month: int, year: int) -> float | None:
        return self._budgets.get(budget_key(month, year))

    def set_budget_for(self, month: int, year: int, amount: float) -> None:
        self.set_budget(budget_key(month, year), amount)

    def clear(self) -> None:
        self._budgets.clear()
        if self._save is not None:
            self._save({})
