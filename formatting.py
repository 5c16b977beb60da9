"""Display formatting for amounts, deltas and periods."""

from __future__ import annotations

import calendar

from preferences import AppPreferences


def format_amount(value: float, preferences: AppPreferences) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{preferences.currency_symbol}{abs(value):,.2f}"


def format_delta(value: float | None) -> str:
    if value is None:
        return "n/a"
    if value > 0:
        return f"+{value:,.1f}%"
    return f"{value:,.1f}%"


def format_progress(progress: float) -> str:
    return f"{progress * 100:.0f}%"


def month_label(month: int, year: int) -> str:
    return f"{calendar.month_name[int(month)]} {int(year)}"


def spent_of_budget(total: float, budget: float, preferences: AppPreferences) -> str:
    return f"Spent {format_amount(total, preferences)} out of {format_amount(budget, preferences)}"
