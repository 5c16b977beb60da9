"""Analytics helpers for monthly spending summaries, trends and projections."""

from __future__ import annotations

import calendar
import datetime
import math
from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from budgets import budget_key
from models import Category, Expense

FRAME_COLUMNS = ["Id", "Title", "Amount", "Date", "Category"]
DEFAULT_TREND_MONTHS = 6
TOP_CHANGES_LIMIT = 4


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Tabular view of expense records used by every aggregation."""
    rows = [
        {
            "Id": str(expense.id),
            "Title": expense.title,
            "Amount": float(expense.amount),
            "Date": expense.local_date,
            "Category": expense.category.value,
        }
        for expense in expenses
    ]
    if not rows:
        df = pd.DataFrame(columns=FRAME_COLUMNS)
        df["Amount"] = df["Amount"].astype(float)
        df["Date"] = pd.to_datetime(df["Date"])
        return df
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["Date"] = pd.to_datetime(df["Date"])
    return df


def days_in_month(month: int, year: int) -> int:
    return calendar.monthrange(int(year), int(month))[1]


def _month_relation(month: int, year: int, today: datetime.date) -> int:
    """-1 for a past month, 0 for the current month, 1 for a future month."""
    selected = (int(year), int(month))
    current = (today.year, today.month)
    if selected < current:
        return -1
    if selected > current:
        return 1
    return 0


def filter_by_month(df: pd.DataFrame, month: int, year: int) -> pd.DataFrame:
    """Rows whose calendar month and year match the selection."""
    mask = (df["Date"].dt.month == int(month)) & (df["Date"].dt.year == int(year))
    return df.loc[mask].copy()


def group_by_category(df: pd.DataFrame) -> dict[Category, pd.DataFrame]:
    """Partition rows by category; categories without rows are omitted."""
    groups: dict[Category, pd.DataFrame] = {}
    for category in Category:
        subset = df[df["Category"] == category.value]
        if not subset.empty:
            groups[category] = subset.copy()
    return groups


def total_spent(df: pd.DataFrame) -> float:
    return float(df["Amount"].sum())


def spending_by_category(df: pd.DataFrame) -> dict[Category, float]:
    """Category totals in category order, present categories only."""
    totals = df.groupby("Category")["Amount"].sum()
    out: dict[Category, float] = {}
    for category in Category:
        if category.value in totals.index:
            out[category] = float(totals[category.value])
    return out


def rank_categories(spending: dict[Category, float]) -> list[tuple[Category, float]]:
    """Categories by amount descending; equal amounts keep category order."""
    order = {category: idx for idx, category in enumerate(Category)}
    return sorted(spending.items(), key=lambda item: (-item[1], order[item[0]]))


def daily_spending(df: pd.DataFrame, month: int, year: int) -> pd.DataFrame:
    """Dense per-day totals for the month, zero-filled and day ascending."""
    n_days = days_in_month(month, year)
    month_df = filter_by_month(df, month, year)
    per_day = month_df.groupby(month_df["Date"].dt.day)["Amount"].sum()
    per_day = per_day.reindex(range(1, n_days + 1), fill_value=0.0).astype(float)
    return pd.DataFrame(
        {
            "Day": list(range(1, n_days + 1)),
            "Date": pd.date_range(datetime.date(int(year), int(month), 1), periods=n_days, freq="D"),
            "Amount": per_day.values,
        }
    )


def elapsed_days(month: int, year: int, today: datetime.date) -> int:
    """Days of the month that have already occurred."""
    relation = _month_relation(month, year, today)
    if relation < 0:
        return days_in_month(month, year)
    if relation == 0:
        return today.day
    return 0


def average_daily_spend(total: float, month: int, year: int, today: datetime.date) -> float:
    days = elapsed_days(month, year, today)
    return float(total) / days if days else 0.0


def days_remaining_in_month(month: int, year: int, today: datetime.date) -> int:
    if _month_relation(month, year, today) != 0:
        return 0
    return days_in_month(month, year) - today.day


def budget_remaining_per_day(total: float, budget: float | None, days_remaining: int) -> float | None:
    """Budget left per remaining day; None when no budget is set."""
    if budget is None:
        return None
    if days_remaining <= 0:
        return 0.0
    return (float(budget) - float(total)) / days_remaining


def projected_monthly_spend(avg_daily: float, month: int, year: int) -> float:
    """Linear extrapolation of the daily average over the full month."""
    return float(avg_daily) * days_in_month(month, year)


def monthly_trends(
    df: pd.DataFrame, month: int, year: int, months: int = DEFAULT_TREND_MONTHS
) -> pd.DataFrame:
    """Monthly totals for every calendar month of the window ending at the
    selection, oldest first. Months without expenses are 0; an empty history
    gives an empty frame.
    """
    if df.empty:
        return pd.DataFrame(columns=["Month", "Year", "Amount"])

    window = pd.period_range(end=pd.Period(year=int(year), month=int(month), freq="M"), periods=max(int(months), 1))
    periods = df["Date"].dt.to_period("M")
    totals = df.groupby(periods)["Amount"].sum()
    totals = totals.reindex(window, fill_value=0.0)
    return pd.DataFrame(
        {
            "Month": [int(p.month) for p in totals.index],
            "Year": [int(p.year) for p in totals.index],
            "Amount": totals.astype(float).values,
        }
    )


def trend_change_pct(trends: pd.DataFrame) -> float | None:
    """Percent change from the oldest to the newest month of the trend.

    None for an empty trend or a zero oldest month; a single month compares
    with itself and gives 0.
    """
    if trends.empty:
        return None
    first = float(trends["Amount"].iloc[0])
    last = float(trends["Amount"].iloc[-1])
    if first == 0:
        return None
    return (last - first) / first * 100.0


def _previous_month(month: int, year: int) -> tuple[int, int]:
    if int(month) == 1:
        return 12, int(year) - 1
    return int(month) - 1, int(year)


def category_trends(df: pd.DataFrame, month: int, year: int) -> pd.DataFrame:
    """Current vs previous month per category present in the current month.

    The Category column holds category values, as in ``expenses_frame``.
    """
    columns = ["Category", "CurrentAmount", "PreviousAmount", "ChangePct", "IsIncreasing"]
    current = spending_by_category(filter_by_month(df, month, year))
    if not current:
        return pd.DataFrame(columns=columns)

    prev_month, prev_year = _previous_month(month, year)
    previous = spending_by_category(filter_by_month(df, prev_month, prev_year))

    rows: list[dict[str, object]] = []
    for category, amount in current.items():
        prev_amount = previous.get(category, 0.0)
        change_pct = ((amount - prev_amount) / prev_amount * 100.0) if prev_amount else float("nan")
        rows.append(
            {
                "Category": category.value,
                "CurrentAmount": amount,
                "PreviousAmount": prev_amount,
                "ChangePct": change_pct,
                "IsIncreasing": amount > prev_amount,
            }
        )
    return pd.DataFrame(rows, columns=columns)


def top_category_changes(trends: pd.DataFrame, limit: int = TOP_CHANGES_LIMIT) -> pd.DataFrame:
    """Largest relative category changes; rows without a baseline are skipped."""
    if trends.empty:
        return trends.copy()
    ranked = trends[trends["PreviousAmount"] > 0].copy()
    ranked["AbsChangePct"] = ranked["ChangePct"].abs()
    ranked = ranked.sort_values("AbsChangePct", ascending=False, kind="stable").head(int(limit))
    return ranked.drop(columns=["AbsChangePct"]).reset_index(drop=True)


def _round_up_to_ten(value: float) -> float:
    # Guard against float noise such as 110.00000000000001.
    return float(math.ceil(round(value, 6) / 10.0) * 10)


def suggested_budget(trends: pd.DataFrame, projected: float) -> float:
    """Next-month budget suggestion; 0 when there is nothing to base it on.

    Three or more months with spending use the average of the last three
    calendar months of the trend, otherwise the month projection.
    """
    active_months = int((trends["Amount"] > 0).sum()) if not trends.empty else 0
    if active_months >= 3:
        recent = float(trends["Amount"].tail(3).mean())
        return _round_up_to_ten(recent * 1.10)
    if projected > 0:
        return _round_up_to_ten(float(projected) * 1.05)
    return 0.0


def budget_status(total: float, budget: float | None) -> dict[str, float | bool] | None:
    """Progress of spending against the month budget, capped at 1.0."""
    if budget is None or budget <= 0:
        return None
    progress = min(float(total) / float(budget), 1.0)
    return {
        "progress": progress,
        "spent_ratio": float(total) / float(budget),
        "remaining": float(budget) - float(total),
        "over_budget": progress >= 1.0,
    }


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """All derived analytics for one selected month."""

    month: int
    year: int
    as_of: datetime.date
    total_spent: float
    spending_by_category: dict[Category, float]
    daily_spending: pd.DataFrame
    monthly_trends: pd.DataFrame
    category_trends: pd.DataFrame
    current_budget: float | None
    average_daily_spend: float
    days_remaining_in_month: int
    budget_remaining_per_day: float | None
    projected_monthly_spend: float
    trend_change_pct: float | None
    suggested_budget: float
    top_changes: pd.DataFrame = field(default_factory=pd.DataFrame)

    @property
    def budget_key(self) -> str:
        return budget_key(self.month, self.year)

    @property
    def is_empty(self) -> bool:
        return not self.spending_by_category

    def ranked_categories(self) -> list[tuple[Category, float]]:
        return rank_categories(self.spending_by_category)

    def budget_status(self) -> dict[str, float | bool] | None:
        return budget_status(self.total_spent, self.current_budget)

    def elapsed_daily_spending(self) -> pd.DataFrame:
        """Daily series trimmed to the days that have already occurred."""
        days = elapsed_days(self.month, self.year, self.as_of)
        return self.daily_spending[self.daily_spending["Day"] <= days].reset_index(drop=True)


def build_snapshot(
    expenses: Iterable[Expense],
    month: int,
    year: int,
    budgets: dict[str, float] | None = None,
    today: datetime.date | None = None,
    trend_months: int = DEFAULT_TREND_MONTHS,
) -> AnalyticsSnapshot:
    """Recompute every analytics value for the selected month from scratch."""
    today = today or datetime.date.today()
    df = expenses_frame(expenses)
    month_df = filter_by_month(df, month, year)

    total = total_spent(month_df)
    budget = (budgets or {}).get(budget_key(month, year))
    avg_daily = average_daily_spend(total, month, year, today)
    remaining_days = days_remaining_in_month(month, year, today)
    projected = projected_monthly_spend(avg_daily, month, year)
    trends = monthly_trends(df, month, year, months=trend_months)
    cat_trends = category_trends(df, month, year)

    return AnalyticsSnapshot(
        month=int(month),
        year=int(year),
        as_of=today,
        total_spent=total,
        spending_by_category=spending_by_category(month_df),
        daily_spending=daily_spending(month_df, month, year),
        monthly_trends=trends,
        category_trends=cat_trends,
        current_budget=float(budget) if budget is not None else None,
        average_daily_spend=avg_daily,
        days_remaining_in_month=remaining_days,
        budget_remaining_per_day=budget_remaining_per_day(total, budget, remaining_days),
        projected_monthly_spend=projected,
        trend_change_pct=trend_change_pct(trends),
        suggested_budget=suggested_budget(trends, projected),
        top_changes=top_category_changes(cat_trends),
    )
