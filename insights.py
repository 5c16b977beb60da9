"""Derived spending insights over a monthly snapshot."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from analytics import AnalyticsSnapshot
from models import Category

_WEEKDAY_ORDER = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

NEAR_LIMIT_RATIO = 0.8


@dataclass(frozen=True)
class Insight:
    kind: str
    label: str
    tag: str
    value: object = None


def weekend_weekday_ratio(daily: pd.DataFrame) -> float:
    """Weekend average daily spend divided by the weekday average."""
    if daily.empty:
        return 0.0
    is_weekend = pd.to_datetime(daily["Date"]).dt.dayofweek >= 5
    weekend = daily.loc[is_weekend, "Amount"]
    weekday = daily.loc[~is_weekend, "Amount"]
    weekday_avg = float(weekday.mean()) if not weekday.empty else 0.0
    weekend_avg = float(weekend.mean()) if not weekend.empty else 0.0
    if weekday_avg == 0:
        return 0.0
    return weekend_avg / weekday_avg


def classify_weekend_ratio(ratio: float) -> str:
    if ratio > 1.5:
        return "weekend spender"
    if 1.1 < ratio <= 1.5:
        return "slightly higher weekend"
    if ratio < 0.7:
        return "weekday focused"
    return "balanced"


def weekend_insight(daily: pd.DataFrame) -> Insight:
    ratio = weekend_weekday_ratio(daily)
    label = classify_weekend_ratio(ratio)
    tag = {
        "weekend spender": "warning",
        "slightly higher weekend": "info",
        "weekday focused": "info",
        "balanced": "positive",
    }[label]
    return Insight(kind="weekend_ratio", label=label, tag=tag, value=ratio)


def month_bucket_averages(daily: pd.DataFrame) -> dict[str, float]:
    """Average daily spend in the early (1-10), mid (11-20) and late (21+) days.

    Buckets without any day in ``daily`` are left out.
    """
    buckets = pd.cut(daily["Day"], bins=[0, 10, 20, 31], labels=["early", "mid", "late"])
    means = daily.groupby(buckets, observed=True)["Amount"].mean()
    return {str(name): float(value) for name, value in means.items()}


def classify_monthly_pattern(averages: dict[str, float]) -> str:
    if len(averages) < 2:
        return "consistent"
    for name, value in averages.items():
        others = [other for key, other in averages.items() if key != name]
        if value > 0 and all(value > other * 1.3 for other in others):
            return f"{name}-month spender"
    return "consistent"


def monthly_pattern_insight(daily: pd.DataFrame) -> Insight:
    averages = month_bucket_averages(daily)
    label = classify_monthly_pattern(averages)
    return Insight(
        kind="monthly_pattern",
        label=label,
        tag="positive" if label == "consistent" else "info",
        value=averages,
    )


def biggest_category(spending: dict[Category, float]) -> tuple[Category, float] | None:
    """Largest category total; ties go to the earlier category."""
    best: tuple[Category, float] | None = None
    for category in Category:
        if category not in spending:
            continue
        amount = float(spending[category])
        if best is None or amount > best[1]:
            best = (category, amount)
    return best


def most_active_weekday(daily: pd.DataFrame) -> tuple[str, float] | None:
    """Weekday with the highest average spend over days that had spending."""
    active = daily[daily["Amount"] > 0]
    if active.empty:
        return None
    names = pd.to_datetime(active["Date"]).dt.day_name()
    means = active.groupby(names)["Amount"].mean()
    means = means.reindex([day for day in _WEEKDAY_ORDER if day in means.index])
    winner = means.idxmax()
    return str(winner), float(means[winner])


def budget_insight(total: float, budget: float | None) -> Insight | None:
    if budget is None or budget <= 0:
        return None
    ratio = float(total) / float(budget)
    if ratio >= 1.0:
        return Insight(kind="budget", label="over budget", tag="warning", value=ratio)
    if ratio >= NEAR_LIMIT_RATIO:
        return Insight(kind="budget", label="near budget limit", tag="info", value=ratio)
    return Insight(kind="budget", label="on track", tag="positive", value=ratio)


def derive_insights(snapshot: AnalyticsSnapshot) -> list[Insight]:
    """All insights that have enough data for the selected month."""
    daily = snapshot.elapsed_daily_spending()
    insights: list[Insight] = []
    if daily.empty or float(daily["Amount"].sum()) == 0:
        budget = budget_insight(snapshot.total_spent, snapshot.current_budget)
        return [budget] if budget else []

    insights.append(weekend_insight(daily))
    insights.append(monthly_pattern_insight(daily))

    top = biggest_category(snapshot.spending_by_category)
    if top is not None:
        insights.append(
            Insight(kind="biggest_category", label=top[0].display_name, tag="info", value=top[1])
        )

    weekday = most_active_weekday(daily)
    if weekday is not None:
        insights.append(Insight(kind="most_active_weekday", label=weekday[0], tag="info", value=weekday[1]))

    budget = budget_insight(snapshot.total_spent, snapshot.current_budget)
    if budget is not None:
        insights.append(budget)
    return insights
