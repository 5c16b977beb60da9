"""Month/year selection restricted to past and current months."""

from __future__ import annotations

import calendar
import datetime
import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_YEARS = 5
DEFAULT_RECENT_MONTHS = 36

REJECTED_FUTURE = "future"
REJECTED_OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True, order=True)
class MonthYear:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def from_date(cls, value: datetime.date) -> "MonthYear":
        return cls(year=value.year, month=value.month)

    @property
    def display_name(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    def shift(self, months: int) -> "MonthYear":
        index = self.year * 12 + (self.month - 1) + int(months)
        return MonthYear(year=index // 12, month=index % 12 + 1)

    def is_future(self, today: datetime.date) -> bool:
        return (self.year, self.month) > (today.year, today.month)


@dataclass(frozen=True)
class SelectionResult:
    accepted: bool
    selection: MonthYear
    reason: str | None = None


def month_year_window(today: datetime.date, years: int = DEFAULT_WINDOW_YEARS) -> list[MonthYear]:
    """Every month from January of year-N through December of year+N."""
    return [
        MonthYear(year=year, month=month)
        for year in range(today.year - years, today.year + years + 1)
        for month in range(1, 13)
    ]


def recent_month_years(today: datetime.date, count: int = DEFAULT_RECENT_MONTHS) -> list[MonthYear]:
    """The last ``count`` months up to the current one, oldest first."""
    current = MonthYear.from_date(today)
    return [current.shift(-offset) for offset in reversed(range(max(int(count), 0)))]


class PeriodSelector:
    """Tracks the selected month; rejects transitions into the future.

    A rejected transition leaves the selection untouched and is reported
    through the returned ``SelectionResult``.
    """

    def __init__(
        self,
        today: Callable[[], datetime.date] | None = None,
        window_years: int = DEFAULT_WINDOW_YEARS,
    ) -> None:
        self._today = today or datetime.date.today
        self.window_years = int(window_years)
        self._selection = MonthYear.from_date(self._today())

    @property
    def selection(self) -> MonthYear:
        return self._selection

    @property
    def month(self) -> int:
        return self._selection.month

    @property
    def year(self) -> int:
        return self._selection.year

    def options(self) -> list[MonthYear]:
        return month_year_window(self._today(), self.window_years)

    def recent(self, count: int = DEFAULT_RECENT_MONTHS) -> list[MonthYear]:
        return recent_month_years(self._today(), count)

    def _in_window(self, candidate: MonthYear, today: datetime.date) -> bool:
        return today.year - self.window_years <= candidate.year <= today.year + self.window_years

    def select(self, month: int, year: int) -> SelectionResult:
        candidate = MonthYear(year=int(year), month=int(month))
        today = self._today()
        if candidate.is_future(today):
            logger.debug("Rejected selection of future month %s", candidate.display_name)
            return SelectionResult(accepted=False, selection=self._selection, reason=REJECTED_FUTURE)
        if not self._in_window(candidate, today):
            logger.debug("Rejected selection of %s outside the window", candidate.display_name)
            return SelectionResult(accepted=False, selection=self._selection, reason=REJECTED_OUT_OF_RANGE)
        self._selection = candidate
        return SelectionResult(accepted=True, selection=candidate)

    def step(self, months: int) -> SelectionResult:
        target = self._selection.shift(months)
        return self.select(target.month, target.year)

    def reset(self) -> MonthYear:
        self._selection = MonthYear.from_date(self._today())
        return self._selection
