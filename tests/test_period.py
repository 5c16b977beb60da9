import datetime

import pytest

from period import (
    REJECTED_FUTURE,
    REJECTED_OUT_OF_RANGE,
    MonthYear,
    PeriodSelector,
    month_year_window,
    recent_month_years,
)

TODAY = datetime.date(2024, 6, 15)


def _selector() -> PeriodSelector:
    return PeriodSelector(today=lambda: TODAY)


def test_selector_starts_on_current_month() -> None:
    selector = _selector()
    assert (selector.month, selector.year) == (6, 2024)


def test_future_selection_is_rejected_and_leaves_state_unchanged() -> None:
    selector = _selector()
    selector.select(3, 2024)

    result = selector.select(7, 2024)

    assert result.accepted is False
    assert result.reason == REJECTED_FUTURE
    assert result.selection == MonthYear(year=2024, month=3)
    assert (selector.month, selector.year) == (3, 2024)
    assert selector.select(1, 2025).accepted is False


def test_past_and_current_selection_succeeds() -> None:
    selector = _selector()

    assert selector.select(11, 2021).accepted is True
    assert selector.selection == MonthYear(year=2021, month=11)
    assert selector.select(6, 2024).accepted is True


def test_selection_outside_window_is_rejected() -> None:
    selector = _selector()
    result = selector.select(12, 2018)

    assert result.accepted is False
    assert result.reason == REJECTED_OUT_OF_RANGE
    assert selector.select(1, 2019).accepted is True


def test_invalid_month_raises() -> None:
    with pytest.raises(ValueError):
        _selector().select(0, 2024)


def test_step_moves_relative_and_respects_future_rule() -> None:
    selector = _selector()

    assert selector.step(1).accepted is False
    assert selector.step(-6).accepted is True
    assert selector.selection == MonthYear(year=2023, month=12)
    selector.reset()
    assert selector.selection == MonthYear(year=2024, month=6)


def test_window_spans_five_years_each_side() -> None:
    window = month_year_window(TODAY)

    assert len(window) == 11 * 12
    assert window[0] == MonthYear(year=2019, month=1)
    assert window[-1] == MonthYear(year=2029, month=12)


def test_recent_month_years_oldest_first() -> None:
    recent = recent_month_years(TODAY, count=3)
    assert recent == [MonthYear(2024, 4), MonthYear(2024, 5), MonthYear(2024, 6)]
    assert len(recent_month_years(TODAY)) == 36


def test_month_year_display_and_shift() -> None:
    assert MonthYear(2024, 1).display_name == "January 2024"
    assert MonthYear(2024, 1).shift(-1) == MonthYear(2023, 12)
    assert MonthYear(2023, 12).shift(1) == MonthYear(2024, 1)
