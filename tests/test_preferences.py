from formatting import format_amount, format_delta, format_progress, month_label, spent_of_budget
from models import Category, parse_amount
from preferences import AppPreferences, Theme, currency_symbol


def test_preferences_defaults() -> None:
    prefs = AppPreferences()

    assert prefs.currency_code == "USD"
    assert prefs.default_category is Category.FOOD
    assert prefs.theme is Theme.SYSTEM


def test_preferences_coerce_unknown_values() -> None:
    prefs = AppPreferences(currency_code="xyz", default_category="hobbies", theme="neon")

    assert prefs.currency_code == "USD"
    assert prefs.default_category is Category.OTHERS
    assert prefs.theme is Theme.SYSTEM
    assert AppPreferences(currency_code="eur").currency_code == "EUR"


def test_currency_symbols() -> None:
    assert currency_symbol("GBP") == "£"
    assert currency_symbol("CHF") == "Fr"
    assert currency_symbol("ZZZ") == "$"


def test_format_amount_uses_preferences_symbol() -> None:
    assert format_amount(1234.5, AppPreferences(currency_code="EUR")) == "€1,234.50"
    assert format_amount(-3, AppPreferences()) == "-$3.00"


def test_format_delta_and_progress() -> None:
    assert format_delta(12.345) == "+12.3%"
    assert format_delta(-4.0) == "-4.0%"
    assert format_delta(None) == "n/a"
    assert format_progress(0.456) == "46%"


def test_month_label_and_budget_line() -> None:
    assert month_label(3, 2024) == "March 2024"
    assert spent_of_budget(50, 200, AppPreferences()) == "Spent $50.00 out of $200.00"


def test_category_display_names_and_amount_parsing() -> None:
    assert Category.TRANSPORTATION.display_name == "Transportation"
    assert Category.coerce(" Rent ") is Category.RENT
    assert parse_amount("1 234,75") == 1234.75
    assert parse_amount(7) == 7.0
