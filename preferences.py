"""User preferences passed explicitly to formatting and the ledger."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from models import Category

DEFAULT_CURRENCY = "USD"

AVAILABLE_CURRENCIES = [
    {"code": "USD", "symbol": "$", "name": "US Dollar"},
    {"code": "EUR", "symbol": "€", "name": "Euro"},
    {"code": "MDL", "symbol": "L", "name": "Moldovan Leu"},
    {"code": "GBP", "symbol": "£", "name": "British Pound"},
    {"code": "JPY", "symbol": "¥", "name": "Japanese Yen"},
    {"code": "CAD", "symbol": "$", "name": "Canadian Dollar"},
    {"code": "AUD", "symbol": "$", "name": "Australian Dollar"},
    {"code": "CHF", "symbol": "Fr", "name": "Swiss Franc"},
    {"code": "CNY", "symbol": "¥", "name": "Chinese Yuan"},
    {"code": "INR", "symbol": "₹", "name": "Indian Rupee"},
    {"code": "RUB", "symbol": "₽", "name": "Russian Ruble"},
]

_SYMBOL_BY_CODE = {item["code"]: item["symbol"] for item in AVAILABLE_CURRENCIES}


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


def currency_symbol(code: str) -> str:
    return _SYMBOL_BY_CODE.get(str(code).upper(), "$")


class AppPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    currency_code: str = DEFAULT_CURRENCY
    default_category: Category = Category.FOOD
    theme: Theme = Theme.SYSTEM

    @field_validator("currency_code", mode="before")
    @classmethod
    def _known_currency(cls, value: Any) -> str:
        code = str(value or "").strip().upper()
        return code if code in _SYMBOL_BY_CODE else DEFAULT_CURRENCY

    @field_validator("default_category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        if value is None:
            return Category.FOOD
        return Category.coerce(value)

    @field_validator("theme", mode="before")
    @classmethod
    def _coerce_theme(cls, value: Any) -> Theme:
        if isinstance(value, Theme):
            return value
        try:
            return Theme(str(value).strip().lower())
        except ValueError:
            return Theme.SYSTEM

    @property
    def currency_symbol(self) -> str:
        return currency_symbol(self.currency_code)
