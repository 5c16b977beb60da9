"""Expense records and the closed category set."""

from __future__ import annotations

import datetime
import enum
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Seconds between the Unix epoch and 2001-01-01 UTC, the epoch used by
# numeric dates in older exports.
REFERENCE_EPOCH_OFFSET = 978307200.0


class Category(str, enum.Enum):
    FOOD = "food"
    RENT = "rent"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    TRANSPORTATION = "transportation"
    UTILITIES = "utilities"
    SUBSCRIPTIONS = "subscriptions"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    OTHERS = "others"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def coerce(cls, value: Any) -> "Category":
        """Map a raw value to a category, falling back to OTHERS."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHERS


class Expense(BaseModel):
    """A single spending record as stored on disk."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    amount: float = Field(alias="price")
    date: datetime.datetime
    category: Category = Category.OTHERS

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return Category.coerce(value)

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.datetime.fromtimestamp(float(value) + REFERENCE_EPOCH_OFFSET)
        return value

    @property
    def local_date(self) -> datetime.datetime:
        """Wall-clock datetime as entered, without timezone info."""
        return self.date.replace(tzinfo=None)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def parse_amount(text: str | float | int) -> float:
    """Parse a user-entered amount, accepting a decimal comma."""
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        return float(text)
    cleaned = str(text).strip().replace(" ", "").replace(",", ".")
    if not cleaned:
        raise ValueError("Please enter the expense amount.")
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Please enter a valid amount: {text!r}") from None


def clean_title(text: str) -> str:
    title = str(text or "").strip()
    if not title:
        raise ValueError("Please enter a title for your expense.")
    return title
