"""Display helpers for amounts, dates and categories."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Union

from dateutil import parser as date_parser

from models.category import Category

UNKNOWN_CATEGORY_COLOR = "#e5e7eb"


def format_currency(amount: Union[Decimal, int, float]) -> str:
    """Format an amount as US dollars, e.g. 1234.5 -> "$1,234.50"."""
    amount = Decimal(str(amount))
    if not amount.is_finite():
        return "$0.00"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def to_input_date(value: date) -> str:
    """Render a date the way the expense form expects it (YYYY-MM-DD)."""
    return value.strftime("%Y-%m-%d")


def pretty_date(value: str) -> str:
    """Render a stored expense date for display.

    Unparseable values are returned unchanged.
    """
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, TypeError):
        return value
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def category_color(categories: Iterable[Category], key: str) -> str:
    """Color of the category with the given key, grey when unknown."""
    for category in categories:
        if category.key == key:
            return category.color
    return UNKNOWN_CATEGORY_COLOR


def category_label(categories: Iterable[Category], key: str) -> str:
    """Label of the category with the given key, the key itself when unknown."""
    for category in categories:
        if category.key == key:
            return category.label
    return key
