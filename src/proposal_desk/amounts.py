"""Shared parsing and display helpers for monetary and numeric form inputs."""

from decimal import Decimal, InvalidOperation
from typing import Optional


def parse_amount(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse user-entered text into a Decimal.
    Returns None for blank, non-numeric, NaN or infinite input, and for
    digit-grouped text such as "1,000" or "6_000".
    """
    if text is None:
        return None
    value = str(text).strip()
    # Decimal() also accepts underscore grouping ("6_000")
    if not value or "_" in value:
        return None
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def format_plain(amount: Decimal) -> str:
    """Plain number without exponent or trailing zeros: 900, 1000, 12.5."""
    if amount == amount.to_integral_value():
        return str(int(amount))
    return format(amount.normalize(), "f")


def format_grouped(amount: Decimal) -> str:
    """Thousands-separated number for budget displays: 5,000 or 12,500.5."""
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return format(amount.normalize(), ",f")
