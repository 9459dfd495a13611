"""Delivery timeline conversion: amount + unit to days and display strings."""

import re
from decimal import Decimal
from typing import Optional, Union

from proposal_desk.amounts import format_plain, parse_amount
from proposal_desk.models.proposal import TimelineUnit

# Months are approximated as 30 days
DAYS_PER_UNIT: dict[TimelineUnit, int] = {
    TimelineUnit.DAY: 1,
    TimelineUnit.WEEK: 7,
    TimelineUnit.MONTH: 30,
}

_TIMELINE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*(day|days|week|weeks|month|months)$")
_UNIT_WORDS = ("day", "week", "month")

Amount = Union[str, int, float, Decimal, None]


def parse_unit(unit: Optional[str]) -> Optional[TimelineUnit]:
    """Map 'day'/'week'/'month' (or a TimelineUnit) to TimelineUnit; None if unknown."""
    if isinstance(unit, TimelineUnit):
        return unit
    try:
        return TimelineUnit((unit or "").strip().lower())
    except ValueError:
        return None


def _positive(amount: Amount) -> Optional[Decimal]:
    number = parse_amount(None if amount is None else str(amount))
    if number is None or number <= 0:
        return None
    return number


def timeline_to_days(amount: Amount, unit: Optional[str] = None) -> Decimal:
    """
    Convert a timeline amount and unit to days.
    Invalid or non-positive amounts give 0; a missing or unknown unit is treated as days.
    """
    number = _positive(amount)
    if number is None:
        return Decimal(0)
    parsed = parse_unit(unit)
    if parsed is None:
        return number
    return number * DAYS_PER_UNIT[parsed]


def format_timeline(amount: Amount, unit: Optional[str] = None) -> str:
    """
    Display string such as '2 weeks' or '1 day'.
    Without a unit, text already naming a unit ('6 weeks') is returned as-is
    and bare numbers are shown as days. Unusable input renders as an em dash.
    """
    if amount is None:
        return "—"

    if not unit and isinstance(amount, str):
        trimmed = amount.strip()
        if any(word in trimmed for word in _UNIT_WORDS):
            return trimmed
        number = _positive(trimmed)
        if number is None:
            return trimmed or "—"
        return _pluralize(number, TimelineUnit.DAY)

    number = _positive(amount)
    if number is None:
        return "—"
    return _pluralize(number, parse_unit(unit) or TimelineUnit.DAY)


def _pluralize(number: Decimal, unit: TimelineUnit) -> str:
    suffix = "s" if number > 1 else ""
    return f"{format_plain(number)} {unit.value}{suffix}"


def build_timeline_data(amount: Amount, unit: Optional[str] = None) -> tuple[str, Decimal]:
    """Canonical (display string, day count) pair sent to the backend."""
    return format_timeline(amount, unit), timeline_to_days(amount, unit)


def parse_timeline(text: Optional[str]) -> Optional[tuple[Decimal, TimelineUnit]]:
    """Parse a posted timeline like '6 weeks' or '30 days'; None if it does not match."""
    if not text:
        return None
    match = _TIMELINE_PATTERN.match(str(text).lower().strip())
    if not match:
        return None
    unit = TimelineUnit(match.group(2).rstrip("s"))
    return Decimal(match.group(1)), unit


def timeline_in_days(text: Optional[str]) -> Decimal:
    """Day count of a posted timeline string; 0 (unconstrained) when unparseable."""
    parsed = parse_timeline(text)
    if parsed is None:
        return Decimal(0)
    amount, unit = parsed
    return amount * DAYS_PER_UNIT[unit]
