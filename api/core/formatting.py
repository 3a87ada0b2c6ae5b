"""
Display helpers for money, dates and percentages.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

CURRENCY_CODE = "LKR"


def _round_half_up(value: float | Decimal) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(amount: float | Decimal | None) -> str:
    """
    Whole-rupee amount with thousands separators, e.g. "LKR 1,500".
    """
    value = _round_half_up(amount or 0)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_CODE} {abs(value):,}"


def format_date(value: date | datetime | str) -> str:
    """
    Long US-style date, e.g. "March 5, 2025".
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return f"{value:%B} {value.day}, {value.year}"


def calculate_percentage(part: float | Decimal | None, total: float | Decimal | None) -> int:
    """
    round(100 * part / total) clamped to [0, 100]; 0 when total is 0 or missing.
    """
    if not total or total <= 0:
        return 0
    ratio = Decimal(str(part or 0)) * 100 / Decimal(str(total))
    return max(0, min(_round_half_up(ratio), 100))


def money_value(amount: float | Decimal | None) -> int | float:
    """
    JSON number for a money total: int when whole, float otherwise.
    """
    value = Decimal(str(amount or 0))
    return int(value) if value == value.to_integral_value() else float(value)
