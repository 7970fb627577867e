"""Утилиты форматирования денежных сумм."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

_TWO_PLACES = Decimal("0.01")


def to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def format_money(value: Any, currency: str = "$") -> str:
    """Отформатировать сумму с разделителями тысяч: ``$12 500.00``."""

    amount = to_decimal(value)
    if amount is None:
        return "—"
    amount = amount.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    formatted = f"{amount:,.2f}".replace(",", " ")
    return f"{currency}{formatted}"
