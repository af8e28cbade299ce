"""Display formatting for amounts, percentages and dates."""

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from household_finance.config import DisplayConfig

_DEFAULT_DISPLAY = DisplayConfig()


def _to_decimal(value: float | Decimal | int | None) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return Decimal("0")
    result = Decimal(str(value))
    return Decimal("0") if result.is_nan() else result


def format_number(
    value: float | Decimal | int | None,
    decimals: int = 2,
    display: DisplayConfig = _DEFAULT_DISPLAY,
) -> str:
    """Format a number with grouping, e.g. ``1234.5`` -> ``"1.234,50"``.

    NaN and None are shown as zero.
    """
    quantum = Decimal(1).scaleb(-decimals)
    amount = _to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if amount == 0:
        amount = abs(amount)  # no "-0,00"
    text = f"{amount:,.{decimals}f}"
    return (
        text.replace(",", "\0")
        .replace(".", display.decimal_separator)
        .replace("\0", display.thousands_separator)
    )


def format_currency(
    value: float | Decimal | int | None,
    display: DisplayConfig = _DEFAULT_DISPLAY,
) -> str:
    """Format an amount as currency, e.g. ``1234.5`` -> ``"1.234,50 €"``."""
    return f"{format_number(value, 2, display)} {display.currency_symbol}"


def format_percent(
    value: float | Decimal | int | None,
    decimals: int = 0,
    display: DisplayConfig = _DEFAULT_DISPLAY,
) -> str:
    """Format a percentage value (already scaled to 0-100)."""
    return f"{format_number(value, decimals, display)} %"


def format_ratio(value: float | None, decimals: int = 0, display: DisplayConfig = _DEFAULT_DISPLAY) -> str:
    """Format a 0-1 ratio as a percentage."""
    return format_percent(_to_decimal(value) * 100, decimals, display)


def format_date(value: date, display: DisplayConfig = _DEFAULT_DISPLAY) -> str:
    return value.strftime(display.date_format)
