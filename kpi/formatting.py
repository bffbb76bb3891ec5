"""
kpi/formatting.py

Display formatting for KPI values.

Formats
-------
currency    symbol + grouped integer          1234.5 -> "$1,235"
percentage  one fixed decimal, no grouping    1234.5 -> "1234.5%"
(default)   grouped, at most one decimal      1234.5 -> "1,234.5"

Grouped formats round the shortest decimal representation of the value;
the percentage format rounds the exact binary value. Both round ties away
from zero.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

CURRENCY_FORMAT: Final[str] = "currency"
PERCENTAGE_FORMAT: Final[str] = "percentage"
NUMBER_FORMAT: Final[str] = "number"
DEFAULT_CURRENCY_SYMBOL: Final[str] = "$"


_DECIMAL_PRECISION: Final[int] = 400


def _quantize(value: Decimal, places: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        quantized = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    # Normalise negative zero.
    return quantized if quantized != 0 else abs(quantized)


def _format_infinite(value: float) -> str:
    return "∞" if value > 0 else "-∞"


def format_grouped(value: int | float, max_decimals: int) -> str:
    """
    Format *value* with thousands separators and at most *max_decimals*
    fraction digits, dropping trailing zeros.
    """

    if isinstance(value, float) and math.isinf(value):
        return _format_infinite(value)

    quantized = _quantize(Decimal(repr(value)), max_decimals)
    if quantized == quantized.to_integral_value():
        return f"{int(quantized):,}"

    text = f"{quantized:,.{max_decimals}f}"
    return text.rstrip("0").rstrip(".")


def format_fixed(value: int | float, decimals: int) -> str:
    if isinstance(value, float) and math.isinf(value):
        return _format_infinite(value)
    return f"{_quantize(Decimal(value), decimals):.{decimals}f}"


def format_kpi_value(
    value: int | float,
    fmt: str | None = None,
    *,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """
    Render a KPI result according to *fmt*.

    Unknown and missing formats use the grouped number style.
    """

    if fmt == CURRENCY_FORMAT:
        return f"{currency_symbol}{format_grouped(value, 0)}"
    if fmt == PERCENTAGE_FORMAT:
        return f"{format_fixed(value, 1)}%"
    return format_grouped(value, 1)
