"""
ingestion/coercion.py

Value coercion rules shared by the parser, the profiler, and the
aggregation layer.

Rules
-----
parse_number       numeric literal -> int | float, anything else -> None
to_number          parse-or-default-to-zero (bool -> 1/0, blanks -> 0)
to_display_string  canonical string form used for bucketing and cardinality

Every fallback lives here as an explicit rule so callers never need to
catch conversion errors.
"""

from __future__ import annotations

import math
import re
from typing import Union

DataValue = Union[str, int, float, bool, None]
Record = dict[str, DataValue]

_DECIMAL_LITERAL = re.compile(
    r"""
    ^[+-]?
    (?:
        \d+(?:\.\d*)?(?:[eE][+-]?\d+)?
      | \.\d+(?:[eE][+-]?\d+)?
    )$
    """,
    re.VERBOSE | re.ASCII,
)
_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$", re.ASCII)
_INFINITY_LITERAL = re.compile(r"^([+-]?)Infinity$")
_PREFIXED_LITERALS: dict[str, tuple[re.Pattern[str], int]] = {
    "hex": (re.compile(r"^0[xX]([0-9a-fA-F]+)$"), 16),
    "binary": (re.compile(r"^0[bB]([01]+)$"), 2),
    "octal": (re.compile(r"^0[oO]([0-7]+)$"), 8),
}

# Integral floats below this magnitude print without an exponent.
_PLAIN_INTEGER_LIMIT = 1e21


def parse_number(text: str) -> int | float | None:
    """
    Parse *text* as a numeric literal.

    Accepts signed decimals with optional fraction and exponent, the
    ``Infinity`` keyword, and unsigned ``0x`` / ``0b`` / ``0o`` prefixed
    integers. Plain integer literals stay ``int``; everything else numeric
    becomes ``float``. Returns ``None`` when *text* is not numeric,
    including blank input.
    """

    stripped = text.strip()
    if not stripped:
        return None

    if _INTEGER_LITERAL.match(stripped):
        return int(stripped)
    if _DECIMAL_LITERAL.match(stripped):
        return float(stripped)

    infinity = _INFINITY_LITERAL.match(stripped)
    if infinity:
        return -math.inf if infinity.group(1) == "-" else math.inf

    for pattern, base in _PREFIXED_LITERALS.values():
        prefixed = pattern.match(stripped)
        if prefixed:
            return int(prefixed.group(1), base)

    return None


def is_number(value: DataValue) -> bool:
    """Return True for int/float values, excluding booleans."""

    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_blank(value: DataValue) -> bool:
    return value is None or value == ""


def is_falsy(value: DataValue) -> bool:
    """
    Return True for values that count as "no value" when bucketing:
    ``None``, ``""``, ``False``, zero, and NaN.
    """

    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    return value == 0


def to_number(value: DataValue) -> int | float:
    """
    Coerce *value* to a number, defaulting to ``0`` when it is not numeric.

    Booleans map to ``1`` / ``0`` and NaN maps to ``0``.
    """

    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return 0
        return value
    if isinstance(value, str):
        parsed = parse_number(value)
        return 0 if parsed is None else parsed
    return 0


def format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < _PLAIN_INTEGER_LIMIT:
        return str(int(value))
    return repr(value)


def to_display_string(value: DataValue) -> str:
    """
    Render *value* the way it is shown to users and compared in filters.

    ``True`` -> ``"true"``, ``None`` -> ``"null"``, ``4.0`` -> ``"4"``.
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)
