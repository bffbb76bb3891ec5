"""
aggregation/operations.py

Reducers shared by chart aggregation and KPI calculation.

Supported operations
--------------------
sum    arithmetic total
avg    arithmetic mean
max    largest value
min    smallest value
count  number of values
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final, Literal, Sequence

Operation = Literal["sum", "avg", "max", "min", "count"]

REDUCE_OPERATIONS: Final[frozenset[str]] = frozenset({"sum", "avg", "max", "min", "count"})
RAW_OPERATION: Final[str] = "raw"

# Enough digits to quantize any finite double without overflowing the context.
_DECIMAL_PRECISION: Final[int] = 400


class UnsupportedOperationError(ValueError):
    """
    Raised when an aggregation operation name is not recognised.
    """

    def __init__(self, operation: str) -> None:
        allowed = ", ".join(sorted(REDUCE_OPERATIONS))
        super().__init__(f"Unsupported operation '{operation}'. Allowed values: {allowed}.")
        self.operation = operation


def aggregate_values(values: Sequence[int | float], operation: str) -> int | float:
    """
    Reduce *values* with *operation*.

    ``values`` must be non-empty for ``avg``, ``max`` and ``min``; callers
    only ever reduce non-empty buckets.
    """

    if operation == "sum":
        return sum(values)
    if operation == "avg":
        return sum(values) / len(values)
    if operation == "max":
        return max(values)
    if operation == "min":
        return min(values)
    if operation == "count":
        return len(values)
    raise UnsupportedOperationError(operation)


def round_half_up(value: int | float, places: int) -> int | float:
    """
    Round the exact binary value of *value* to *places* decimals, ties away
    from zero. Integers and non-finite floats are returned unchanged.
    """

    if isinstance(value, int) or not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        quantized = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(quantized)
