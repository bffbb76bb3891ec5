"""
kpi/calculator.py

Reduces records to one formatted KPI string.

Every record's KPI column is coerced to a number (non-numeric -> 0) and
the full, unsorted value list is reduced with the KPI's operation. An
empty record set always yields ``"0"`` regardless of operation or format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from aggregation.operations import aggregate_values
from ingestion.coercion import Record, to_number
from kpi.formatting import DEFAULT_CURRENCY_SYMBOL, format_kpi_value

EMPTY_KPI_VALUE: Final[str] = "0"


@dataclass(frozen=True)
class KPISpec:
    """
    One KPI card definition.
    """

    column: str
    operation: str
    format: str | None = None
    label: str = ""


def kpi_values(records: Sequence[Record], column: str) -> list[int | float]:
    return [to_number(record.get(column)) for record in records]


def calculate_kpi(
    records: Sequence[Record],
    spec: KPISpec,
    *,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """
    Compute and format the KPI described by *spec* over *records*.
    """

    values = kpi_values(records, spec.column)
    if not values:
        return EMPTY_KPI_VALUE

    result = aggregate_values(values, spec.operation)
    return format_kpi_value(result, spec.format, currency_symbol=currency_symbol)
