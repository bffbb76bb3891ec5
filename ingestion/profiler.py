"""
ingestion/profiler.py

Column profiling for parsed records.

Type inference is a single-sample heuristic: the first record holding a
non-blank value for a column decides the column's type. A column that is
mostly numeric but starts with text is therefore reported as ``string``.
Cardinality, on the other hand, is counted over every record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Sequence

from dateutil import parser as date_parser

from ingestion.coercion import DataValue, Record, is_blank, is_falsy, is_number, to_display_string

ColumnType = Literal["string", "number", "date", "boolean"]

DEFAULT_FILTER_MAX_UNIQUE = 30

# dateutil fills every missing field from today, so a bare "May" or
# "Monday" would parse. A calendar date needs at least one digit.
_HAS_DIGIT = re.compile(r"[0-9]")


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Inferred metadata for one column.
    """

    name: str
    type: ColumnType
    unique_values: int


def looks_like_date(text: str) -> bool:
    """
    Return True when *text* parses as a calendar date or timestamp.
    """

    if not _HAS_DIGIT.search(text):
        return False
    try:
        date_parser.parse(text)
    except (ValueError, OverflowError):
        return False
    return True


def infer_type(sample: DataValue) -> ColumnType:
    if isinstance(sample, bool):
        return "boolean"
    if is_number(sample):
        return "number"
    if looks_like_date(to_display_string(sample)):
        return "date"
    return "string"


def _first_sample(records: Sequence[Record], name: str) -> DataValue:
    for record in records:
        value = record.get(name)
        if not is_blank(value):
            return value
    return ""


def get_column_info(records: Sequence[Record]) -> list[ColumnDescriptor]:
    """
    Describe every column of the first record.

    Returns an empty list for an empty record sequence.
    """

    if not records:
        return []

    descriptors: list[ColumnDescriptor] = []
    for name in records[0]:
        sample = _first_sample(records, name)
        unique_values = len({to_display_string(record.get(name)) for record in records})
        descriptors.append(
            ColumnDescriptor(
                name=name,
                type=infer_type(sample),
                unique_values=unique_values,
            )
        )
    return descriptors


def filterable_columns(
    columns: Sequence[ColumnDescriptor],
    max_unique: int = DEFAULT_FILTER_MAX_UNIQUE,
) -> list[ColumnDescriptor]:
    """
    Select low-cardinality string columns suitable for dropdown filters.
    """

    return [
        column
        for column in columns
        if column.type == "string" and 1 < column.unique_values < max_unique
    ]


def filter_options(records: Sequence[Record], column: str) -> list[str]:
    """
    Return the sorted distinct choices offered for *column*.

    Missing and falsy values are offered as the empty string.
    """

    options = {
        "" if is_falsy(record.get(column)) else to_display_string(record.get(column))
        for record in records
    }
    return sorted(options)
