"""
aggregation/filters.py

Equality filters applied to records before charts and KPIs are computed.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from ingestion.coercion import Record, to_display_string


def active_filters(filters: Mapping[str, str]) -> dict[str, str]:
    """Drop filters whose value is empty (the "All" choice)."""

    return {column: value for column, value in filters.items() if value}


def apply_filters(records: Sequence[Record], filters: Mapping[str, str]) -> list[Record]:
    """
    Keep records whose display value equals the filter value for every
    active filter.
    """

    selected = active_filters(filters)
    if not selected:
        return list(records)

    return [
        record
        for record in records
        if all(to_display_string(record.get(column)) == value for column, value in selected.items())
    ]


def drill_down(filters: Mapping[str, str], column: str, value: str) -> dict[str, str]:
    """
    Return a new filter mapping with *column* pinned to *value*, as when a
    chart element is clicked.
    """

    updated = dict(filters)
    updated[column] = value
    return updated
