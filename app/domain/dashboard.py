"""
app/domain/dashboard.py

Domain models used by the dataset profiling and dashboard rendering flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ingestion.coercion import Record
from ingestion.profiler import ColumnDescriptor


@dataclass(frozen=True)
class Dataset:
    """
    Records parsed from one upload, plus the count of malformed lines that
    were dropped on the way.
    """

    records: list[Record]
    rows_dropped: int = 0

    @property
    def row_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class DatasetProfile:
    """
    Column metadata and a data sample describing one dataset.
    """

    rows_parsed: int
    rows_dropped: int
    columns: list[ColumnDescriptor]
    filter_options: dict[str, list[str]] = field(default_factory=dict)
    sample: list[Record] = field(default_factory=list)


@dataclass(frozen=True)
class RenderedKPI:
    label: str
    column: str
    operation: str
    format: str | None
    value: str


@dataclass(frozen=True)
class RenderedChart:
    config: dict[str, Any]
    data: list[dict[str, Any]]


@dataclass(frozen=True)
class RenderedDashboard:
    """
    Dashboard configuration combined with values computed from the data.
    """

    title: str
    domain: str
    summary: str
    kpis: list[RenderedKPI]
    charts: list[RenderedChart]
    recommendations: list[str]
    statistical_analysis: str
    forecast_analysis: str | None
    active_filters: dict[str, str]
    total_rows: int
    filtered_rows: int
