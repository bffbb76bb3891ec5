"""
app/services/dashboard_service.py

Service layer for dataset profiling and dashboard rendering.

Workflow
--------
1. ``load_dataset``      decode the upload and parse it into records.
2. ``profile_dataset``   column descriptors, filter choices and the data
                         sample handed to the upstream analysis model.
3. ``render_dashboard``  apply filters, then compute every KPI and chart
                         of an externally supplied dashboard configuration.

The dashboard configuration itself is produced upstream; this service only
evaluates it against the data.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from aggregation.chart_data import AggregationRequest, process_chart_data
from aggregation.filters import active_filters, apply_filters, drill_down
from app.config import get_dashboard_settings
from app.domain.dashboard import Dataset, DatasetProfile, RenderedChart, RenderedDashboard, RenderedKPI
from app.schemas.dashboard import ChartConfig, DashboardConfig, KPIConfig
from ingestion.coercion import Record
from ingestion.csv_parser import count_data_lines, parse_csv
from ingestion.profiler import filter_options, filterable_columns, get_column_info
from kpi.calculator import KPISpec, calculate_kpi

logger = logging.getLogger(__name__)

EMPTY_DATASET_MESSAGE = "Parsed data is empty. Please check the file format."


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVDecodeError(ValueError):
    """
    Raised when an upload cannot be decoded as UTF-8 text.
    """


class EmptyDatasetError(ValueError):
    """
    Raised when parsing yields no records at all.
    """

    def __init__(self, message: str = EMPTY_DATASET_MESSAGE) -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class DashboardService:
    """
    Coordinates CSV parsing, profiling, filtering, and KPI/chart evaluation.
    """

    def __init__(
        self,
        *,
        sample_rows: int = 20,
        raw_point_limit: int = 500,
        max_chart_groups: int = 20,
        filter_max_unique: int = 30,
        currency_symbol: str = "$",
    ) -> None:
        self._sample_rows = max(1, sample_rows)
        self._raw_point_limit = max(1, raw_point_limit)
        self._max_chart_groups = max(1, max_chart_groups)
        self._filter_max_unique = filter_max_unique
        self._currency_symbol = currency_symbol

    def load_dataset(self, raw: bytes | str) -> Dataset:
        """
        Decode and parse one CSV upload.

        Raises:
            CSVDecodeError: If *raw* is not valid UTF-8.
            EmptyDatasetError: If no record survives parsing.
        """

        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                raise CSVDecodeError("CSV must be UTF-8 encoded.") from exc
        else:
            text = raw

        records = parse_csv(text)
        rows_dropped = count_data_lines(text) - len(records)

        if not records:
            logger.info("CSV upload produced no records (%d malformed lines dropped)", rows_dropped)
            raise EmptyDatasetError()

        logger.info("Parsed %d records (%d malformed lines dropped)", len(records), rows_dropped)
        return Dataset(records=records, rows_dropped=rows_dropped)

    def profile_dataset(self, dataset: Dataset) -> DatasetProfile:
        """
        Describe *dataset* for the upstream analysis model and the filter panel.
        """

        columns = get_column_info(dataset.records)
        options = {
            column.name: filter_options(dataset.records, column.name)
            for column in filterable_columns(columns, self._filter_max_unique)
        }
        logger.debug(
            "Profiled %d columns (%d filterable)",
            len(columns),
            len(options),
        )
        return DatasetProfile(
            rows_parsed=dataset.row_count,
            rows_dropped=dataset.rows_dropped,
            columns=columns,
            filter_options=options,
            sample=dataset.records[: self._sample_rows],
        )

    def render_dashboard(
        self,
        dataset: Dataset,
        config: DashboardConfig,
        filters: Mapping[str, str] | None = None,
        *,
        drill: tuple[str, str] | None = None,
    ) -> RenderedDashboard:
        """
        Evaluate every KPI and chart of *config* over the filtered records.

        *drill* is a clicked chart element as ``(column, value)``; it pins
        that column on top of *filters*.
        """

        requested: Mapping[str, str] = filters or {}
        if drill is not None:
            requested = drill_down(requested, *drill)
        selected = active_filters(requested)
        records = apply_filters(dataset.records, selected)
        logger.info(
            "Rendering dashboard %r over %d/%d records (%d filters)",
            config.title,
            len(records),
            dataset.row_count,
            len(selected),
        )

        return RenderedDashboard(
            title=config.title,
            domain=config.domain,
            summary=config.summary,
            kpis=[self._render_kpi(records, kpi) for kpi in config.kpis],
            charts=[self._render_chart(records, chart) for chart in config.charts],
            recommendations=list(config.recommendations),
            statistical_analysis=config.statistical_analysis,
            forecast_analysis=config.forecast_analysis,
            active_filters=selected,
            total_rows=dataset.row_count,
            filtered_rows=len(records),
        )

    def _render_kpi(self, records: list[Record], kpi: KPIConfig) -> RenderedKPI:
        spec = KPISpec(
            column=kpi.column,
            operation=kpi.operation,
            format=kpi.format,
            label=kpi.label,
        )
        return RenderedKPI(
            label=kpi.label,
            column=kpi.column,
            operation=kpi.operation,
            format=kpi.format,
            value=calculate_kpi(records, spec, currency_symbol=self._currency_symbol),
        )

    def _render_chart(self, records: list[Record], chart: ChartConfig) -> RenderedChart:
        request = AggregationRequest(
            group_by_key=chart.x_axis_key,
            value_key=chart.data_key,
            operation=chart.aggregation,
        )
        data = process_chart_data(
            records,
            request,
            raw_limit=self._raw_point_limit,
            max_groups=self._max_chart_groups,
        )
        return RenderedChart(config=chart.model_dump(), data=data)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    """
    Build and cache the dashboard service with env-driven settings.
    """
    settings = get_dashboard_settings()
    return DashboardService(
        sample_rows=settings.sample_rows,
        raw_point_limit=settings.raw_point_limit,
        max_chart_groups=settings.max_chart_groups,
        filter_max_unique=settings.filter_max_unique,
        currency_symbol=settings.currency_symbol,
    )
