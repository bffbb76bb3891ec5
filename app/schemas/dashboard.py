"""
app/schemas/dashboard.py

Request and response schemas for dashboard rendering.

The dashboard configuration is produced upstream by the analysis model in
camelCase (``xAxisKey``, ``statisticalAnalysis``...). Models accept both
the camelCase aliases and the snake_case field names, and serialize with
the aliases.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from app.schemas.base import CamelModel

KPIOperation = Literal["sum", "avg", "count", "max", "min"]
KPIFormat = Literal["currency", "number", "percentage"]
ChartType = Literal["bar", "pie", "line", "area", "scatter"]
ChartAggregation = Literal["sum", "avg", "count", "raw", "max", "min"]


class KPIConfig(CamelModel):
    """
    One KPI card as configured upstream.
    """

    label: str
    column: str = Field(min_length=1)
    operation: KPIOperation
    format: KPIFormat | None = None


class ChartConfig(CamelModel):
    """
    One chart as configured upstream.
    """

    id: str
    type: ChartType
    title: str
    description: str = ""
    x_axis_key: str = Field(min_length=1)
    data_key: str = Field(min_length=1)
    aggregation: ChartAggregation
    color: str | None = None


class DashboardConfig(CamelModel):
    """
    Full dashboard configuration handed to the renderer.
    """

    title: str
    domain: str = ""
    summary: str
    kpis: list[KPIConfig] = Field(default_factory=list)
    charts: list[ChartConfig] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    statistical_analysis: str = ""
    forecast_analysis: str | None = None


class RenderedKPIResponse(KPIConfig):
    """
    A KPI card with its computed, formatted value.
    """

    value: str


class RenderedChartResponse(ChartConfig):
    """
    A chart with its plotting points.
    """

    data: list[dict[str, Any]] = Field(default_factory=list)


class RenderedDashboardResponse(CamelModel):
    """
    API response model for a rendered dashboard.
    """

    title: str
    domain: str
    summary: str
    kpis: list[RenderedKPIResponse]
    charts: list[RenderedChartResponse]
    recommendations: list[str]
    statistical_analysis: str
    forecast_analysis: str | None = None
    active_filters: dict[str, str] = Field(default_factory=dict)
    total_rows: int = Field(..., ge=0)
    filtered_rows: int = Field(..., ge=0)
