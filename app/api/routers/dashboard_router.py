"""
app/api/routers/dashboard_router.py

Dashboard rendering endpoint.

Accepts the CSV upload together with the dashboard configuration produced
upstream and returns every KPI and chart evaluated against the data,
optionally narrowed by equality filters and a clicked chart element.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, status

from app.api.dependencies import read_csv_upload
from app.schemas.dashboard import (
    RenderedChartResponse,
    RenderedDashboardResponse,
    RenderedKPIResponse,
)
from app.services.dashboard_service import (
    CSVDecodeError,
    DashboardService,
    EmptyDatasetError,
    get_dashboard_service,
)
from app.validators.config_validator import DashboardConfigError, DashboardConfigValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboards", tags=["dashboards"])


def get_config_validator() -> DashboardConfigValidator:
    return DashboardConfigValidator()


@router.post("/render", response_model=RenderedDashboardResponse)
def render_dashboard(
    payload: bytes = Depends(read_csv_upload),
    config: str = Form(..., description="Dashboard configuration JSON"),
    filters: str | None = Form(default=None, description="Optional JSON object of column -> value filters"),
    drill_column: str | None = Form(default=None, alias="drillColumn", description="Column of a clicked chart element"),
    drill_value: str = Form(default="", alias="drillValue", description="Value of a clicked chart element"),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
    validator: DashboardConfigValidator = Depends(get_config_validator),
) -> RenderedDashboardResponse:
    """
    Render one dashboard configuration against one CSV file.
    """

    try:
        dashboard_config = validator.validate_config(config)
        selected_filters = validator.validate_filters(filters)
    except DashboardConfigError as exc:
        logger.warning("Rejected dashboard configuration: %s", exc.message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_dict(),
        ) from exc

    try:
        dataset = dashboard_service.load_dataset(payload)
    except (CSVDecodeError, EmptyDatasetError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    drill = (drill_column.strip(), drill_value.strip()) if drill_column and drill_column.strip() else None
    rendered = dashboard_service.render_dashboard(dataset, dashboard_config, selected_filters, drill=drill)

    return RenderedDashboardResponse(
        title=rendered.title,
        domain=rendered.domain,
        summary=rendered.summary,
        kpis=[
            RenderedKPIResponse(
                label=kpi.label,
                column=kpi.column,
                operation=kpi.operation,
                format=kpi.format,
                value=kpi.value,
            )
            for kpi in rendered.kpis
        ],
        charts=[RenderedChartResponse(**chart.config, data=chart.data) for chart in rendered.charts],
        recommendations=rendered.recommendations,
        statistical_analysis=rendered.statistical_analysis,
        forecast_analysis=rendered.forecast_analysis,
        active_filters=rendered.active_filters,
        total_rows=rendered.total_rows,
        filtered_rows=rendered.filtered_rows,
    )
