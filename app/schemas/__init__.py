"""
app/schemas package marker.
"""

from app.schemas.dashboard import (
    ChartConfig,
    DashboardConfig,
    KPIConfig,
    RenderedChartResponse,
    RenderedDashboardResponse,
    RenderedKPIResponse,
)
from app.schemas.dataset import ColumnDescriptorResponse, DatasetProfileResponse, FilterOptionsResponse

__all__ = [
    "ChartConfig",
    "ColumnDescriptorResponse",
    "DashboardConfig",
    "DatasetProfileResponse",
    "FilterOptionsResponse",
    "KPIConfig",
    "RenderedChartResponse",
    "RenderedDashboardResponse",
    "RenderedKPIResponse",
]
