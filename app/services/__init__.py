"""
app/services package marker.
"""

from app.services.dashboard_service import (
    CSVDecodeError,
    DashboardService,
    EmptyDatasetError,
    get_dashboard_service,
)

__all__ = [
    "CSVDecodeError",
    "DashboardService",
    "EmptyDatasetError",
    "get_dashboard_service",
]
