"""
app/domain package marker.
"""

from app.domain.dashboard import (
    Dataset,
    DatasetProfile,
    RenderedChart,
    RenderedDashboard,
    RenderedKPI,
)

__all__ = [
    "Dataset",
    "DatasetProfile",
    "RenderedChart",
    "RenderedDashboard",
    "RenderedKPI",
]
