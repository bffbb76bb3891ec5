"""
app/api/routers package marker.
"""

from app.api.routers.dashboard_router import router as dashboard_router
from app.api.routers.dataset_router import router as dataset_router

__all__ = [
    "dashboard_router",
    "dataset_router",
]
