"""
app/validators package marker.
"""

from app.validators.config_validator import (
    ConfigErrorDetail,
    DashboardConfigError,
    DashboardConfigValidator,
)

__all__ = [
    "ConfigErrorDetail",
    "DashboardConfigError",
    "DashboardConfigValidator",
]
