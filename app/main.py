from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from pydantic import BaseModel

from app.config import INT_SETTINGS, get_dashboard_settings, load_env_files

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


def _validate_env() -> None:
    """
    Validate dashboard environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator can
    fix all problems in one restart cycle.

    Rules:
    - Integer settings, when set, must parse as positive integers.
    - LOG_LEVEL, when set, must be a standard logging level name.
    """

    load_env_files()

    errors: list[str] = []

    for name in INT_SETTINGS:
        raw = os.getenv(name)
        if raw is None:
            continue
        try:
            value = int(raw.strip())
        except ValueError:
            errors.append(f"{name}='{raw}' is not an integer.")
            continue
        if value < 1:
            errors.append(f"{name}={value} must be a positive integer.")

    log_level = os.getenv("LOG_LEVEL")
    if log_level is not None and log_level.strip().upper() not in _LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL='{log_level.strip()}' is not valid. "
            f"Allowed values: {sorted(_LOG_LEVELS)}."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed; invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Dashboard Engine API",
        version="1.0.0",
    )

    from app.api.routers import dashboard_router, dataset_router

    application.include_router(dataset_router)
    application.include_router(dashboard_router)

    settings = get_dashboard_settings()
    logging.getLogger(__name__).info(
        "Dashboard engine configured (sample_rows=%d raw_point_limit=%d max_chart_groups=%d)",
        settings.sample_rows,
        settings.raw_point_limit,
        settings.max_chart_groups,
    )

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service=application.title,
            version=application.version,
        )

    return application


app = create_app()
