"""
app/api/routers/dataset_router.py

Dataset profiling endpoint.

Parses an uploaded CSV and returns the column descriptors, filter choices
and data sample that the upstream analysis model consumes.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import read_csv_upload
from app.schemas.dataset import ColumnDescriptorResponse, DatasetProfileResponse, FilterOptionsResponse
from app.services.dashboard_service import (
    CSVDecodeError,
    DashboardService,
    EmptyDatasetError,
    get_dashboard_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/datasets", tags=["datasets"])


@router.post("/profile", response_model=DatasetProfileResponse)
def profile_dataset(
    payload: bytes = Depends(read_csv_upload),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DatasetProfileResponse:
    """
    Profile one CSV file.
    """

    try:
        dataset = dashboard_service.load_dataset(payload)
    except (CSVDecodeError, EmptyDatasetError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    profile = dashboard_service.profile_dataset(dataset)

    return DatasetProfileResponse(
        rows_parsed=profile.rows_parsed,
        rows_dropped=profile.rows_dropped,
        columns=[
            ColumnDescriptorResponse(
                name=column.name,
                type=column.type,
                unique_values=column.unique_values,
            )
            for column in profile.columns
        ],
        filters=[
            FilterOptionsResponse(column=column, options=options)
            for column, options in profile.filter_options.items()
        ],
        sample=profile.sample,
    )
