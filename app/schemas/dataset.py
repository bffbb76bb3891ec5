"""
app/schemas/dataset.py

Response schemas for dataset profiling endpoints.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from app.schemas.base import CamelModel


class ColumnDescriptorResponse(CamelModel):
    """
    API response model for one profiled column.
    """

    name: str
    type: Literal["string", "number", "date", "boolean"]
    unique_values: int = Field(..., ge=0)


class FilterOptionsResponse(CamelModel):
    """
    Choices offered for one filterable column.
    """

    column: str
    options: list[str] = Field(default_factory=list)


class DatasetProfileResponse(CamelModel):
    """
    API response model for a profiled CSV upload.

    ``columns`` and ``sample`` together form the summary sent to the
    upstream analysis model.
    """

    rows_parsed: int = Field(..., ge=0)
    rows_dropped: int = Field(..., ge=0)
    columns: list[ColumnDescriptorResponse]
    filters: list[FilterOptionsResponse] = Field(default_factory=list)
    sample: list[dict[str, Any]] = Field(default_factory=list)
