"""
aggregation/chart_data.py

Turns records into plotting points for one chart.

Two paths exist:

raw
    The first ``raw_limit`` records, each reduced to the group key, the
    value key and a display name. Used for scatter-style charts where
    every record is a point.

grouped
    Records are bucketed by the display string of the group-by field
    (falsy values fall into ``"Unknown"``), the value field is coerced to
    a number (non-numeric -> 0), every bucket is reduced by the requested
    operation, and the buckets are sorted by aggregated value, highest
    first. Only the top ``max_groups`` buckets are returned, so callers
    must not assume every group is represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from aggregation.operations import (
    RAW_OPERATION,
    REDUCE_OPERATIONS,
    UnsupportedOperationError,
    aggregate_values,
    round_half_up,
)
from ingestion.coercion import DataValue, Record, is_falsy, to_display_string, to_number

ChartPoint = dict[str, DataValue]

DISPLAY_NAME_KEY: Final[str] = "name"
UNKNOWN_BUCKET: Final[str] = "Unknown"
DEFAULT_RAW_LIMIT: Final[int] = 500
DEFAULT_MAX_GROUPS: Final[int] = 20
VALUE_DECIMALS: Final[int] = 2


@dataclass(frozen=True)
class AggregationRequest:
    """
    Grouping and reduction instructions for one chart.

    The processor does not check that the keys exist; missing fields
    degrade to the ``"Unknown"`` bucket and a value of 0.
    """

    group_by_key: str
    value_key: str
    operation: str


def _raw_points(records: Sequence[Record], request: AggregationRequest, limit: int) -> list[ChartPoint]:
    points: list[ChartPoint] = []
    for record in records[:limit]:
        group_value = record.get(request.group_by_key)
        points.append(
            {
                request.group_by_key: group_value,
                request.value_key: record.get(request.value_key),
                DISPLAY_NAME_KEY: group_value,
            }
        )
    return points


def bucket_label(value: DataValue) -> str:
    return UNKNOWN_BUCKET if is_falsy(value) else to_display_string(value)


def group_values(records: Sequence[Record], request: AggregationRequest) -> dict[str, list[int | float]]:
    """
    Collect the numeric value of every record under its bucket label,
    keeping first-appearance order of the buckets.
    """

    grouped: dict[str, list[int | float]] = {}
    for record in records:
        label = bucket_label(record.get(request.group_by_key))
        grouped.setdefault(label, []).append(to_number(record.get(request.value_key)))
    return grouped


def process_chart_data(
    records: Sequence[Record],
    request: AggregationRequest,
    *,
    raw_limit: int = DEFAULT_RAW_LIMIT,
    max_groups: int = DEFAULT_MAX_GROUPS,
) -> list[ChartPoint]:
    """
    Build the ordered plotting points for *request*.
    """

    if request.operation == RAW_OPERATION:
        return _raw_points(records, request, raw_limit)
    if request.operation not in REDUCE_OPERATIONS:
        raise UnsupportedOperationError(request.operation)

    points: list[ChartPoint] = []
    for label, values in group_values(records, request).items():
        result = aggregate_values(values, request.operation)
        if request.operation != "count":
            result = round_half_up(result, VALUE_DECIMALS)
        points.append(
            {
                request.group_by_key: label,
                request.value_key: result,
                DISPLAY_NAME_KEY: label,
            }
        )

    points.sort(key=lambda point: point[request.value_key], reverse=True)
    return points[:max_groups]
