"""
app/validators/config_validator.py

Parsing and validation of externally supplied dashboard configuration.

The configuration normally arrives verbatim from the upstream analysis
model, so optional markdown code fences around the JSON are tolerated.
Referenced column names are deliberately not checked against the data:
missing columns degrade to default values during rendering.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Sequence

from pydantic import ValidationError

from app.schemas.dashboard import DashboardConfig
from ingestion.coercion import to_display_string

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


@dataclass(frozen=True)
class ConfigErrorDetail:
    """
    Structured configuration error detail.
    """

    code: str
    message: str
    location: str | None = None


class DashboardConfigError(ValueError):
    """
    Raised when a dashboard configuration or filter payload is unusable.
    """

    def __init__(self, *, message: str, errors: Sequence[ConfigErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "location": error.location,
                }
                for error in self.errors
            ],
        }


def strip_markdown_fences(text: str) -> str:
    """
    Remove an optional ```json ... ``` wrapper around *text*.
    """

    stripped = text.strip()
    match = _FENCE_PATTERN.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


class DashboardConfigValidator:
    """
    Validates raw JSON payloads into typed configuration.
    """

    def validate_config(self, raw: str) -> DashboardConfig:
        """
        Parse *raw* into a :class:`DashboardConfig`.

        Raises:
            DashboardConfigError: On JSON syntax errors, a non-object payload,
                or schema violations.
        """

        data = self._load_object(raw, what="Dashboard configuration")
        try:
            return DashboardConfig.model_validate(data)
        except ValidationError as exc:
            raise DashboardConfigError(
                message="Dashboard configuration does not match the expected schema.",
                errors=[
                    ConfigErrorDetail(
                        code="schema",
                        message=error["msg"],
                        location=".".join(str(part) for part in error["loc"]),
                    )
                    for error in exc.errors()
                ],
            ) from exc

    def validate_filters(self, raw: str | None) -> dict[str, str]:
        """
        Parse an optional JSON object mapping column names to filter values.

        Scalar values are compared by their string form; nested values are
        rejected.
        """

        if raw is None or not raw.strip():
            return {}

        data = self._load_object(raw, what="Filters")
        errors: list[ConfigErrorDetail] = []
        filters: dict[str, str] = {}
        for column, value in data.items():
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                errors.append(
                    ConfigErrorDetail(
                        code="filter_value",
                        message="Filter values must be scalars.",
                        location=column,
                    )
                )
                continue
            filters[column] = to_display_string(value)

        if errors:
            raise DashboardConfigError(message="Filters are invalid.", errors=errors)
        return filters

    def _load_object(self, raw: str, *, what: str) -> dict[str, Any]:
        try:
            data = json.loads(strip_markdown_fences(raw))
        except json.JSONDecodeError as exc:
            raise DashboardConfigError(
                message=f"{what} is not valid JSON.",
                errors=[ConfigErrorDetail(code="json_parse", message=str(exc))],
            ) from exc

        if not isinstance(data, dict):
            raise DashboardConfigError(
                message=f"{what} must be a JSON object.",
                errors=[ConfigErrorDetail(code="schema", message="top-level JSON must be an object")],
            )
        return data

