"""
app/schemas/base.py

Shared pydantic base for models exchanged with the dashboard front end and
the upstream analysis model, both of which speak camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Accepts camelCase aliases or snake_case names; serializes with aliases.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
