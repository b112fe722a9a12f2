"""Shared building blocks for task schemas."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
DataUri = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, pattern=r"^data:[\w.+-]+/[\w.+-]+;base64,[A-Za-z0-9+/=\s]+$"
    ),
]
Length = Literal["short", "medium", "long"]


class WireModel(BaseModel):
    """Base for task records: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
