"""Pydantic models for the REST server."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from eduspark.tasks.assessment import GenerateQuizOutput
from eduspark.tasks.base import NonEmptyStr, WireModel


class ApiHealth(BaseModel):
    status: str
    version: str
    tasks: int


class ApiTask(BaseModel):
    name: str
    achievement: str | None = None
    produces_media: bool = False
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]


class ApiError(BaseModel):
    task: str
    kind: str
    message: str


class ApiOutcome(BaseModel):
    ok: bool
    data: Any = None
    error: ApiError | None = None


class GradeQuizRequest(WireModel):
    quiz: GenerateQuizOutput
    answers: list[int | None] = Field(default_factory=list)


class ActivityRequest(WireModel):
    title: NonEmptyStr
    subject: NonEmptyStr
