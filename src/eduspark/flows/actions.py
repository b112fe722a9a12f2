"""Uniform success/failure boundary between task execution and its callers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from eduspark.core.errors import EduSparkError, InputValidationError, UnknownTask
from eduspark.flows.executor import FlowExecutor

if TYPE_CHECKING:
    from eduspark.store.achievements import AchievementTracker

logger = logging.getLogger(__name__)

T = TypeVar("T")

_REASONS: dict[str, str] = {
    "unknown_task": "this tool is not available",
    "duplicate_task": "this tool is misconfigured",
    "template_field_missing": "this tool is misconfigured",
    "configuration_error": "this tool is misconfigured",
    "backend_unavailable": "the AI service is currently unavailable, please try again later",
    "backend_timeout": "the AI service took too long to respond, please try again",
    "backend_error": "the AI service could not complete the request",
    "empty_response": "the AI service returned an empty response",
    "schema_violation": "the AI service returned an incomplete or malformed result",
    "internal_error": "an unexpected error occurred",
}


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    task: str
    kind: str
    message: str

    def to_json(self) -> dict[str, str]:
        return {"task": self.task, "kind": self.kind, "message": self.message}


@dataclass(frozen=True, slots=True)
class ActionOutcome(Generic[T]):
    """Exactly one of ``data`` (when ``ok``) or ``error`` is set."""

    ok: bool
    data: T | None = None
    error: ErrorDetail | None = None

    @classmethod
    def success(cls, data: T) -> ActionOutcome[T]:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: ErrorDetail) -> ActionOutcome[T]:
        return cls(ok=False, error=error)

    def to_json(self) -> dict[str, Any]:
        data: Any = self.data
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True)
        return {
            "ok": self.ok,
            "data": data,
            "error": self.error.to_json() if self.error else None,
        }


def describe_failure(task: str, label: str, error: BaseException) -> ErrorDetail:
    """Build the user-facing detail for ``error``; never includes backend internals."""
    kind = error.kind if isinstance(error, EduSparkError) else "internal_error"
    if isinstance(error, InputValidationError):
        fields = ", ".join(error.fields)
        reason = f"invalid input ({fields})" if fields else f"invalid input ({error})"
    else:
        reason = _REASONS.get(kind, _REASONS["internal_error"])
    return ErrorDetail(task=task, kind=kind, message=f"{task}: {label}: {reason}")


class ActionRunner:
    """Error boundary around :class:`FlowExecutor` used by the HTTP API and CLI.

    ``invoke`` never raises and calls the executor exactly once.
    """

    def __init__(
        self,
        executor: FlowExecutor,
        *,
        achievements: AchievementTracker | None = None,
    ) -> None:
        self.executor = executor
        self.achievements = achievements

    def invoke(
        self,
        task_name: str,
        payload: Mapping[str, Any] | BaseModel,
        *,
        user_id: str | None = None,
    ) -> ActionOutcome[BaseModel]:
        try:
            spec = self.executor.registry.lookup(task_name)
        except UnknownTask as e:
            logger.warning("Unknown task requested", extra={"task": task_name})
            return ActionOutcome.failure(describe_failure(task_name, "Task failed", e))

        try:
            result = self.executor.execute(task_name, payload)
        except EduSparkError as e:
            logger.warning(
                "Task failed", extra={"task": task_name, "kind": e.kind, "error": str(e)}
            )
            return ActionOutcome.failure(describe_failure(task_name, spec.failure_message, e))
        except Exception as e:
            logger.exception("Task raised an unexpected error", extra={"task": task_name})
            return ActionOutcome.failure(describe_failure(task_name, spec.failure_message, e))

        if user_id and spec.achievement:
            self.award(user_id, spec.achievement)
        return ActionOutcome.success(result)

    def award(self, user_id: str, achievement_id: str) -> bool:
        """Unlock an achievement; store failures are logged, not propagated."""
        if self.achievements is None:
            return False
        try:
            return self.achievements.award(user_id, achievement_id)
        except (OSError, KeyError, ValueError) as e:
            logger.warning(
                "Could not record achievement",
                extra={"user_id": user_id, "achievement": achievement_id, "error": str(e)},
            )
            return False
