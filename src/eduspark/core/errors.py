"""Error taxonomy for task execution.

Executors raise these; :class:`eduspark.flows.actions.ActionRunner` is the only
place that turns them into user-facing outcomes.
"""

from __future__ import annotations

from typing import Any


class EduSparkError(Exception):
    """Base class for every failure raised while running a task."""

    kind = "internal_error"


class ConfigurationError(EduSparkError):
    """A task definition or the registry is misconfigured."""

    kind = "configuration_error"


class DuplicateTask(ConfigurationError):
    kind = "duplicate_task"

    def __init__(self, name: str) -> None:
        super().__init__(f"Task already registered: {name!r}")
        self.name = name


class UnknownTask(ConfigurationError):
    kind = "unknown_task"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown task: {name!r}")
        self.name = name


class TemplateFieldMissing(ConfigurationError):
    """A prompt template references a field the input schema does not declare."""

    kind = "template_field_missing"

    def __init__(self, field: str, *, model: str | None = None) -> None:
        where = f" on {model}" if model else ""
        super().__init__(f"Template references undeclared field {field!r}{where}")
        self.field = field


class InputValidationError(EduSparkError):
    """Caller-supplied input does not satisfy the task's input schema."""

    kind = "input_validation_error"

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    @property
    def fields(self) -> list[str]:
        out: list[str] = []
        for err in self.errors:
            loc = ".".join(str(part) for part in err.get("loc", ()))
            if loc and loc not in out:
                out.append(loc)
        return out


class BackendError(EduSparkError):
    """The generative backend could not produce a usable response."""

    kind = "backend_error"


class BackendUnavailable(BackendError):
    kind = "backend_unavailable"


class BackendTimeout(BackendError):
    kind = "backend_timeout"


class EmptyResponse(BackendError):
    kind = "empty_response"


class SchemaViolation(EduSparkError):
    """The backend answered, but the payload does not fit the output schema."""

    kind = "schema_violation"

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
