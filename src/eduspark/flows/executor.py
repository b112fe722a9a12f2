"""The single point where tasks meet the generative backend.

``FlowExecutor.execute`` owns the output contract: whatever it returns has
passed the task's output schema. Anything else is raised as a typed
:class:`eduspark.core.errors.EduSparkError`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from eduspark.core.errors import (
    BackendError,
    ConfigurationError,
    EduSparkError,
    EmptyResponse,
    InputValidationError,
    SchemaViolation,
)
from eduspark.flows.prompt import RenderedPrompt, render_prompt
from eduspark.flows.registry import TaskRegistry, TaskSpec
from eduspark.llm.parsing import parse_json_payload
from eduspark.llm.provider import GenerationRequest, GenerativeBackend

logger = logging.getLogger(__name__)


def validate_input(spec: TaskSpec, payload: Mapping[str, Any] | BaseModel) -> BaseModel:
    """Coerce ``payload`` into the task's input model."""
    if isinstance(payload, spec.input_model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    try:
        return spec.input_model.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise InputValidationError(
            f"Invalid input for {spec.name}: {e.error_count()} error(s)", errors=errors
        ) from e


def validate_output(spec: TaskSpec, data: Any) -> BaseModel:
    """Validate a parsed backend payload against the task's output model."""
    try:
        return spec.output_model.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise SchemaViolation(
            f"Output of {spec.name} violates its schema: {e.error_count()} error(s)",
            errors=errors,
        ) from e


class FlowExecutor:
    """Runs registered tasks against one shared backend."""

    def __init__(
        self,
        registry: TaskRegistry,
        backend: GenerativeBackend,
        *,
        default_model: str,
        image_model: str | None = None,
    ) -> None:
        self.registry = registry
        self.backend = backend
        self.default_model = default_model
        self.image_model = image_model or default_model

    def _request(self, spec: TaskSpec, prompt: RenderedPrompt) -> GenerationRequest:
        if spec.produces_media:
            model = spec.model or self.image_model
        else:
            model = spec.model or self.default_model
        return GenerationRequest(
            prompt=prompt.text,
            system=prompt.system,
            media=prompt.media,
            model=model,
            schema_name=spec.output_model.__name__,
            output_schema=spec.output_schema(),
        )

    def execute(self, task_name: str, payload: Mapping[str, Any] | BaseModel) -> BaseModel:
        """Run ``task_name`` once.

        Raises:
            UnknownTask: No task is registered under ``task_name``.
            InputValidationError: ``payload`` does not satisfy the input schema.
                The backend is not called.
            BackendUnavailable, BackendTimeout, EmptyResponse: The backend
                failed. Structured tasks only; image tasks fall back to the
                placeholder on any error.
            SchemaViolation: The backend output does not satisfy the output schema.
        """
        spec = self.registry.lookup(task_name)
        record = validate_input(spec, payload)
        prompt = render_prompt(spec.template, record)
        request = self._request(spec, prompt)

        logger.info("Executing task", extra={"task": spec.name, "model": request.model})
        started = time.monotonic()

        if spec.produces_media:
            result = self._execute_media(spec, request)
        else:
            result = self._execute_structured(spec, request)

        logger.info(
            "Task completed",
            extra={"task": spec.name, "elapsed_ms": int((time.monotonic() - started) * 1000)},
        )
        return result

    def _execute_structured(self, spec: TaskSpec, request: GenerationRequest) -> BaseModel:
        try:
            raw = self.backend.generate_structured(request)
        except BackendError as e:
            logger.warning(
                "Backend call failed", extra={"task": spec.name, "kind": e.kind, "error": str(e)}
            )
            raise

        if not raw or not raw.strip():
            raise EmptyResponse(f"Backend returned no content for {spec.name}")

        try:
            data = parse_json_payload(raw)
        except ValueError as e:
            raise SchemaViolation(f"Output of {spec.name} is not JSON: {e}") from e

        return validate_output(spec, data)

    def _execute_media(self, spec: TaskSpec, request: GenerationRequest) -> BaseModel:
        policy = spec.media
        if policy is None:
            raise ConfigurationError(f"Task {spec.name!r} has no media policy")

        # Any backend failure degrades to the placeholder; the task still succeeds.
        try:
            image = self.backend.generate_image(request)
            if not image.data_uri:
                raise EmptyResponse(f"Backend returned no image for {spec.name}")
        except Exception as e:
            logger.warning(
                "Image generation failed; using placeholder",
                extra={
                    "task": spec.name,
                    "kind": e.kind if isinstance(e, EduSparkError) else "internal_error",
                    "error": str(e),
                },
                exc_info=True,
            )
            return validate_output(spec, policy.fallback())

        return validate_output(spec, policy.output(image.data_uri, image.text))
