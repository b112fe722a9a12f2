"""Task definitions and the registry that holds them."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from eduspark.core.errors import ConfigurationError, DuplicateTask, UnknownTask
from eduspark.flows.prompt import PromptTemplate, check_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MediaPolicy:
    """How an image task maps backend results, or their absence, onto its output.

    When the backend fails, the task still succeeds with ``placeholder_uri`` and
    ``placeholder_text``. Both arms are validated against the output model.
    """

    image_field: str
    text_field: str
    success_text: str
    placeholder_uri: str
    placeholder_text: str

    def output(self, data_uri: str, text: str | None = None) -> dict[str, Any]:
        return {self.image_field: data_uri, self.text_field: text or self.success_text}

    def fallback(self) -> dict[str, Any]:
        return {self.image_field: self.placeholder_uri, self.text_field: self.placeholder_text}


@dataclass(frozen=True, slots=True)
class TaskSpec:
    """One registered capability: schemas, prompt and presentation metadata."""

    name: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    template: PromptTemplate
    failure_message: str
    model: str | None = None
    achievement: str | None = None
    media: MediaPolicy | None = None

    @property
    def produces_media(self) -> bool:
        return self.media is not None

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def output_schema(self) -> dict[str, Any]:
        return self.output_model.model_json_schema(by_alias=True)


class TaskRegistry:
    """Name-keyed set of :class:`TaskSpec`.

    Built once at startup and frozen; concurrent reads need no locking after that.
    """

    def __init__(self, specs: list[TaskSpec] | None = None) -> None:
        self._specs: dict[str, TaskSpec] = {}
        self._frozen = False
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: TaskSpec) -> TaskSpec:
        """Add ``spec``.

        Re-registering the very same spec is a no-op; any other spec under an
        existing name raises :class:`DuplicateTask`.
        """
        if self._frozen:
            raise ConfigurationError(f"Registry is frozen; cannot register {spec.name!r}")

        existing = self._specs.get(spec.name)
        if existing is not None:
            if existing == spec:
                return existing
            raise DuplicateTask(spec.name)

        check_template(spec.template, spec.input_model)
        self._specs[spec.name] = spec
        logger.debug("Registered task", extra={"task": spec.name})
        return spec

    def lookup(self, name: str) -> TaskSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise UnknownTask(name) from None

    def freeze(self) -> TaskRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> list[str]:
        return sorted(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[TaskSpec]:
        return iter(self._specs[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._specs)
