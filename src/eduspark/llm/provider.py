"""Abstract base class for generative backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class InlineMedia:
    """An image supplied inline as a base64 data URI."""

    media_type: str
    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """Everything a backend needs for one model call."""

    prompt: str
    model: str
    system: str | None = None
    media: InlineMedia | None = None
    schema_name: str = "output"
    output_schema: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    """Result of an image generation call."""

    data_uri: str
    text: str | None = None


class GenerativeBackend(ABC):
    """Abstract base class for generative backends.

    This interface allows pluggable model vendors (OpenAI-compatible, local LLaMA).
    Implementations translate vendor failures into
    :class:`eduspark.core.errors.BackendError` subclasses.
    """

    @abstractmethod
    def generate_structured(self, request: GenerationRequest) -> str:
        """Ask the model for a JSON document matching ``request.output_schema``.

        Args:
            request: Prompt, schema and model selection.

        Returns:
            The raw text returned by the model. Parsing and schema validation
            are the caller's responsibility.

        Raises:
            BackendUnavailable: The backend could not be reached or refused the call.
            BackendTimeout: The call did not finish within the configured timeout.
            EmptyResponse: The backend answered without any content.
        """
        pass

    @abstractmethod
    def generate_image(self, request: GenerationRequest) -> GeneratedImage:
        """Generate an image for ``request.prompt``.

        Args:
            request: Prompt and model selection.

        Returns:
            The generated image as a data URI plus optional accompanying text.

        Raises:
            BackendUnavailable: The backend could not produce images.
            BackendTimeout: The call did not finish within the configured timeout.
            EmptyResponse: No image was returned.
        """
        pass
