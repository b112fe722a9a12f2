"""Generative backend package initialization."""

from eduspark.llm.factory import BackendFactory
from eduspark.llm.provider import (
    GeneratedImage,
    GenerationRequest,
    GenerativeBackend,
    InlineMedia,
)

__all__ = [
    "BackendFactory",
    "GeneratedImage",
    "GenerationRequest",
    "GenerativeBackend",
    "InlineMedia",
]
