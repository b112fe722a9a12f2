"""Local LLaMA generative backend."""

import json
import logging
from typing import Any

from eduspark.core.config import LLMConfig
from eduspark.core.errors import BackendUnavailable, EmptyResponse
from eduspark.llm.provider import GeneratedImage, GenerationRequest, GenerativeBackend

logger = logging.getLogger(__name__)


class LLaMABackend(GenerativeBackend):
    """Local LLaMA model backend.

    Requires llama-cpp-python to be installed:
        pip install "eduspark[llama]"

    Structured output is constrained with llama.cpp's JSON-schema grammar.
    Image generation is not supported.
    """

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the LLaMA backend.

        Args:
            config: LLM configuration.

        Raises:
            ValueError: If model path is not provided.
            ImportError: If llama-cpp-python is not installed.
        """
        if not config.llama_model_path:
            raise ValueError("LLaMA model path is required")

        try:
            from llama_cpp import Llama
        except ImportError as e:
            raise ImportError(
                "llama-cpp-python is required for the LLaMA backend. "
                'Install it with: pip install "eduspark[llama]"'
            ) from e

        self.config = config

        logger.info(f"Loading LLaMA model from: {config.llama_model_path}")

        self.llm = Llama(
            model_path=str(config.llama_model_path),
            n_ctx=config.llama_n_ctx,
            n_threads=config.llama_n_threads,
            verbose=False,
        )

        logger.info("LLaMA model loaded successfully")

    def generate_structured(self, request: GenerationRequest) -> str:
        if request.media is not None:
            logger.warning("LLaMA backend ignores inline images")

        messages: list[dict[str, Any]] = []
        if request.system:
            messages.append({"role": "system", "content": request.system})
        messages.append({"role": "user", "content": request.prompt})

        logger.debug(f"Generating structured output with {len(messages)} messages")

        try:
            result = self.llm.create_chat_completion(
                messages=messages,
                temperature=self.config.openai_temperature,
                response_format={"type": "json_object", "schema": request.output_schema},
            )
        except (RuntimeError, ValueError) as e:
            raise BackendUnavailable(f"Local model failed: {e}") from e

        choices = result.get("choices") or []
        content = choices[0]["message"].get("content") if choices else None
        if not content:
            raise EmptyResponse("Local model returned empty content")

        logger.debug(f"Generated {len(content)} characters")
        return content if isinstance(content, str) else json.dumps(content)

    def generate_image(self, request: GenerationRequest) -> GeneratedImage:
        raise BackendUnavailable("Image generation is not supported by the LLaMA backend")
