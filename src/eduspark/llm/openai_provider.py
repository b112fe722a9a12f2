"""OpenAI-compatible generative backend."""

import json
import logging
from typing import Any

import openai
from openai import OpenAI

from eduspark.core.config import LLMConfig
from eduspark.core.errors import BackendTimeout, BackendUnavailable, EmptyResponse
from eduspark.llm.provider import GeneratedImage, GenerationRequest, GenerativeBackend

logger = logging.getLogger(__name__)

JSON_INSTRUCTIONS = (
    "Respond with ONLY a single JSON object matching the following JSON Schema. "
    "Do not wrap it in markdown code fences and do not add any other text.\n\n"
    "EXPECTED SCHEMA:\n{schema}"
)


class OpenAIBackend(GenerativeBackend):
    """Backend for the OpenAI API and OpenAI-compatible endpoints."""

    def __init__(self, config: LLMConfig) -> None:
        """Initialize the OpenAI backend.

        Args:
            config: LLM configuration.

        Raises:
            ValueError: If API key is not provided.
        """
        if not config.openai_api_key:
            raise ValueError("OpenAI API key is required")

        self.config = config
        self.client = OpenAI(
            api_key=config.openai_api_key,
            base_url=config.openai_base_url,
            timeout=config.timeout_seconds,
            # Each task invocation is at-most-once.
            max_retries=0,
        )
        self.temperature = config.openai_temperature

        logger.info(f"OpenAI backend initialized with model: {config.openai_model}")

    def _messages(self, request: GenerationRequest) -> list[dict[str, Any]]:
        schema = json.dumps(request.output_schema, ensure_ascii=False)
        system = JSON_INSTRUCTIONS.format(schema=schema)
        if request.system:
            system = f"{request.system}\n\n{system}"

        user: str | list[dict[str, Any]] = request.prompt
        if request.media is not None:
            user = [
                {"type": "text", "text": request.prompt},
                {"type": "image_url", "image_url": {"url": request.media.data_uri}},
            ]
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]

    def generate_structured(self, request: GenerationRequest) -> str:
        """Generate a JSON document using chat completions with a JSON-schema response format."""
        logger.debug(f"Generating structured output for prompt: {request.prompt[:100]}...")

        try:
            response = self.client.chat.completions.create(
                model=request.model,
                messages=self._messages(request),  # type: ignore[arg-type]
                temperature=self.temperature,
                response_format={  # type: ignore[arg-type]
                    "type": "json_schema",
                    "json_schema": {
                        "name": request.schema_name,
                        "schema": request.output_schema,
                        "strict": False,
                    },
                },
            )
        except openai.APITimeoutError as e:
            raise BackendTimeout(f"Model {request.model} timed out") from e
        except openai.OpenAIError as e:
            raise BackendUnavailable(f"Model {request.model} call failed: {e}") from e

        if not getattr(response, "choices", None):
            raise EmptyResponse(f"Model {request.model} returned no choices")

        content = response.choices[0].message.content or ""
        if not content.strip():
            raise EmptyResponse(f"Model {request.model} returned empty content")

        logger.debug(f"Generated {len(content)} characters")
        return content

    def generate_image(self, request: GenerationRequest) -> GeneratedImage:
        """Generate an image and return it as a base64 data URI."""
        model = request.model
        kwargs: dict[str, Any] = {"size": self.config.openai_image_size, "n": 1}
        if model.startswith("dall-e"):
            kwargs["response_format"] = "b64_json"

        logger.debug(f"Generating image for prompt: {request.prompt[:100]}...")

        try:
            response = self.client.images.generate(model=model, prompt=request.prompt, **kwargs)
        except openai.APITimeoutError as e:
            raise BackendTimeout(f"Image model {model} timed out") from e
        except openai.OpenAIError as e:
            raise BackendUnavailable(f"Image model {model} call failed: {e}") from e

        data = getattr(response, "data", None) or []
        if not data:
            raise EmptyResponse(f"Image model {model} returned no images")

        image = data[0]
        if image.b64_json:
            return GeneratedImage(data_uri=f"data:image/png;base64,{image.b64_json}")
        if image.url:
            return GeneratedImage(data_uri=image.url)
        raise EmptyResponse(f"Image model {model} returned an image without content")
