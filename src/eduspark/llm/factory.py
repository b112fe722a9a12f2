"""Factory for creating generative backends."""

import logging

from eduspark.core.config import LLMConfig
from eduspark.core.errors import BackendUnavailable
from eduspark.llm.llama_provider import LLaMABackend
from eduspark.llm.openai_provider import OpenAIBackend
from eduspark.llm.provider import GeneratedImage, GenerationRequest, GenerativeBackend

logger = logging.getLogger(__name__)


class UnconfiguredBackend(GenerativeBackend):
    """Stand-in used when no backend could be built; every call is unavailable."""

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def generate_structured(self, request: GenerationRequest) -> str:
        raise BackendUnavailable(self.reason)

    def generate_image(self, request: GenerationRequest) -> GeneratedImage:
        raise BackendUnavailable(self.reason)


class BackendFactory:
    """Factory for creating generative backend instances."""

    @staticmethod
    def create(config: LLMConfig) -> GenerativeBackend:
        """Create a backend based on configuration.

        Args:
            config: LLM configuration specifying the provider.

        Returns:
            Configured backend instance.

        Raises:
            ValueError: If provider type is not supported or credentials are missing.
        """
        logger.info(f"Creating generative backend: {config.provider}")

        if config.provider == "openai":
            return OpenAIBackend(config)
        elif config.provider == "llama":
            return LLaMABackend(config)
        else:
            raise ValueError(f"Unsupported LLM provider: {config.provider}")

    @staticmethod
    def create_or_unconfigured(config: LLMConfig) -> GenerativeBackend:
        """Like :meth:`create`, but degrade to :class:`UnconfiguredBackend` on setup errors.

        Lets the server start without credentials; task calls then fail with
        ``backend_unavailable`` instead of the process refusing to boot.
        """
        try:
            return BackendFactory.create(config)
        except (ValueError, ImportError) as e:
            logger.warning("Generative backend not configured", extra={"reason": str(e)})
            return UnconfiguredBackend(str(e))
