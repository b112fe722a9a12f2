"""Core configuration for EduSpark."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from eduspark.core.logging import configure_logging


class LLMConfig(BaseSettings):
    """Configuration for the generative backend."""

    provider: Literal["openai", "llama"] = Field(
        default="openai",
        description="Generative backend to use",
    )

    # OpenAI-compatible settings
    openai_api_key: str | None = Field(
        default=None,
        description="API key for the OpenAI-compatible endpoint",
    )
    openai_base_url: str | None = Field(
        default=None,
        description="Override base URL (e.g. an OpenAI-compatible Gemini endpoint)",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for structured text tasks",
    )
    openai_image_model: str = Field(
        default="gpt-image-1",
        description="Model used for image tasks",
    )
    openai_image_size: str = Field(
        default="1536x1024",
        description="Size requested for generated images",
    )
    openai_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for text tasks",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Per-request timeout for backend calls",
    )

    # LLaMA settings
    llama_model_path: Path | None = Field(
        default=None,
        description="Path to a local GGUF model file",
    )
    llama_n_ctx: int = Field(
        default=4096,
        gt=0,
        description="Context window size for LLaMA",
    )
    llama_n_threads: int | None = Field(
        default=None,
        description="Number of threads for LLaMA (None = auto)",
    )

    model_config = SettingsConfigDict(
        env_prefix="EDUSPARK_LLM_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def default_model(self) -> str:
        if self.provider == "llama" and self.llama_model_path is not None:
            return self.llama_model_path.stem
        return self.openai_model


class StoreConfig(BaseSettings):
    """Configuration for local persistence (achievements, activity log)."""

    data_path: Path = Field(
        default=Path(".eduspark"),
        description="Directory where local user data is persisted",
    )

    model_config = SettingsConfigDict(
        env_prefix="EDUSPARK_STORE_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def achievements_file(self) -> Path:
        """Key/value file holding unlocked achievement flags."""

        return self.data_path / "achievements.json"

    @property
    def activity_root(self) -> Path:
        """Root directory of the per-user activity documents."""

        return self.data_path / "activity"


class EduSparkConfig(BaseSettings):
    """Main configuration for EduSpark."""

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="Generative backend configuration",
    )
    store: StoreConfig = Field(
        default_factory=StoreConfig,
        description="Local persistence configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix="EDUSPARK_",
        env_file=".env",
        extra="ignore",
    )

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = "DEBUG" if self.debug else self.log_level
        configure_logging(level, fmt=self.log_format)
