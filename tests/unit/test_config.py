"""Unit tests for configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from eduspark.core.config import EduSparkConfig, LLMConfig, StoreConfig
from eduspark.server.config import ServerSettings


def test_llm_config_defaults() -> None:
    """Test LLM config default values."""
    config = LLMConfig(openai_api_key="test-key")

    assert config.provider == "openai"
    assert config.openai_model == "gpt-4o-mini"
    assert config.openai_image_model == "gpt-image-1"
    assert config.openai_temperature == 0.7
    assert config.llama_n_ctx == 4096
    assert config.default_model == "gpt-4o-mini"


def test_llm_config_rejects_out_of_range_values() -> None:
    with pytest.raises(ValidationError):
        LLMConfig(openai_temperature=3.0)
    with pytest.raises(ValidationError):
        LLMConfig(timeout_seconds=0)
    with pytest.raises(ValidationError):
        LLMConfig(provider="anthropic")  # type: ignore[arg-type]


def test_llama_default_model_is_file_stem() -> None:
    config = LLMConfig(provider="llama", llama_model_path=Path("/models/tutor-7b.gguf"))

    assert config.default_model == "tutor-7b"


def test_store_config_derived_paths(tmp_path: Path) -> None:
    config = StoreConfig(data_path=tmp_path)

    assert config.achievements_file == tmp_path / "achievements.json"
    assert config.activity_root == tmp_path / "activity"


def test_eduspark_config_composition() -> None:
    """Test main config with nested configs."""
    config = EduSparkConfig(log_level="DEBUG", debug=True)

    assert config.log_level == "DEBUG"
    assert config.debug is True
    assert isinstance(config.llm, LLMConfig)
    assert isinstance(config.store, StoreConfig)


def test_llm_config_loads_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDUSPARK_LLM_OPENAI_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("EDUSPARK_LLM_TIMEOUT_SECONDS", "12.5")

    config = LLMConfig()

    assert config.openai_model == "gpt-4.1-mini"
    assert config.timeout_seconds == 12.5


def test_config_loads_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EDUSPARK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("EDUSPARK_STORE_DATA_PATH", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "EDUSPARK_LOG_LEVEL=WARNING\nEDUSPARK_STORE_DATA_PATH=state\nUNRELATED=1\n",
        encoding="utf-8",
    )

    config = EduSparkConfig()

    assert config.log_level == "WARNING"
    assert config.store.data_path == Path("state")


def test_server_settings_parse_cors_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDUSPARK_CORS_ORIGINS", " http://a.test , ,http://b.test")
    monkeypatch.setenv("EDUSPARK_PORT", "9001")

    settings = ServerSettings()

    assert settings.parsed_cors_origins() == ["http://a.test", "http://b.test"]
    assert settings.port == 9001
