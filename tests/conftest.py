"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from eduspark.core.config import EduSparkConfig, LLMConfig, StoreConfig
from eduspark.flows.actions import ActionRunner
from eduspark.flows.executor import FlowExecutor
from eduspark.flows.registry import TaskRegistry
from eduspark.store.achievements import AchievementTracker
from eduspark.store.kv import InMemoryKeyValueStore
from eduspark.tasks import build_default_registry
from tests.stubs import StubBackend


@pytest.fixture
def backend() -> StubBackend:
    """Provide an empty stub backend; tests queue responses as needed."""
    return StubBackend()


@pytest.fixture
def registry() -> TaskRegistry:
    """Provide the frozen registry of built-in tasks."""
    return build_default_registry()


@pytest.fixture
def executor(registry: TaskRegistry, backend: StubBackend) -> FlowExecutor:
    """Provide an executor wired to the stub backend."""
    return FlowExecutor(registry, backend, default_model="test-model", image_model="test-image")


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def achievements(kv_store: InMemoryKeyValueStore) -> AchievementTracker:
    return AchievementTracker(kv_store)


@pytest.fixture
def runner(executor: FlowExecutor, achievements: AchievementTracker) -> ActionRunner:
    """Provide an action runner that records achievements in memory."""
    return ActionRunner(executor, achievements=achievements)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Provide a temporary data directory."""
    path = tmp_path / ".eduspark"
    path.mkdir()
    return path


@pytest.fixture
def eduspark_config(data_dir: Path) -> EduSparkConfig:
    """Provide a test configuration backed by a temporary data directory."""
    return EduSparkConfig(
        log_level="DEBUG",
        log_format="text",
        llm=LLMConfig(provider="openai", openai_api_key="test-key", openai_model="test-model"),
        store=StoreConfig(data_path=data_dir),
    )
