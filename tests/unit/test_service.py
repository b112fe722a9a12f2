from __future__ import annotations

from eduspark.core.config import EduSparkConfig
from eduspark.core.service import EduSpark
from eduspark.flows.registry import TaskRegistry
from eduspark.store.kv import InMemoryKeyValueStore
from tests.stubs import StubBackend, quiz_output


def test_service_wires_configured_paths(eduspark_config: EduSparkConfig) -> None:
    backend = StubBackend([quiz_output(2)])
    service = EduSpark(eduspark_config, backend=backend)

    outcome = service.run_task("generate-quiz", {"topic": "Tides", "numQuestions": 2}, user_id="u")

    assert outcome.ok
    assert service.executor.default_model == "test-model"
    assert eduspark_config.store.achievements_file.exists()
    assert service.achievements.is_unlocked("u", "quizWhiz")


def test_service_without_credentials_still_starts(eduspark_config: EduSparkConfig) -> None:
    config = eduspark_config.model_copy(
        update={"llm": eduspark_config.llm.model_copy(update={"openai_api_key": None})}
    )

    outcome = EduSpark(config).run_task("summarize-text", {"textToSummarize": "x"})

    assert not outcome.ok
    assert outcome.error is not None
    assert outcome.error.kind == "backend_unavailable"


def test_service_accepts_injected_registry_and_store(eduspark_config: EduSparkConfig) -> None:
    kv = InMemoryKeyValueStore()
    service = EduSpark(eduspark_config, backend=StubBackend(), registry=TaskRegistry(), kv_store=kv)

    assert len(service.registry) == 0
    assert service.run_task("generate-quiz", {}).error is not None


def test_log_activity(eduspark_config: EduSparkConfig) -> None:
    service = EduSpark(eduspark_config, backend=StubBackend())

    assert service.log_activity("u", title="Revision", subject="Chemistry").ok
    assert not service.log_activity(None, title="Revision", subject="Chemistry").ok
    assert [a.subject for a in service.activities.list("u")] == ["Chemistry"]
