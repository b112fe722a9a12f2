from __future__ import annotations

import pytest
from pydantic import ValidationError

from eduspark.flows.registry import TaskRegistry
from eduspark.store.achievements import ACHIEVEMENTS
from eduspark.tasks import build_default_registry, default_tasks

EXPECTED_TASKS = {
    "ask-question",
    "solve-math-problem",
    "generate-code",
    "recommend-content",
    "generate-study-plan",
    "generate-quiz",
    "verify-quiz-answers",
    "generate-question-paper",
    "generate-chapter-material",
    "generate-flashcards",
    "generate-essay",
    "generate-story",
    "summarize-text",
    "suggest-debate-topics",
    "visualize-concept",
}


def test_default_registry_contains_every_task(registry: TaskRegistry) -> None:
    assert set(registry.names()) == EXPECTED_TASKS
    assert registry.frozen


def test_every_lookup_round_trips(registry: TaskRegistry) -> None:
    for spec in default_tasks():
        assert registry.lookup(spec.name) is spec


def test_registry_can_be_rebuilt() -> None:
    assert build_default_registry().names() == build_default_registry().names()


def test_task_achievements_exist_in_catalog(registry: TaskRegistry) -> None:
    catalog = {a.id for a in ACHIEVEMENTS}
    for spec in registry:
        if spec.achievement is not None:
            assert spec.achievement in catalog, spec.name


def test_failure_messages_are_present(registry: TaskRegistry) -> None:
    for spec in registry:
        assert spec.failure_message.startswith(("Failed to", "AI Tutor failed")), spec.name


def test_only_visualize_concept_produces_media(registry: TaskRegistry) -> None:
    assert [s.name for s in registry if s.produces_media] == ["visualize-concept"]


def test_wire_schemas_use_camel_case(registry: TaskRegistry) -> None:
    schema = registry.lookup("generate-quiz").input_schema()

    assert set(schema["properties"]) == {"topic", "contextText", "numQuestions"}
    assert schema["properties"]["numQuestions"]["maximum"] == 10
    assert set(schema["required"]) == {"topic", "numQuestions"}


@pytest.mark.parametrize(
    ("task", "payload"),
    [
        ("generate-flashcards", {"sourceText": "text", "numFlashcards": 2}),
        ("generate-flashcards", {"sourceText": "text", "numFlashcards": 21}),
        ("suggest-debate-topics", {"subjectArea": "Ethics", "numTopics": 8}),
        ("generate-story", {"mainCharacter": "Ada", "setting": "Mars", "genre": "romance"}),
        ("generate-question-paper", {"className": "10", "subject": "Math", "examType": "Final", "totalMarks": 0, "duration": "3h"}),
        ("ask-question", {"question": "What?", "imageDataUri": "http://example.test/x.png"}),
        ("summarize-text", {"textToSummarize": "   "}),
    ],
)
def test_input_bounds_are_enforced(registry: TaskRegistry, task: str, payload: dict) -> None:
    with pytest.raises(ValidationError):
        registry.lookup(task).input_model.model_validate(payload)
