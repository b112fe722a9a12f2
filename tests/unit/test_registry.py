from __future__ import annotations

import dataclasses

import pytest
from pydantic import BaseModel

from eduspark.core.errors import (
    ConfigurationError,
    DuplicateTask,
    TemplateFieldMissing,
    UnknownTask,
)
from eduspark.flows.prompt import PromptSection, PromptTemplate
from eduspark.flows.registry import MediaPolicy, TaskRegistry, TaskSpec


class EchoInput(BaseModel):
    text: str
    hint: str | None = None


class EchoOutput(BaseModel):
    echo: str


def _spec(name: str = "echo", **overrides: object) -> TaskSpec:
    spec = TaskSpec(
        name=name,
        input_model=EchoInput,
        output_model=EchoOutput,
        template=PromptTemplate(
            sections=(PromptSection("Echo {text}"), PromptSection("Hint: {hint}", when="hint"))
        ),
        failure_message="Failed to echo",
    )
    return dataclasses.replace(spec, **overrides)  # type: ignore[arg-type]


def test_register_then_lookup_returns_same_spec() -> None:
    registry = TaskRegistry()
    spec = _spec()

    registry.register(spec)

    assert registry.lookup("echo") is spec
    assert "echo" in registry
    assert len(registry) == 1


def test_reregistering_identical_spec_is_a_noop() -> None:
    spec = _spec()
    registry = TaskRegistry([spec])

    assert registry.register(spec) is spec
    assert len(registry) == 1


def test_registering_different_spec_under_same_name_fails() -> None:
    registry = TaskRegistry([_spec()])

    with pytest.raises(DuplicateTask) as exc:
        registry.register(_spec(failure_message="Something else"))

    assert exc.value.name == "echo"
    assert registry.lookup("echo").failure_message == "Failed to echo"


def test_lookup_unknown_task() -> None:
    with pytest.raises(UnknownTask) as exc:
        TaskRegistry().lookup("nope")

    assert exc.value.kind == "unknown_task"


def test_template_referencing_undeclared_field_is_rejected() -> None:
    bad = _spec(template=PromptTemplate.simple("Echo {text} in {language}"))

    with pytest.raises(TemplateFieldMissing) as exc:
        TaskRegistry().register(bad)

    assert exc.value.field == "language"


def test_condition_on_undeclared_field_is_rejected() -> None:
    bad = _spec(
        template=PromptTemplate(sections=(PromptSection("Echo {text}", when="missing"),))
    )

    with pytest.raises(TemplateFieldMissing):
        TaskRegistry().register(bad)


def test_frozen_registry_rejects_new_tasks() -> None:
    registry = TaskRegistry([_spec()]).freeze()

    assert registry.frozen
    with pytest.raises(ConfigurationError):
        registry.register(_spec(name="other"))


def test_iteration_is_sorted_by_name() -> None:
    registry = TaskRegistry([_spec("b"), _spec("a"), _spec("c")])

    assert registry.names() == ["a", "b", "c"]
    assert [s.name for s in registry] == ["a", "b", "c"]


def test_media_policy_outputs() -> None:
    policy = MediaPolicy(
        image_field="image",
        text_field="note",
        success_text="done",
        placeholder_uri="https://example.test/p.png",
        placeholder_text="unavailable",
    )

    assert policy.output("data:image/png;base64,AAAA") == {
        "image": "data:image/png;base64,AAAA",
        "note": "done",
    }
    assert policy.output("u", "custom") == {"image": "u", "note": "custom"}
    assert policy.fallback() == {"image": "https://example.test/p.png", "note": "unavailable"}
    assert _spec(media=policy).produces_media
    assert not _spec().produces_media
