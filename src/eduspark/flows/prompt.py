"""Prompt templates and their rendering.

Templates are plain ``str.format`` strings split into sections. A section can be
conditional on an optional input field, so a prompt only mentions context the
caller actually supplied::

    PromptTemplate(
        sections=(
            PromptSection("Generate a quiz on {topic}."),
            PromptSection("Use this context:\\n---\\n{context_text}\\n---", when="context_text"),
        )
    )

Placeholders name the *attribute* of the input model (snake_case), not its
JSON alias.
"""

from __future__ import annotations

import json
import re
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from eduspark.core.errors import InputValidationError, TemplateFieldMissing
from eduspark.llm.provider import InlineMedia

_DATA_URI = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=\s]+)$"
)


@dataclass(frozen=True, slots=True)
class PromptSection:
    text: str
    when: str | None = None


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    sections: tuple[PromptSection, ...]
    system: str | None = None
    media_field: str | None = None

    @classmethod
    def simple(cls, text: str, *, system: str | None = None) -> PromptTemplate:
        return cls(sections=(PromptSection(text),), system=system)

    def referenced_fields(self) -> set[str]:
        """Every input field the template reads, including conditions and media."""
        names: set[str] = set()
        texts = [s.text for s in self.sections]
        if self.system:
            texts.append(self.system)
        for text in texts:
            names.update(_placeholders(text))
        names.update(s.when for s in self.sections if s.when)
        if self.media_field:
            names.add(self.media_field)
        return names


@dataclass(frozen=True, slots=True)
class RenderedPrompt:
    text: str
    system: str | None = None
    media: InlineMedia | None = None


def _placeholders(text: str) -> set[str]:
    names: set[str] = set()
    for _literal, field_name, _spec, _conv in string.Formatter().parse(text):
        if field_name is None:
            continue
        if not field_name:
            raise TemplateFieldMissing("<positional>")
        names.add(re.split(r"[.\[]", field_name, maxsplit=1)[0])
    return names


def check_template(template: PromptTemplate, input_model: type[BaseModel]) -> None:
    """Fail if ``template`` references a field ``input_model`` does not declare."""
    declared = set(input_model.model_fields)
    for name in sorted(template.referenced_fields()):
        if name not in declared:
            raise TemplateFieldMissing(name, model=input_model.__name__)


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return value


def format_value(value: Any) -> str:
    """Render one field value as prompt text.

    Structured values are serialized as indented JSON with sorted keys so the
    same input always produces the same prompt.
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    return json.dumps(_jsonable(value), indent=2, sort_keys=True, ensure_ascii=False)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    return True


def parse_data_uri(value: str) -> InlineMedia:
    match = _DATA_URI.match(value.strip())
    if match is None:
        raise InputValidationError(
            "Expected a base64 data URI of the form 'data:<mimetype>;base64,<data>'"
        )
    return InlineMedia(
        media_type=match.group("media_type"),
        data=re.sub(r"\s+", "", match.group("data")),
    )


def render_prompt(template: PromptTemplate, record: BaseModel) -> RenderedPrompt:
    """Render ``template`` against a validated input record."""
    check_template(template, type(record))

    raw = {name: getattr(record, name) for name in type(record).model_fields}
    values = {name: format_value(value) for name, value in raw.items()}

    parts: list[str] = []
    for section in template.sections:
        if section.when is not None and not _is_present(raw[section.when]):
            continue
        parts.append(section.text.format(**values))

    system = template.system.format(**values) if template.system else None

    media = None
    if template.media_field is not None and _is_present(raw[template.media_field]):
        media = parse_data_uri(str(raw[template.media_field]))

    return RenderedPrompt(text="\n".join(parts).strip(), system=system, media=media)
