from __future__ import annotations

import json
import logging
import sys

import pytest

from eduspark.core.logging import JsonFormatter, TextFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="eduspark.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Task %s",
        args=("completed",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_lifts_task_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(task="generate-quiz", elapsed_ms=12)))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "eduspark.test"
    assert payload["message"] == "Task completed"
    assert payload["task"] == "generate-quiz"
    assert payload["extra"] == {"elapsed_ms": 12}


def test_json_formatter_omits_empty_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload


def test_configure_logging_replaces_handlers() -> None:
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        configure_logging("debug")
        configure_logging("warning", fmt="text")

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, TextFormatter)
        assert logging.getLogger("openai").level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


@pytest.mark.parametrize("fmt", ["json", "text"])
def test_configure_logging_accepts_both_formats(fmt: str) -> None:
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        configure_logging("INFO", fmt=fmt)
        assert isinstance(root.handlers[0].formatter, JsonFormatter) is (fmt == "json")
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_json_formatter_includes_exception() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(task="visualize-concept")
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["task"] == "visualize-concept"
    assert "extra" not in payload
    assert "RuntimeError: boom" in payload["exception"]


def test_text_formatter_appends_fields() -> None:
    line = TextFormatter().format(_record(task="generate-quiz", elapsed_ms=12))

    assert "eduspark.test: Task completed" in line
    assert line.endswith("[task=generate-quiz elapsed_ms=12]")


def test_text_formatter_without_fields() -> None:
    line = TextFormatter().format(_record())

    assert line.endswith("eduspark.test: Task completed")
