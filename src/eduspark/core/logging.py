"""Logging setup for the CLI, the API server and library callers.

Records are written to stderr so ``eduspark run`` can keep stdout for the
task outcome. Two renderings are available:

* ``json``: one object per line. The fields that identify a task run
  (``task``, ``kind``, ``model``, ``user_id``) sit at the top level so log
  pipelines can filter on them; any other ``extra`` values are nested.
* ``text``: a human readable line with the same fields appended as
  ``key=value`` pairs.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Literal

LogFormat = Literal["json", "text"]

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

CONTEXT_FIELDS = ("task", "kind", "model", "user_id")

# Client libraries used by the generative backends.
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the caller-supplied ``extra`` values of ``record``."""
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        fields = record_fields(record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if name in fields:
                payload[name] = fields.pop(name)
        if fields:
            payload["extra"] = fields
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Plain text lines with ``extra`` values appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        line = super().format(record)
        fields = record_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        # Keep a trailing traceback on its own lines.
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def configure_logging(level: str, fmt: LogFormat | str = "json") -> None:
    """Install a single stderr handler on the root logger.

    Calling it again replaces the previous handler, so the CLI and the API
    server can both call it without duplicating output.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(TextFormatter() if fmt == "text" else JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.INFO))
