"""CLI entrypoint for EduSpark."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from eduspark import __version__
from eduspark.core.config import EduSparkConfig

logger = logging.getLogger(__name__)


def _load_payload(value: str) -> dict[str, Any]:
    """Parse ``--input``: inline JSON, or ``@path`` to read JSON from a file."""
    text = Path(value[1:]).read_text(encoding="utf-8") if value.startswith("@") else value
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("Task input must be a JSON object")
    return payload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eduspark",
        description="Run EduSpark AI learning tools from the command line or over HTTP",
    )
    parser.add_argument("--version", action="version", version=f"eduspark {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_tasks = subparsers.add_parser("list-tasks", help="List registered tasks")
    list_tasks.add_argument(
        "--schemas", action="store_true", help="Include input and output JSON schemas"
    )

    run = subparsers.add_parser("run", help="Run a single task and print its outcome as JSON")
    run.add_argument("task", help="Task name, e.g. 'generate-quiz'")
    run.add_argument(
        "--input",
        dest="input",
        required=True,
        help="Task input as a JSON object, or @path/to/file.json",
    )
    run.add_argument("--user", default=None, help="User id used for achievement tracking")

    serve = subparsers.add_parser("serve", help="Start the REST API server")
    serve.add_argument("--host", default=None, help="Bind address (default: EDUSPARK_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: EDUSPARK_PORT)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = EduSparkConfig()
    except ValidationError as e:
        # Logging isn't configured yet.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    config.setup_logging()

    try:
        if args.command == "list-tasks":
            from eduspark.tasks import build_default_registry

            for spec in build_default_registry():
                if args.schemas:
                    print(
                        json.dumps(
                            {
                                "name": spec.name,
                                "input": spec.input_schema(),
                                "output": spec.output_schema(),
                            }
                        )
                    )
                else:
                    print(spec.name)
            return 0

        if args.command == "run":
            from eduspark.core.service import EduSpark

            try:
                payload = _load_payload(args.input)
            except (OSError, ValueError) as e:
                print(f"Invalid --input: {e}", file=sys.stderr)
                return 2

            outcome = EduSpark(config).run_task(args.task, payload, user_id=args.user)
            print(json.dumps(outcome.to_json(), indent=2, ensure_ascii=False))
            return 0 if outcome.ok else 1

        if args.command == "serve":
            import uvicorn

            from eduspark.server.app import create_app
            from eduspark.server.config import ServerSettings

            settings = ServerSettings()
            uvicorn.run(
                create_app(config, settings=settings),
                host=args.host or settings.host,
                port=args.port or settings.port,
                log_config=None,
            )
            return 0

        parser.error(f"Unknown command: {args.command}")
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
