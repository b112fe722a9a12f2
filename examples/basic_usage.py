#!/usr/bin/env python3
"""Programmatic quiz example.

This demonstrates using the EduSpark components directly:

* load settings from `.env`
* generate a quiz through the action boundary
* grade a set of answers (AI verification, answer-key fallback)

The topic and answers are passed as arguments.
"""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from eduspark.core.config import EduSparkConfig
from eduspark.core.service import EduSpark
from eduspark.tasks.assessment import GENERATE_QUIZ, GenerateQuizOutput


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate and grade a quiz (programmatic example).")
    parser.add_argument("--topic", required=True, help='Quiz topic, e.g. "Photosynthesis"')
    parser.add_argument("--questions", type=int, default=5, help="Number of questions (1-10)")
    parser.add_argument("--user", default="demo-user", help="User id for achievements")
    parser.add_argument(
        "--answers",
        default="",
        help='Comma-separated answer indexes, e.g. "0,2,1" (defaults to all 0)',
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    config = EduSparkConfig()
    config.setup_logging()
    app = EduSpark(config)

    outcome = app.run_task(
        GENERATE_QUIZ, {"topic": args.topic, "numQuestions": args.questions}, user_id=args.user
    )
    if not outcome.ok or not isinstance(outcome.data, GenerateQuizOutput):
        print(json.dumps(outcome.to_json(), indent=2))
        return 1

    quiz = outcome.data
    print(f"{quiz.quiz_title} ({len(quiz.questions)} questions)")

    answers = [int(a) for a in args.answers.split(",") if a.strip()] or [0] * len(quiz.questions)
    score = app.grade_quiz(quiz, answers, user_id=args.user)

    print(f"Score: {score.score}/{score.total} (source: {score.source})")
    for unlocked in app.achievements.unlocked(args.user):
        print(f"Achievement unlocked: {unlocked}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
