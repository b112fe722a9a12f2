"""Quiz grading with AI verification and answer-key fallback.

Generated answer keys are not guaranteed to agree with a second model call, so
grading asks the ``verify-quiz-answers`` task to recompute correctness and
trusts it when it succeeds. If verification fails, grading falls back to the
answer key from the original generation. Every result records which source
was used.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, computed_field

from eduspark.core.errors import InputValidationError
from eduspark.flows.actions import ActionOutcome, ActionRunner
from eduspark.tasks.assessment import (
    VERIFY_QUIZ_ANSWERS,
    GenerateQuizOutput,
    QuestionAndAnswer,
    VerifyQuizAnswersInput,
    VerifyQuizAnswersOutput,
)
from eduspark.tasks.base import WireModel

logger = logging.getLogger(__name__)

ScoreSource = Literal["verified", "initial"]


class QuestionResult(WireModel):
    index: int
    user_answer_index: int | None
    correct_answer_index: int
    is_correct: bool
    explanation: str
    source: ScoreSource


class QuizScore(WireModel):
    score: int
    total: int
    source: ScoreSource
    results: list[QuestionResult]
    verification_error: str | None = None

    @computed_field(alias="isPerfect")  # type: ignore[prop-decorator]
    @property
    def is_perfect(self) -> bool:
        return self.total > 0 and self.score == self.total


def _check_answers(quiz: GenerateQuizOutput, answers: Sequence[int | None]) -> None:
    if len(answers) != len(quiz.questions):
        raise InputValidationError(
            f"Expected {len(quiz.questions)} answers, got {len(answers)}",
            errors=[{"loc": ("answers",), "msg": "answer count does not match question count"}],
        )
    for i, answer in enumerate(answers):
        if answer is not None and not 0 <= answer <= 3:
            raise InputValidationError(
                f"Answer {i} is out of range: {answer}",
                errors=[{"loc": ("answers", i), "msg": "must be between 0 and 3"}],
            )


def build_verification_input(
    quiz: GenerateQuizOutput, answers: Sequence[int | None]
) -> VerifyQuizAnswersInput:
    """Pair every question with the user's selection for the verification task."""
    _check_answers(quiz, answers)
    return VerifyQuizAnswersInput(
        questions_and_user_answers=[
            QuestionAndAnswer(
                question_text=q.question,
                options=list(q.options),
                user_selected_option_index=answer,
            )
            for q, answer in zip(quiz.questions, answers, strict=True)
        ]
    )


def score_quiz(
    quiz: GenerateQuizOutput,
    answers: Sequence[int | None],
    verification: ActionOutcome[BaseModel] | None,
) -> QuizScore:
    """Score ``answers``, preferring verified results over the generated answer key."""
    _check_answers(quiz, answers)

    verified: VerifyQuizAnswersOutput | None = None
    error: str | None = None
    if verification is None:
        error = "verification not attempted"
    elif not verification.ok:
        error = verification.error.message if verification.error else "verification failed"
    elif not isinstance(verification.data, VerifyQuizAnswersOutput):
        error = "verification returned an unexpected result"
    elif len(verification.data.verified_results) != len(quiz.questions):
        error = (
            f"verification returned {len(verification.data.verified_results)} results "
            f"for {len(quiz.questions)} questions"
        )
    else:
        verified = verification.data

    results: list[QuestionResult] = []
    if verified is not None:
        for i, (answer, res) in enumerate(zip(answers, verified.verified_results, strict=True)):
            results.append(
                QuestionResult(
                    index=i,
                    user_answer_index=answer,
                    correct_answer_index=res.verified_correct_answer_index,
                    is_correct=res.is_user_choice_correct,
                    explanation=res.explanation,
                    source="verified",
                )
            )
        source: ScoreSource = "verified"
    else:
        logger.info("Scoring quiz from the generated answer key", extra={"reason": error})
        for i, (answer, q) in enumerate(zip(answers, quiz.questions, strict=True)):
            results.append(
                QuestionResult(
                    index=i,
                    user_answer_index=answer,
                    correct_answer_index=q.correct_answer_index,
                    is_correct=answer == q.correct_answer_index,
                    explanation=q.explanation,
                    source="initial",
                )
            )
        source = "initial"

    return QuizScore(
        score=sum(1 for r in results if r.is_correct),
        total=len(quiz.questions),
        source=source,
        results=results,
        verification_error=error,
    )


class QuizGrader:
    """Submits a quiz for verification and scores it."""

    def __init__(self, runner: ActionRunner) -> None:
        self.runner = runner

    def submit(
        self,
        quiz: GenerateQuizOutput,
        answers: Sequence[int | None],
        *,
        user_id: str | None = None,
    ) -> QuizScore:
        """Verify once, then score.

        Raises:
            InputValidationError: ``answers`` does not line up with the quiz.
        """
        verification_input = build_verification_input(quiz, answers)
        outcome = self.runner.invoke(VERIFY_QUIZ_ANSWERS, verification_input, user_id=user_id)
        result = score_quiz(quiz, answers, outcome)

        if user_id:
            self.runner.award(user_id, "quizNovice")
            if result.is_perfect:
                self.runner.award(user_id, "perfectTen")
        return result
