"""Achievement flags.

An achievement is a boolean per (user, achievement id), set the first time the
matching task succeeds and never cleared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import BaseModel

from eduspark.store.kv import KeyValueStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "eduspark_achievement_"


@dataclass(frozen=True, slots=True)
class Achievement:
    id: str
    title: str
    description: str
    points: int


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("firstLogin", "First Steps Login!", "Logged in for the first time.", 10),
    Achievement("courseCadet", "Course Cadet Graduate", "Completed your first course module.", 20),
    Achievement("quizNovice", "Quiz Novice Ace", "Attempted your first quiz.", 15),
    Achievement("perfectTen", "Perfect Ten Scorer", "Scored 100% on a quiz.", 50),
    Achievement("studyStreak", "Study Streak Master", "Logged in 7 days in a row.", 100),
    Achievement(
        "contentExplorer", "Content Explorer Pro", "Viewed 10 different learning materials.", 25
    ),
    Achievement("aiCompanion", "AI Companion User", "Asked the AI Tutor your first question.", 20),
    Achievement(
        "plannerPro", "Planner Pro Strategist", "Generated your first personalized study plan.", 30
    ),
    Achievement("quizWhiz", "Quiz Whiz Kid", "Generated your first quiz.", 25),
    Achievement("masterSummarizer", "Master Summarizer", "Summarized your first text.", 25),
    Achievement("buddingAuthor", "Budding Author", "Crafted your first story.", 20),
    Achievement(
        "conceptConnoisseur", "Concept Connoisseur", "Visualized your first concept.", 30
    ),
    Achievement(
        "mathSolver", "Math Problem Solver", "Solved your first problem with the Homework Helper.", 15
    ),
    Achievement("codeApprentice", "Code Apprentice", "Generated code for a programming task.", 25),
    Achievement("flashcardFanatic", "Flashcard Fanatic", "Created a set of flashcards.", 20),
)


class AchievementStatus(BaseModel):
    id: str
    title: str
    description: str
    points: int
    unlocked: bool


class AchievementSummary(BaseModel):
    user_id: str
    unlocked_count: int
    total: int
    points: int
    achievements: list[AchievementStatus]


class AchievementTracker:
    """Reads and sets achievement flags in an injected key/value store."""

    def __init__(
        self, store: KeyValueStore, catalog: tuple[Achievement, ...] = ACHIEVEMENTS
    ) -> None:
        self.store = store
        self.catalog = {a.id: a for a in catalog}

    @staticmethod
    def key(user_id: str, achievement_id: str) -> str:
        return f"{KEY_PREFIX}{user_id}_{achievement_id}"

    def _require(self, achievement_id: str) -> Achievement:
        try:
            return self.catalog[achievement_id]
        except KeyError:
            raise KeyError(f"Unknown achievement: {achievement_id!r}") from None

    def is_unlocked(self, user_id: str, achievement_id: str) -> bool:
        self._require(achievement_id)
        return self.store.get(self.key(user_id, achievement_id)) == "true"

    def award(self, user_id: str, achievement_id: str) -> bool:
        """Unlock ``achievement_id`` for ``user_id``.

        Returns:
            True if this call unlocked it, False if it was already unlocked.
        """
        if not user_id:
            raise ValueError("user_id is required")
        achievement = self._require(achievement_id)
        if self.is_unlocked(user_id, achievement_id):
            return False
        self.store.set(self.key(user_id, achievement_id), "true")
        logger.info(
            "Achievement unlocked",
            extra={"user_id": user_id, "achievement": achievement.id, "points": achievement.points},
        )
        return True

    def unlocked(self, user_id: str) -> list[str]:
        return [a_id for a_id in self.catalog if self.is_unlocked(user_id, a_id)]

    def summary(self, user_id: str) -> AchievementSummary:
        unlocked = set(self.unlocked(user_id))
        statuses = [
            AchievementStatus(
                id=a.id,
                title=a.title,
                description=a.description,
                points=a.points,
                unlocked=a.id in unlocked,
            )
            for a in self.catalog.values()
        ]
        return AchievementSummary(
            user_id=user_id,
            unlocked_count=len(unlocked),
            total=len(statuses),
            points=sum(s.points for s in statuses if s.unlocked),
            achievements=statuses,
        )
