"""Application wiring."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from eduspark.core.config import EduSparkConfig
from eduspark.flows.actions import ActionOutcome, ActionRunner
from eduspark.flows.executor import FlowExecutor
from eduspark.flows.quiz import QuizGrader, QuizScore
from eduspark.flows.registry import TaskRegistry
from eduspark.llm.factory import BackendFactory
from eduspark.llm.provider import GenerativeBackend
from eduspark.store.achievements import AchievementTracker
from eduspark.store.activity import ActivityStore, StudyActivity, log_study_activity
from eduspark.store.kv import JsonFileKeyValueStore, KeyValueStore
from eduspark.tasks import build_default_registry
from eduspark.tasks.assessment import GenerateQuizOutput

logger = logging.getLogger(__name__)


class EduSpark:
    """Builds and holds the long-lived collaborators.

    The registry and the backend are created once and shared by every call.
    Tests inject a stub backend, an in-memory key/value store or a custom
    registry instead of the configured ones.
    """

    def __init__(
        self,
        config: EduSparkConfig | None = None,
        *,
        backend: GenerativeBackend | None = None,
        registry: TaskRegistry | None = None,
        kv_store: KeyValueStore | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Configuration object. If None, loads from environment.
            backend: Generative backend. If None, built from ``config.llm``.
            registry: Task registry. If None, the built-in tasks are registered.
            kv_store: Achievement flag store. If None, a JSON file under the data path.
        """
        self.config = config or EduSparkConfig()

        logger.info("Initializing EduSpark")

        self.registry = registry if registry is not None else build_default_registry()
        self.backend = backend or BackendFactory.create_or_unconfigured(self.config.llm)
        self.executor = FlowExecutor(
            self.registry,
            self.backend,
            default_model=self.config.llm.default_model,
            image_model=self.config.llm.openai_image_model,
        )
        if kv_store is None:
            kv_store = JsonFileKeyValueStore(self.config.store.achievements_file)
        self.achievements = AchievementTracker(kv_store)
        self.activities = ActivityStore(self.config.store.activity_root)
        self.runner = ActionRunner(self.executor, achievements=self.achievements)
        self.grader = QuizGrader(self.runner)

        logger.info("EduSpark initialized", extra={"tasks": len(self.registry)})

    def run_task(
        self,
        task_name: str,
        payload: Mapping[str, Any] | BaseModel,
        *,
        user_id: str | None = None,
    ) -> ActionOutcome[BaseModel]:
        return self.runner.invoke(task_name, payload, user_id=user_id)

    def grade_quiz(
        self,
        quiz: GenerateQuizOutput,
        answers: Sequence[int | None],
        *,
        user_id: str | None = None,
    ) -> QuizScore:
        return self.grader.submit(quiz, answers, user_id=user_id)

    def log_activity(
        self, user_id: str | None, *, title: str, subject: str
    ) -> ActionOutcome[StudyActivity]:
        return log_study_activity(self.activities, user_id, title=title, subject=subject)
