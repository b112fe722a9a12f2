"""FastAPI app factory.

Endpoints are thin wrappers over :class:`eduspark.core.service.EduSpark`.
Task failures are returned as outcomes with status 200; HTTP errors are
reserved for unknown routes and malformed requests.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from eduspark import __version__
from eduspark.core.config import EduSparkConfig
from eduspark.core.errors import InputValidationError
from eduspark.core.service import EduSpark
from eduspark.flows.quiz import QuizScore
from eduspark.llm.provider import GenerativeBackend
from eduspark.server.config import ServerSettings
from eduspark.server.models import (
    ActivityRequest,
    ApiHealth,
    ApiOutcome,
    ApiTask,
    GradeQuizRequest,
)
from eduspark.store.achievements import AchievementSummary
from eduspark.store.activity import StudyActivity
from eduspark.store.kv import KeyValueStore

logger = logging.getLogger(__name__)


def create_app(
    config: EduSparkConfig | None = None,
    backend: GenerativeBackend | None = None,
    *,
    settings: ServerSettings | None = None,
    kv_store: KeyValueStore | None = None,
) -> FastAPI:
    settings = settings or ServerSettings()
    service = EduSpark(config, backend=backend, kv_store=kv_store)

    app = FastAPI(
        title="EduSpark",
        version=__version__,
        description="Typed AI learning tools over a pluggable generative backend.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health", response_model=ApiHealth)
    def health() -> ApiHealth:
        return ApiHealth(status="ok", version=__version__, tasks=len(service.registry))

    @app.get("/api/tasks", response_model=list[ApiTask])
    def list_tasks() -> list[ApiTask]:
        return [
            ApiTask(
                name=spec.name,
                achievement=spec.achievement,
                produces_media=spec.produces_media,
                input_schema=spec.input_schema(),
                output_schema=spec.output_schema(),
            )
            for spec in service.registry
        ]

    @app.post("/api/tasks/{name}", response_model=ApiOutcome)
    def run_task(
        name: str,
        payload: dict[str, Any] = Body(...),
        x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    ) -> dict[str, Any]:
        return service.run_task(name, payload, user_id=x_user_id).to_json()

    @app.post("/api/quizzes/grade", response_model=QuizScore)
    def grade_quiz(
        req: GradeQuizRequest,
        x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    ) -> QuizScore:
        try:
            return service.grade_quiz(req.quiz, req.answers, user_id=x_user_id)
        except InputValidationError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

    @app.post("/api/users/{user_id}/activities", response_model=ApiOutcome)
    def log_activity(user_id: str, req: ActivityRequest) -> dict[str, Any]:
        return service.log_activity(user_id, title=req.title, subject=req.subject).to_json()

    @app.get("/api/users/{user_id}/activities", response_model=list[StudyActivity])
    def list_activities(user_id: str) -> list[StudyActivity]:
        try:
            return service.activities.list(user_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

    @app.get("/api/users/{user_id}/achievements", response_model=AchievementSummary)
    def achievements(user_id: str) -> AchievementSummary:
        return service.achievements.summary(user_id)

    logger.info(
        "API ready",
        extra={"tasks": len(service.registry), "cors_origins": settings.parsed_cors_origins()},
    )
    return app
