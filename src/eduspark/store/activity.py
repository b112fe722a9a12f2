"""Per-user study activity log.

Documents are kept as one JSON list per user under
``<root>/users/<user_id>/study_activities.json``.
"""

from __future__ import annotations

import json
import logging
import re
import threading
import uuid
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field

from eduspark.flows.actions import ActionOutcome, ErrorDetail
from eduspark.store.files import write_json_atomic

logger = logging.getLogger(__name__)

_SAFE_USER_ID = re.compile(r"^[A-Za-z0-9_.@-]+$")


class StudyActivity(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str
    subject: str
    timestamp: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())


class ActivityStore:
    """JSON-file backed document store for study activities."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._lock = threading.Lock()

    def _path(self, user_id: str) -> Path:
        if not _SAFE_USER_ID.match(user_id) or user_id in {".", ".."}:
            raise ValueError(f"Invalid user id: {user_id!r}")
        return self._root / "users" / user_id / "study_activities.json"

    def _load_unlocked(self, path: Path) -> list[StudyActivity]:
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "Activity file is not valid JSON; treating as empty", extra={"path": str(path)}
            )
            return []
        if not isinstance(raw, list):
            return []
        return [StudyActivity.model_validate(item) for item in raw]

    def list(self, user_id: str) -> list[StudyActivity]:
        path = self._path(user_id)
        with self._lock:
            return self._load_unlocked(path)

    def add(self, user_id: str, *, title: str, subject: str) -> StudyActivity:
        path = self._path(user_id)
        record = StudyActivity(title=title, subject=subject)
        with self._lock:
            records = self._load_unlocked(path)
            records.append(record)
            write_json_atomic(path, [r.model_dump(mode="json") for r in records])
        return record


def log_study_activity(
    store: ActivityStore, user_id: str | None, *, title: str, subject: str
) -> ActionOutcome[StudyActivity]:
    """Record a study activity; never raises."""
    task = "log-study-activity"
    if not user_id:
        return ActionOutcome.failure(
            ErrorDetail(task=task, kind="unauthenticated", message="User is not authenticated.")
        )
    try:
        record = store.add(user_id, title=title, subject=subject)
    except (OSError, ValueError) as e:
        logger.warning("Failed to log activity", extra={"user_id": user_id, "error": str(e)})
        return ActionOutcome.failure(
            ErrorDetail(task=task, kind="storage_error", message=f"Failed to log activity: {e}")
        )
    logger.info("Study activity logged", extra={"user_id": user_id, "activity_id": record.id})
    return ActionOutcome.success(record)
