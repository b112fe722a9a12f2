"""Key/value stores for small per-user flags."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from eduspark.store.files import write_json_atomic

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


@dataclass
class InMemoryKeyValueStore:
    data: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


@dataclass
class JsonFileKeyValueStore:
    """A single JSON object on disk, rewritten on every ``set``."""

    path: Path

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def _load_unlocked(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "Key/value file is not valid JSON; treating as empty",
                extra={"path": str(self.path)},
            )
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _save_unlocked(self, data: dict[str, str]) -> None:
        write_json_atomic(self.path, data)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load_unlocked().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load_unlocked()
            data[key] = value
            self._save_unlocked(data)
