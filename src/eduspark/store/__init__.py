"""Local persistence for peripheral user data (achievements, study activity)."""

from eduspark.store.achievements import ACHIEVEMENTS, AchievementTracker
from eduspark.store.activity import ActivityStore, StudyActivity, log_study_activity
from eduspark.store.kv import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore

__all__ = [
    "ACHIEVEMENTS",
    "AchievementTracker",
    "ActivityStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StudyActivity",
    "log_study_activity",
]
