from __future__ import annotations

import json
from pathlib import Path

import pytest

from eduspark.store.achievements import ACHIEVEMENTS, AchievementTracker
from eduspark.store.activity import ActivityStore, StudyActivity, log_study_activity
from eduspark.store.files import write_json_atomic
from eduspark.store.kv import InMemoryKeyValueStore, JsonFileKeyValueStore


def test_json_file_store_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "kv.json"

    JsonFileKeyValueStore(path).set("a", "1")

    assert JsonFileKeyValueStore(path).get("a") == "1"
    assert json.loads(path.read_text(encoding="utf-8")) == {"a": "1"}
    assert not path.with_suffix(".json.tmp").exists()


def test_json_file_store_tolerates_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "kv.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert store.get("a") is None
    store.set("a", "1")
    assert store.get("a") == "1"


def test_achievement_keys_use_fixed_prefix() -> None:
    assert AchievementTracker.key("u1", "quizWhiz") == "eduspark_achievement_u1_quizWhiz"


def test_award_is_idempotent() -> None:
    kv = InMemoryKeyValueStore()
    tracker = AchievementTracker(kv)

    assert tracker.award("u1", "quizWhiz") is True
    assert tracker.award("u1", "quizWhiz") is False
    assert kv.data == {"eduspark_achievement_u1_quizWhiz": "true"}
    assert tracker.is_unlocked("u1", "quizWhiz")
    assert not tracker.is_unlocked("u2", "quizWhiz")


def test_award_rejects_unknown_achievement_and_missing_user() -> None:
    tracker = AchievementTracker(InMemoryKeyValueStore())

    with pytest.raises(KeyError):
        tracker.award("u1", "bogus")
    with pytest.raises(ValueError):
        tracker.award("", "quizWhiz")


def test_summary_counts_points() -> None:
    tracker = AchievementTracker(InMemoryKeyValueStore())
    tracker.award("u1", "quizWhiz")
    tracker.award("u1", "perfectTen")

    summary = tracker.summary("u1")

    assert summary.total == len(ACHIEVEMENTS) == 15
    assert summary.unlocked_count == 2
    assert summary.points == 75
    assert tracker.unlocked("u1") == ["perfectTen", "quizWhiz"]


def test_activity_store_appends_per_user(tmp_path: Path) -> None:
    store = ActivityStore(tmp_path)

    first = store.add("u1", title="Read chapter 3", subject="Biology")
    store.add("u1", title="Quiz", subject="Physics")
    store.add("u2", title="Essay", subject="History")

    activities = store.list("u1")
    assert [a.title for a in activities] == ["Read chapter 3", "Quiz"]
    assert activities[0].id == first.id
    assert (tmp_path / "users" / "u1" / "study_activities.json").exists()
    assert store.list("nobody") == []


def test_activity_store_rewrites_history_atomically(tmp_path: Path) -> None:
    store = ActivityStore(tmp_path)
    store.add("u1", title="Read chapter 3", subject="Biology")

    store.add("u1", title="Quiz", subject="Physics")

    path = tmp_path / "users" / "u1" / "study_activities.json"
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert [r["title"] for r in saved] == ["Read chapter 3", "Quiz"]
    assert not path.with_suffix(".json.tmp").exists()


def test_write_json_atomic_replaces_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "data.json"
    write_json_atomic(path, {"a": "1"})
    write_json_atomic(path, {"b": "2"})

    assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}
    assert [p.name for p in path.parent.iterdir()] == ["data.json"]


@pytest.mark.parametrize("user_id", ["../etc", "a/b", "..", ""])
def test_activity_store_rejects_unsafe_user_ids(tmp_path: Path, user_id: str) -> None:
    with pytest.raises(ValueError):
        ActivityStore(tmp_path).add(user_id, title="t", subject="s")


def test_log_study_activity_requires_user(tmp_path: Path) -> None:
    outcome = log_study_activity(ActivityStore(tmp_path), None, title="t", subject="s")

    assert not outcome.ok
    assert outcome.error is not None
    assert outcome.error.kind == "unauthenticated"
    assert outcome.error.message == "User is not authenticated."


def test_log_study_activity_success(tmp_path: Path) -> None:
    outcome = log_study_activity(ActivityStore(tmp_path), "u1", title="Flashcards", subject="Math")

    assert outcome.ok
    assert isinstance(outcome.data, StudyActivity)
    assert outcome.to_json()["data"]["title"] == "Flashcards"


def test_log_study_activity_storage_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "users"
    blocker.write_text("not a directory", encoding="utf-8")

    outcome = log_study_activity(ActivityStore(tmp_path), "u1", title="t", subject="s")

    assert not outcome.ok
    assert outcome.error is not None
    assert outcome.error.kind == "storage_error"
    assert outcome.error.message.startswith("Failed to log activity: ")
