# tests/test_snapshot_store.py

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from puptrack.core.errors import CorruptDataError, SnapshotWriteError
from puptrack.logs.log_models import LogEntry
from puptrack.photos.photo_models import PhotoSlot
from puptrack.photos.photo_store import empty_photo_paths
from puptrack.storage.snapshot import SCHEMA_VERSION, PersistedSnapshot
from puptrack.storage.snapshot_store import JsonSnapshotStore
from puptrack.tasks.task_models import Task, default_tasks


def _full_snapshot() -> PersistedSnapshot:
    paths = empty_photo_paths()
    paths[PhotoSlot.AFTERNOON] = "Photos/afternoon.png"
    tasks = default_tasks()
    tasks.append(Task(name="Walk, long", is_selected=True, color="teal"))
    return PersistedSnapshot(
        dog_name="Rex",
        tasks=tasks,
        photo_paths=paths,
        has_onboarded=True,
        logs=[
            LogEntry(
                task_name="Walk, long",
                timestamp=datetime(2026, 10, 19, 7, 15, 3, 250, tzinfo=timezone(timedelta(hours=-5))),
            ),
            LogEntry(task_name="Bath", timestamp=datetime(2026, 10, 18, 20, 0, tzinfo=timezone.utc)),
        ],
    )


def test_missing_file_loads_as_none(tmp_path: Path) -> None:
    assert JsonSnapshotStore(tmp_path / "nope.json").load() is None


def test_round_trip_full_state(tmp_path: Path) -> None:
    store = JsonSnapshotStore(tmp_path / "PupTrackData.json")
    snap = _full_snapshot()
    store.save(snap)
    assert store.load() == snap


def test_round_trip_empty_state(tmp_path: Path) -> None:
    store = JsonSnapshotStore(tmp_path / "PupTrackData.json")
    snap = PersistedSnapshot()
    store.save(snap)
    loaded = store.load()
    assert loaded == snap
    assert loaded is not None and all(v is None for v in loaded.photo_paths.values())


def test_file_is_pretty_printed_utf8_with_version(tmp_path: Path) -> None:
    path = tmp_path / "sub" / "PupTrackData.json"
    store = JsonSnapshotStore(path)
    store.save(PersistedSnapshot(dog_name="Büro"))

    text = path.read_text("utf-8")
    assert "\n  " in text
    assert "Büro" in text
    data = json.loads(text)
    assert data["schema_version"] == SCHEMA_VERSION
    assert data["photo_paths"] == {"morning": None, "afternoon": None, "night": None}
    assert "selected_task_names" not in data
    assert not (tmp_path / "sub" / "PupTrackData.json.tmp").exists()


def test_failed_save_keeps_previous_file(tmp_path: Path) -> None:
    path = tmp_path / "PupTrackData.json"
    store = JsonSnapshotStore(path)
    store.save(PersistedSnapshot(dog_name="Old"))

    # a directory in the way of the temp file makes the write fail
    (tmp_path / "PupTrackData.json.tmp").mkdir()
    with pytest.raises(SnapshotWriteError):
        store.save(PersistedSnapshot(dog_name="New"))

    loaded = store.load()
    assert loaded is not None and loaded.dog_name == "Old"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"dog_name": "Rex"}',
        '{"dog_name": "Rex", "tasks": [], "logs": [{"id": "1", "task_name": "x", "timestamp": "yesterday"}], "has_onboarded": false}',
        '{"dog_name": "Rex", "tasks": [{"id": "1"}], "logs": [], "has_onboarded": false}',
        '{"dog_name": "Rex", "tasks": [], "logs": [], "has_onboarded": "yes"}',
        '{"dog_name": "Rex", "tasks": [], "logs": [], "has_onboarded": false, "photo_paths": {"noon": null}}',
        '{"schema_version": 99, "dog_name": "Rex", "tasks": [], "logs": [], "has_onboarded": false}',
        "[" * 200000,
    ],
)
def test_corrupt_content_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "PupTrackData.json"
    path.write_text(content, "utf-8")
    with pytest.raises(CorruptDataError):
        JsonSnapshotStore(path).load()


def test_legacy_file_without_version_and_with_selected_cache(tmp_path: Path) -> None:
    path = tmp_path / "PupTrackData.json"
    path.write_text(
        json.dumps(
            {
                "dog_name": "Rex",
                "tasks": [{"id": "t1", "name": "Bath", "is_selected": True, "color": "blue"}],
                "selected_task_names": ["Bath"],
                "has_onboarded": True,
                "logs": [{"id": "l1", "task_name": "Bath", "timestamp": "2026-10-01T08:00:00"}],
            }
        ),
        "utf-8",
    )
    snap = JsonSnapshotStore(path).load()
    assert snap is not None
    assert snap.tasks == [Task(id="t1", name="Bath", is_selected=True, color="blue")]
    assert snap.logs[0].timestamp == datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)
    assert snap.photo_paths == empty_photo_paths()


def test_escaped_lone_surrogate_in_file_is_replaced(tmp_path: Path) -> None:
    path = tmp_path / "PupTrackData.json"
    path.write_text(
        '{"dog_name": "Rex\\udcff", "tasks": [], "has_onboarded": false,'
        ' "logs": [{"id": "l1", "task_name": "Walk\\udcff", "timestamp": "2026-10-01T08:00:00+00:00"}]}',
        "utf-8",
    )
    store = JsonSnapshotStore(path)
    snap = store.load()
    assert snap is not None
    assert snap.dog_name == "Rex?"
    assert snap.logs[0].task_name == "Walk?"

    # and the cleaned state can be written back
    store.save(snap)
    assert store.load() == snap
