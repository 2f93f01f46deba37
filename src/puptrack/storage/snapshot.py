# src/puptrack/storage/snapshot.py

"""
PersistedSnapshot and its JSON-shaped codec.

The snapshot is the single unit of durability: it always carries the whole
task list, the whole log list, the photo path map and the onboarding flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ..core.errors import CorruptDataError
from ..core.text import clean_text
from ..logs.log_models import LogEntry
from ..photos.photo_models import PhotoSlot
from ..photos.photo_store import PhotoPaths, empty_photo_paths
from ..tasks.task_models import Task

SCHEMA_VERSION = 1


@dataclass(slots=True)
class PersistedSnapshot:
    dog_name: str = ""
    tasks: list[Task] = field(default_factory=list)
    photo_paths: PhotoPaths = field(default_factory=empty_photo_paths)
    has_onboarded: bool = False
    logs: list[LogEntry] = field(default_factory=list)
    schema_version: int = SCHEMA_VERSION


# ---- encode ----


def _task_to_dict(t: Task) -> dict[str, Any]:
    return {"id": t.id, "name": t.name, "is_selected": t.is_selected, "color": t.color}


def _log_to_dict(e: LogEntry) -> dict[str, Any]:
    return {"id": e.id, "task_name": e.task_name, "timestamp": e.timestamp.isoformat()}


def snapshot_to_dict(snap: PersistedSnapshot) -> dict[str, Any]:
    paths = empty_photo_paths()
    paths.update(snap.photo_paths)
    return {
        "schema_version": SCHEMA_VERSION,
        "dog_name": snap.dog_name,
        "tasks": [_task_to_dict(t) for t in snap.tasks],
        "photo_paths": {slot.value: paths[slot] for slot in PhotoSlot},
        "has_onboarded": snap.has_onboarded,
        "logs": [_log_to_dict(e) for e in snap.logs],
    }


# ---- decode ----


def _require(obj: dict[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    if key not in obj:
        raise CorruptDataError(f"{where}: missing '{key}'")
    val = obj[key]
    if not isinstance(val, kind):
        raise CorruptDataError(f"{where}: '{key}' has wrong type {type(val).__name__}")
    return clean_text(val) if isinstance(val, str) else val


def _parse_timestamp(raw: str, where: str) -> datetime:
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError as e:
        raise CorruptDataError(f"{where}: bad timestamp {raw!r}") from e
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def _task_from_dict(raw: Any, i: int) -> Task:
    where = f"tasks[{i}]"
    if not isinstance(raw, dict):
        raise CorruptDataError(f"{where}: expected object")
    return Task(
        id=_require(raw, "id", str, where),
        name=_require(raw, "name", str, where),
        is_selected=_require(raw, "is_selected", bool, where),
        color=_require(raw, "color", str, where),
    )


def _log_from_dict(raw: Any, i: int) -> LogEntry:
    where = f"logs[{i}]"
    if not isinstance(raw, dict):
        raise CorruptDataError(f"{where}: expected object")
    return LogEntry(
        id=_require(raw, "id", str, where),
        task_name=_require(raw, "task_name", str, where),
        timestamp=_parse_timestamp(_require(raw, "timestamp", str, where), where),
    )


def _photo_paths_from_dict(raw: Any) -> PhotoPaths:
    paths = empty_photo_paths()
    if raw is None:
        return paths
    if not isinstance(raw, dict):
        raise CorruptDataError("photo_paths: expected object")
    for key, rel in raw.items():
        slot = PhotoSlot.parse(key)
        if slot is None:
            raise CorruptDataError(f"photo_paths: unknown slot {key!r}")
        if rel is not None and not isinstance(rel, str):
            raise CorruptDataError(f"photo_paths.{key}: expected string or null")
        paths[slot] = rel or None
    return paths


def snapshot_from_dict(data: Any) -> PersistedSnapshot:
    """
    Strict decode. Any shape problem raises CorruptDataError.

    Files without schema_version are treated as version 1. The legacy
    `selected_task_names` cache is ignored.
    """
    if not isinstance(data, dict):
        raise CorruptDataError("snapshot: expected a JSON object")

    version = data.get("schema_version", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        raise CorruptDataError(f"snapshot: bad schema_version {version!r}")
    if version > SCHEMA_VERSION:
        raise CorruptDataError(
            f"snapshot: schema_version {version} is newer than supported {SCHEMA_VERSION}"
        )

    tasks_raw = _require(data, "tasks", list, "snapshot")
    logs_raw = _require(data, "logs", list, "snapshot")

    return PersistedSnapshot(
        dog_name=_require(data, "dog_name", str, "snapshot"),
        tasks=[_task_from_dict(t, i) for i, t in enumerate(tasks_raw)],
        photo_paths=_photo_paths_from_dict(data.get("photo_paths")),
        has_onboarded=_require(data, "has_onboarded", bool, "snapshot"),
        logs=[_log_from_dict(e, i) for i, e in enumerate(logs_raw)],
        schema_version=SCHEMA_VERSION,
    )
