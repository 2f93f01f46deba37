# src/puptrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads the snapshot (falling back to defaults when missing or unreadable),
- wires the stores into an AppState.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import get_settings
from ..core.errors import CorruptDataError, StorageIOError
from ..core.ports import SnapshotBackend
from ..core.state import AppState
from ..logs.log_store import LogStore
from ..photos.photo_store import PhotoStore
from ..storage.snapshot import PersistedSnapshot
from ..storage.snapshot_store import JsonSnapshotStore
from ..tasks.task_models import default_tasks
from ..tasks.task_registry import TaskRegistry

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.snapshot_path).parent.mkdir(parents=True, exist_ok=True)


def resolve_timezone(name: str | None) -> tzinfo | None:
    """IANA zone for the local calendar; None means the system zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using system local time.", name)
        return None


def load_snapshot(backend: SnapshotBackend) -> PersistedSnapshot | None:
    """Snapshot from the backend, or None when absent/unreadable (never raises)."""
    try:
        return backend.load()
    except CorruptDataError:
        logger.exception("Snapshot is corrupt; starting from defaults.")
    except StorageIOError:
        logger.exception("Snapshot could not be read; starting from defaults.")
    return None


def create_initial_state(*, settings=None, backend: SnapshotBackend | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and backend injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if backend is None:
        backend = JsonSnapshotStore(settings.snapshot_path)

    tz = resolve_timezone(getattr(settings, "timezone", None))
    snap = load_snapshot(backend)
    photos_dir_name = getattr(settings, "photos_dir_name", "Photos")

    if snap is None:
        state = AppState(
            settings=settings,
            backend=backend,
            tasks=TaskRegistry(default_tasks()),
            logs=LogStore(tz=tz),
            photos=PhotoStore(settings.data_dir, photos_dir_name=photos_dir_name),
            tz=tz,
        )
        logger.info("Starting with default state (no usable snapshot).")
        return state

    return AppState(
        settings=settings,
        backend=backend,
        tasks=TaskRegistry(snap.tasks),
        logs=LogStore(snap.logs, tz=tz),
        photos=PhotoStore(settings.data_dir, snap.photo_paths, photos_dir_name=photos_dir_name),
        dog_name=snap.dog_name,
        has_onboarded=snap.has_onboarded,
        tz=tz,
    )
