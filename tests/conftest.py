# tests/conftest.py

from __future__ import annotations

import calendar
import io
from datetime import timezone
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

from puptrack.core.state import AppState
from puptrack.logs.log_store import LogStore
from puptrack.photos.photo_store import PhotoStore
from puptrack.tasks.task_models import default_tasks
from puptrack.tasks.task_registry import TaskRegistry

from .fakes import FakeSnapshotBackend


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="puptrack-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        snapshot_path=tmp_path / "data" / "PupTrackData.json",
        photos_dir_name="Photos",
        export_dir=tmp_path / "exports",
        first_weekday=calendar.SUNDAY,
        timezone="UTC",
        csv_quote=False,
    )


@pytest.fixture()
def backend() -> FakeSnapshotBackend:
    return FakeSnapshotBackend()


@pytest.fixture()
def state(settings: SimpleNamespace, backend: FakeSnapshotBackend) -> AppState:
    """
    AppState wired with an in-memory backend and a fixed UTC calendar.

    NOTE: PhotoStore is real (tmp dir) because file handling is part of what we test.
    """
    return AppState(
        settings=settings,
        backend=backend,
        tasks=TaskRegistry(default_tasks()),
        logs=LogStore(tz=timezone.utc),
        photos=PhotoStore(settings.data_dir, photos_dir_name=settings.photos_dir_name),
        tz=timezone.utc,
    )


def make_png(color: tuple[int, int, int] = (200, 120, 40), size: tuple[int, int] = (4, 3)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    return make_png()
