# src/puptrack/core/state.py

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import tzinfo
from typing import Any, TypeVar

from ..logs.log_store import LogStore
from ..photos.photo_store import PhotoStore
from ..storage.snapshot import PersistedSnapshot
from ..tasks.task_registry import TaskRegistry
from .errors import StorageIOError
from .ports import SnapshotBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AppState:
    """
    Explicitly owned model state: one instance per running boundary (CLI, tests...).

    All mutations go through `mutate`, which holds `lock` across
    "change memory, then save the whole snapshot". Save failures are logged and
    absorbed: memory stays authoritative until the next successful save.
    """

    settings: Any
    backend: SnapshotBackend
    tasks: TaskRegistry
    logs: LogStore
    photos: PhotoStore

    dog_name: str = ""
    has_onboarded: bool = False
    tz: tzinfo | None = None

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    last_save_ok: bool = True

    def to_snapshot(self) -> PersistedSnapshot:
        with self.lock:
            return PersistedSnapshot(
                dog_name=self.dog_name,
                tasks=[replace(t) for t in self.tasks.list()],
                photo_paths=self.photos.paths(),
                has_onboarded=self.has_onboarded,
                logs=self.logs.all(),
            )

    def save(self) -> bool:
        """Best-effort full save. Returns False (after logging) on failure."""
        with self.lock:
            snap = self.to_snapshot()
            try:
                self.backend.save(snap)
            except StorageIOError:
                logger.exception("Snapshot save failed; keeping in-memory state.")
                self.last_save_ok = False
                return False
            self.last_save_ok = True
            return True

    def mutate(self, action: Callable[[], T]) -> T:
        """
        Run `action` and persist if it changed something.

        Falsy results (None/False/empty list) mean "nothing happened" and skip
        the save; exceptions propagate and skip it too.
        """
        with self.lock:
            result = action()
            if result:
                self.save()
            return result

    def read(self, query: Callable[[], T]) -> T:
        with self.lock:
            return query()

