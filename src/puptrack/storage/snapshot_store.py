# src/puptrack/storage/snapshot_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.errors import CorruptDataError, SnapshotWriteError, StorageIOError
from .snapshot import PersistedSnapshot, snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)


class JsonSnapshotStore:
    """
    Whole-state JSON file at a fixed path.

    Writes go to "<name>.tmp" next to the target and are moved into place with
    os.replace, so readers only ever see the previous or the new complete file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, snapshot: PersistedSnapshot) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to save snapshot to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise SnapshotWriteError(f"could not write snapshot {self._path}: {e}") from e

        logger.debug(
            "Snapshot saved path=%s tasks=%d logs=%d",
            self._path,
            len(snapshot.tasks),
            len(snapshot.logs),
        )

    def load(self) -> PersistedSnapshot | None:
        """None if there is no file yet; CorruptDataError if it cannot be decoded."""
        if not self._path.exists():
            return None

        try:
            raw = self._path.read_text("utf-8")
        except UnicodeDecodeError as e:
            logger.error("Snapshot is not valid UTF-8: %s", self._path)
            raise CorruptDataError(f"snapshot {self._path} is not UTF-8") from e
        except OSError as e:
            logger.exception("Failed to read snapshot %s", self._path)
            raise StorageIOError(f"could not read snapshot {self._path}: {e}") from e

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            logger.error("Snapshot is not valid JSON: %s (%s)", self._path, e)
            raise CorruptDataError(f"snapshot {self._path} is not valid JSON") from e

        try:
            snap = snapshot_from_dict(data)
        except CorruptDataError as e:
            logger.error("Snapshot has unexpected shape: %s (%s)", self._path, e)
            raise

        logger.info(
            "Snapshot loaded path=%s tasks=%d logs=%d",
            self._path,
            len(snap.tasks),
            len(snap.logs),
        )
        return snap
