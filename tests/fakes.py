# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from puptrack.core.errors import CorruptDataError, SnapshotWriteError
from puptrack.storage.snapshot import PersistedSnapshot, snapshot_from_dict, snapshot_to_dict


@dataclass(slots=True)
class FakeSnapshotBackend:
    """
    In-memory SnapshotBackend used by unit tests.

    - Records every saved snapshot (as its JSON-shaped dict, so later
      in-memory mutations cannot leak into what was "written")
    - Can be told to fail saves or to report corrupt data on load
    """

    stored: dict[str, Any] | None = None
    saves: list[dict[str, Any]] = field(default_factory=list)
    fail_saves: bool = False
    corrupt_on_load: bool = False

    def save(self, snapshot: PersistedSnapshot) -> None:
        if self.fail_saves:
            raise SnapshotWriteError("disk full (fake)")
        data = snapshot_to_dict(snapshot)
        self.saves.append(data)
        self.stored = data

    def load(self) -> PersistedSnapshot | None:
        if self.corrupt_on_load:
            raise CorruptDataError("garbage (fake)")
        if self.stored is None:
            return None
        return snapshot_from_dict(self.stored)

    @property
    def save_count(self) -> int:
        return len(self.saves)
