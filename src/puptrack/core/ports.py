# src/puptrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

AppState depends on a Protocol instead of the concrete JSON file store,
so tests can inject an in-memory (or failing) backend.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..storage.snapshot import PersistedSnapshot


class SnapshotBackend(Protocol):
    """Durable home of the whole-state snapshot."""

    def save(self, snapshot: PersistedSnapshot) -> None: ...

    def load(self) -> PersistedSnapshot | None: ...
