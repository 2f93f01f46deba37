# src/puptrack/core/errors.py

"""
Error taxonomy.

Empty/whitespace-only input is not an error: guarded operations simply return
without effect. Storage failures are OSError subclasses so callers that already
handle OSError keep working.
"""

from __future__ import annotations


class PupTrackError(Exception):
    """Base class for all puptrack errors."""


class NotFoundError(PupTrackError, LookupError):
    """A mutation referenced an id that does not exist."""


class StorageIOError(PupTrackError, OSError):
    """Disk read/write failure."""


class SnapshotWriteError(StorageIOError):
    pass


class PhotoWriteError(StorageIOError):
    pass


class CorruptDataError(PupTrackError, ValueError):
    """Snapshot file exists but cannot be decoded."""
