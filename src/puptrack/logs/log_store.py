# src/puptrack/logs/log_store.py

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from ..core.calendar_grid import month_bounds
from ..core.text import clean_text
from .log_models import LogEntry

logger = logging.getLogger(__name__)


class LogStore:
    """
    In-memory log collection.

    Canonical order is insertion order with new entries at the front
    (newest-first while nothing was back-dated). Queries keep that order
    instead of re-sorting.

    Calendar questions ("which day is this?") are answered in `tz`;
    tz=None means the system local zone.
    """

    def __init__(self, logs: Iterable[LogEntry] | None = None, *, tz: tzinfo | None = None) -> None:
        self._logs: list[LogEntry] = list(logs or [])
        self._tz = tz

    def __len__(self) -> int:
        return len(self._logs)

    def all(self) -> list[LogEntry]:
        return list(self._logs)

    # ---- time helpers ----

    def _aware(self, ts: datetime) -> datetime:
        if ts.tzinfo is not None:
            return ts
        # naive input is a wall-clock reading in the local calendar
        return ts.astimezone() if self._tz is None else ts.replace(tzinfo=self._tz)

    def local_date(self, ts: datetime) -> date:
        return self._aware(ts).astimezone(self._tz).date()

    def _day_of(self, day: date | datetime) -> date:
        return self.local_date(day) if isinstance(day, datetime) else day

    # ---- mutators ----

    def log_task(self, task_name: str, at: datetime | None = None) -> LogEntry:
        ts = self._aware(at) if at is not None else datetime.now().astimezone(self._tz)
        entry = LogEntry(task_name=clean_text(task_name), timestamp=ts)
        self._logs.insert(0, entry)
        logger.debug("Log added id=%s task=%r at=%s", entry.id, entry.task_name, ts.isoformat())
        return entry

    def remove_by_id(self, log_id: str) -> bool:
        for idx, entry in enumerate(self._logs):
            if entry.id == log_id:
                del self._logs[idx]
                logger.debug("Log removed id=%s", log_id)
                return True
        return False

    def remove_by_day_indices(self, day: date | datetime, indices: Iterable[int]) -> list[LogEntry]:
        """
        Remove entries addressed by position inside logs_for_day(day).

        Positions are resolved against the filtered view taken before any
        removal; out-of-range positions are ignored. Returns removed entries.
        """
        day_logs = self.logs_for_day(day)
        doomed_ids: set[str] = set()
        for i in indices:
            if 0 <= i < len(day_logs):
                doomed_ids.add(day_logs[i].id)
        if not doomed_ids:
            return []

        removed = [e for e in self._logs if e.id in doomed_ids]
        self._logs = [e for e in self._logs if e.id not in doomed_ids]
        logger.debug("Removed %d log(s) for day=%s", len(removed), self._day_of(day))
        return removed

    # ---- queries ----

    def logs_for_day(self, day: date | datetime) -> list[LogEntry]:
        target = self._day_of(day)
        return [e for e in self._logs if self.local_date(e.timestamp) == target]

    def logs_for_month(self, month: date | datetime) -> list[LogEntry]:
        start, end = month_bounds(self._day_of(month))
        return [e for e in self._logs if start <= self.local_date(e.timestamp) < end]

    def summary_for_month(self, month: date | datetime) -> dict[str, int]:
        """task_name -> count for the month, keys in ascending name order."""
        counts = Counter(e.task_name for e in self.logs_for_month(month))
        return {name: counts[name] for name in sorted(counts)}
