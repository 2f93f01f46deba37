# src/puptrack/logs/log_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from ..core.state import AppState
from .log_models import LogEntry

logger = logging.getLogger(__name__)


def log_task(state: AppState, task_name: str, at: datetime | None = None) -> LogEntry:
    """Record a completion now (or at `at`) and persist."""
    entry = state.mutate(lambda: state.logs.log_task(task_name, at))
    logger.info("Logged %r at %s", entry.task_name, entry.timestamp.isoformat())
    return entry


def remove_log(state: AppState, log_id: str) -> bool:
    """Delete one log by id; unknown ids are a silent no-op (returns False)."""
    return state.mutate(lambda: state.logs.remove_by_id(log_id))


def remove_logs_for_day(
    state: AppState, day: date | datetime, indices: Iterable[int]
) -> list[LogEntry]:
    """Delete by positions inside the day's filtered list (not global positions)."""
    idx = list(indices)
    return state.mutate(lambda: state.logs.remove_by_day_indices(day, idx))


def logs_for_day(state: AppState, day: date | datetime) -> list[LogEntry]:
    return state.read(lambda: state.logs.logs_for_day(day))


def logs_for_month(state: AppState, month: date | datetime) -> list[LogEntry]:
    return state.read(lambda: state.logs.logs_for_month(month))


def summary_for_month(state: AppState, month: date | datetime) -> dict[str, int]:
    return state.read(lambda: state.logs.summary_for_month(month))
