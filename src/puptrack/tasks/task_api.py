# src/puptrack/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .task_models import Task

logger = logging.getLogger(__name__)


def list_tasks(state: AppState) -> list[Task]:
    return state.read(state.tasks.list)


def selected_tasks(state: AppState) -> list[Task]:
    return state.read(state.tasks.selected)


def toggle_task(state: AppState, task_id: str) -> Task:
    """Flip is_selected and persist. NotFoundError for an unknown id (nothing saved)."""
    return state.mutate(lambda: state.tasks.toggle(task_id))


def add_custom_task(state: AppState, raw_name: str | None) -> Task | None:
    """
    Add an auto-selected task; blank names are silently ignored (returns None).
    """
    task = state.mutate(lambda: state.tasks.add_custom(raw_name))
    if task is None:
        logger.debug("Ignored blank custom task name.")
    else:
        logger.info("Custom task added name=%r color=%s", task.name, task.color)
    return task
