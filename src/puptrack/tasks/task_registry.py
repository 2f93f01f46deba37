# src/puptrack/tasks/task_registry.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.errors import NotFoundError
from ..core.text import clean_text
from .task_models import COLOR_PALETTE, FALLBACK_COLOR, MAX_TASK_NAME_LEN, Task, default_tasks

logger = logging.getLogger(__name__)


def normalize_task_name(raw: str | None) -> str:
    """Trim whitespace and cut to the user-authored name limit ('' means invalid)."""
    return clean_text(raw or "").strip()[:MAX_TASK_NAME_LEN]


class TaskRegistry:
    """
    Ordered, in-memory list of care tasks.

    Mutators only change memory and report whether something changed;
    persisting is the caller's job (see AppState.mutate).
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks) if tasks is not None else default_tasks()

    def __len__(self) -> int:
        return len(self._tasks)

    def list(self) -> list[Task]:
        return list(self._tasks)

    def selected(self) -> list[Task]:
        return [t for t in self._tasks if t.is_selected]

    def get(self, task_id: str) -> Task:
        for t in self._tasks:
            if t.id == task_id:
                return t
        raise NotFoundError(f"task not found: {task_id}")

    def toggle(self, task_id: str) -> Task:
        task = self.get(task_id)
        task.is_selected = not task.is_selected
        logger.debug("Task toggled id=%s selected=%s", task.id, task.is_selected)
        return task

    def next_color(self) -> str:
        # Based on the current size, not on a running counter.
        return COLOR_PALETTE[len(self._tasks) % len(COLOR_PALETTE)]

    def add_custom(self, raw_name: str | None) -> Task | None:
        name = normalize_task_name(raw_name)
        if not name:
            return None
        task = Task(name=name, is_selected=True, color=self.next_color())
        self._tasks.append(task)
        logger.debug("Custom task added id=%s name=%r color=%s", task.id, task.name, task.color)
        return task

    def color_for(self, task_name: str) -> str:
        """Display color of the first task carrying this name (logs only keep the name)."""
        for t in self._tasks:
            if t.name == task_name:
                return t.display_color
        return FALLBACK_COLOR
