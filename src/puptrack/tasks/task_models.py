# src/puptrack/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

MAX_TASK_NAME_LEN = 25

# Rotation order for custom tasks: palette[len(tasks) % len(palette)].
COLOR_PALETTE: tuple[str, ...] = (
    "red",
    "orange",
    "yellow",
    "green",
    "mint",
    "teal",
    "cyan",
    "blue",
    "indigo",
    "purple",
    "pink",
    "brown",
)

FALLBACK_COLOR = "gray"


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class Task:
    """
    A recurring care task.

    Identity is `id`; names are not unique. `is_selected` is flipped in place
    by the registry, everything else is fixed after creation.
    """

    name: str
    is_selected: bool = False
    color: str = FALLBACK_COLOR
    id: str = field(default_factory=new_id)

    @property
    def display_color(self) -> str:
        c = (self.color or "").strip().lower()
        return c if c in COLOR_PALETTE else FALLBACK_COLOR


DEFAULT_TASKS: tuple[tuple[str, str], ...] = (
    ("Toothbrushing", "mint"),
    ("Cut Nails", "orange"),
    ("Throwing up", "yellow"),
    ("Brushing Fur", "pink"),
    ("Bath", "blue"),
)


def default_tasks() -> list[Task]:
    """Fresh built-in tasks (new ids on every call), all unselected."""
    return [Task(name=name, is_selected=False, color=color) for name, color in DEFAULT_TASKS]
