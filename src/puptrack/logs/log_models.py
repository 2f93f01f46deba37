# src/puptrack/logs/log_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class LogEntry:
    """
    One completion event.

    `task_name` is a copy of the task's name at logging time, not a reference:
    renaming or dropping a task never touches past logs.
    """

    task_name: str
    timestamp: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
