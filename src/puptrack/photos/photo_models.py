# src/puptrack/photos/photo_models.py

from __future__ import annotations

from datetime import datetime
from enum import StrEnum


class PhotoSlot(StrEnum):
    """Time-of-day bucket used to pick a reference photo."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str | None) -> PhotoSlot | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


def slot_for_hour(hour: int) -> PhotoSlot:
    """[6,12) -> morning, [12,18) -> afternoon, everything else -> night."""
    if 6 <= hour < 12:
        return PhotoSlot.MORNING
    if 12 <= hour < 18:
        return PhotoSlot.AFTERNOON
    return PhotoSlot.NIGHT


def current_slot(now: datetime | None = None) -> PhotoSlot:
    if now is None:
        now = datetime.now().astimezone()
    return slot_for_hour(now.hour)
