# src/puptrack/photos/photo_api.py

from __future__ import annotations

from datetime import datetime

from PIL import Image

from ..core.state import AppState
from .photo_models import PhotoSlot, current_slot


def set_photo(state: AppState, slot: PhotoSlot, image: bytes | Image.Image) -> str:
    """Store the slot's photo and persist. PhotoWriteError leaves everything unchanged."""
    return state.mutate(lambda: state.photos.set_photo(slot, image))


def get_photo(state: AppState, slot: PhotoSlot) -> bytes | None:
    return state.read(lambda: state.photos.get_photo(slot))


def current_photo(state: AppState, now: datetime | None = None) -> tuple[PhotoSlot, bytes | None]:
    """Slot for the current time of day plus its photo, if any."""
    if now is None:
        now = datetime.now().astimezone(state.tz)
    slot = current_slot(now)
    return slot, get_photo(state, slot)
