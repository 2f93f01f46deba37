# src/puptrack/core/onboarding.py

from __future__ import annotations

import logging

from .state import AppState
from .text import clean_text

logger = logging.getLogger(__name__)


def set_dog_name(state: AppState, name: str | None) -> bool:
    clean = clean_text(name or "").strip()
    if not clean:
        return False

    def _apply() -> bool:
        if clean == state.dog_name:
            return False
        state.dog_name = clean
        return True

    changed = state.mutate(_apply)
    if changed:
        logger.info("Dog name set to %r", clean)
    return changed


def complete_onboarding(state: AppState) -> None:
    def _apply() -> bool:
        state.has_onboarded = True
        return True

    state.mutate(_apply)
    logger.info("Onboarding completed.")
