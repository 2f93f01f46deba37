# src/puptrack/photos/photo_store.py

from __future__ import annotations

import contextlib
import io
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..core.errors import PhotoWriteError
from .photo_models import PhotoSlot

logger = logging.getLogger(__name__)

PHOTO_FORMAT = "PNG"
PHOTO_SUFFIX = ".png"
_PNG_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}

PhotoPaths = dict[PhotoSlot, str | None]


def empty_photo_paths() -> PhotoPaths:
    return {slot: None for slot in PhotoSlot}


class PhotoStore:
    """
    One image file per slot under <root>/<photos_dir_name>/, overwritten on update.

    The slot -> relative path map is part of the snapshot; the bytes are not.
    """

    def __init__(
        self,
        root: str | Path,
        paths: Mapping[PhotoSlot, str | None] | None = None,
        *,
        photos_dir_name: str = "Photos",
    ) -> None:
        self._root = Path(root)
        self._photos_dir_name = photos_dir_name
        self._paths: PhotoPaths = empty_photo_paths()
        if paths:
            for slot, rel in paths.items():
                self._paths[PhotoSlot(slot)] = rel

    @property
    def root(self) -> Path:
        return self._root

    def paths(self) -> PhotoPaths:
        return dict(self._paths)

    def relative_path_for(self, slot: PhotoSlot) -> str:
        return f"{self._photos_dir_name}/{slot.value}{PHOTO_SUFFIX}"

    @staticmethod
    def _to_image(image: bytes | Image.Image) -> Image.Image:
        if isinstance(image, Image.Image):
            return image
        try:
            img = Image.open(io.BytesIO(image))
            img.load()
        except (UnidentifiedImageError, OSError) as e:
            raise PhotoWriteError(f"unreadable image data: {e}") from e
        return img

    def set_photo(self, slot: PhotoSlot, image: bytes | Image.Image) -> str:
        """
        Encode `image` as PNG and atomically replace the slot's file.

        Returns the recorded relative path. On failure the path map is left
        untouched and PhotoWriteError is raised.
        """
        slot = PhotoSlot(slot)
        rel = self.relative_path_for(slot)
        target = self._root / rel
        tmp = target.with_name(target.name + ".tmp")

        try:
            img = self._to_image(image)
            if img.mode not in _PNG_MODES:
                img = img.convert("RGBA")
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "wb") as f:
                img.save(f, format=PHOTO_FORMAT)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, target)
        except PhotoWriteError:
            logger.exception("Failed to decode photo for slot=%s", slot.value)
            raise
        except (OSError, ValueError) as e:
            logger.exception("Failed to write photo for slot=%s path=%s", slot.value, target)
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PhotoWriteError(f"could not write photo for {slot.value}: {e}") from e

        self._paths[slot] = rel
        logger.info("Photo saved slot=%s path=%s", slot.value, rel)
        return rel

    def get_photo(self, slot: PhotoSlot) -> bytes | None:
        """Stored PNG bytes, or None if nothing is recorded or the file vanished."""
        rel = self._paths.get(PhotoSlot(slot))
        if not rel:
            return None
        full = self._root / rel
        try:
            return full.read_bytes()
        except FileNotFoundError:
            logger.warning("Photo file missing slot=%s path=%s", slot, full)
            return None
        except OSError:
            logger.exception("Failed to read photo slot=%s path=%s", slot, full)
            return None
