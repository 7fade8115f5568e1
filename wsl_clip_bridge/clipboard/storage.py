"""File-backed storage for the text and image clipboard slots."""
from __future__ import annotations

import logging
import stat
import time
from pathlib import Path

from wsl_clip_bridge.clipboard.types import SlotKind, normalize_image_mime
from wsl_clip_bridge.core.constants import (
    IMAGE_FILE_NAME,
    IMAGE_FORMAT_FILE_NAME,
    TEXT_FILE_NAME,
)
from wsl_clip_bridge.core.paths import resolve_storage_dir
from wsl_clip_bridge.core.secure_io import (
    remove_quietly,
    secure_mkdir,
    secure_write_atomic,
)

logger = logging.getLogger(__name__)


def is_fresh(path: Path, ttl: float, now: float | None = None) -> bool:
    """Whether a slot file is still valid.

    Fresh means: the path is a regular, non-empty file and its age
    (``now - mtime``) is at most ``ttl`` seconds. The boundary is inclusive.
    A modification time in the future counts as not fresh.

    Args:
        path: Slot file.
        ttl: Time-to-live in seconds.
        now: Current time as a Unix timestamp (default: time.time()).
    """
    try:
        st = path.stat()
    except OSError:
        return False

    if not stat.S_ISREG(st.st_mode) or st.st_size == 0:
        return False

    current = time.time() if now is None else now
    elapsed = current - st.st_mtime
    return 0 <= elapsed <= ttl


class ClipboardStorage:
    """The storage directory and its fixed-name slot files.

    Layout::

        <dir>/text.txt      raw text bytes
        <dir>/image.bin     raw image bytes
        <dir>/image.format  MIME type of image.bin (single line)

    Each slot holds exactly one payload; a write replaces it.
    """

    def __init__(self, directory: Path | None = None) -> None:
        """Initialize storage.

        Args:
            directory: Storage directory (default: resolve_storage_dir()).
        """
        self._dir = directory if directory is not None else resolve_storage_dir()

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def text_path(self) -> Path:
        return self._dir / TEXT_FILE_NAME

    @property
    def image_path(self) -> Path:
        return self._dir / IMAGE_FILE_NAME

    @property
    def image_format_path(self) -> Path:
        return self._dir / IMAGE_FORMAT_FILE_NAME

    def payload_path(self, slot: SlotKind) -> Path:
        return self.text_path if slot is SlotKind.TEXT else self.image_path

    def is_fresh(self, slot: SlotKind, ttl: float, now: float | None = None) -> bool:
        return is_fresh(self.payload_path(slot), ttl, now)

    def exists(self, slot: SlotKind) -> bool:
        return self.payload_path(slot).exists()

    def ensure(self) -> None:
        """Create the storage directory (owner-only) if needed."""
        secure_mkdir(self._dir)

    # --- eviction ---

    def evict(self, slot: SlotKind) -> None:
        """Remove a slot's files. Best-effort: failures are ignored."""
        if slot is SlotKind.TEXT:
            removed = remove_quietly(self.text_path)
        else:
            removed = remove_quietly(self.image_path)
            remove_quietly(self.image_format_path)
        if removed:
            logger.debug("Evicted stale %s slot", slot.value)

    def evict_if_present(self, slot: SlotKind) -> None:
        if self.exists(slot):
            self.evict(slot)

    # --- reads ---

    def read_image_format(self) -> str | None:
        """Stored image MIME type, or None if the sidecar is missing or unreadable."""
        try:
            value = self.image_format_path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError):
            return None
        return value or None

    def read(self, slot: SlotKind) -> bytes:
        """Raw payload bytes of a slot.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.payload_path(slot).read_bytes()

    # --- writes ---

    def write_text(self, data: bytes) -> None:
        """Replace the text slot.

        Raises:
            OSError: If the file cannot be written.
        """
        secure_write_atomic(self.text_path, data)

    def write_image(self, data: bytes, mime: str) -> str:
        """Replace the image slot, payload first, then its format sidecar.

        Returns:
            The normalized MIME type recorded in the sidecar.

        Raises:
            OSError: If either file cannot be written.
        """
        fmt = normalize_image_mime(mime)
        secure_write_atomic(self.image_path, data)
        secure_write_atomic(self.image_format_path, fmt)
        return fmt
