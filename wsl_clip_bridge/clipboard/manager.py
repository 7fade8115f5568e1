"""xclip protocol emulation on top of the file-backed clipboard slots.

Each process invocation is one complete transaction: the config is loaded
once, the TTL resolved from it, and a single list/output/input operation
runs against the storage directory. Nothing persists in memory between
invocations.

Exit codes follow xclip: 0 when content was served or stored, 1 when it is
unavailable. Rejections (unsupported format, access policy, oversized input)
raise BridgeError subclasses; the CLI reports them and exits 1.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from wsl_clip_bridge.clipboard.imaging import downscale_if_needed
from wsl_clip_bridge.clipboard.storage import ClipboardStorage
from wsl_clip_bridge.clipboard.types import (
    TARGETS,
    TEXT_PREFIX,
    TEXT_TARGETS,
    SlotKind,
    image_formats_match,
    image_targets,
    slot_for,
)
from wsl_clip_bridge.config.loader import load_config, resolve_ttl
from wsl_clip_bridge.config.schema import BridgeConfig
from wsl_clip_bridge.core.constants import BYTES_PER_MB, DEFAULT_STDIN_LIMIT_MB
from wsl_clip_bridge.core.errors import InputTooLargeError, UnsupportedFormatError
from wsl_clip_bridge.core.validation import validate_file_access

logger = logging.getLogger(__name__)


class ClipboardBridge:
    """The xclip-compatible command surface for one invocation."""

    def __init__(
        self,
        storage: ClipboardStorage,
        config: BridgeConfig | None,
        ttl: float,
    ) -> None:
        """Initialize the bridge.

        Args:
            storage: Slot storage to serve from and write to.
            config: Config for this invocation, or None for built-in defaults.
            ttl: Time-to-live in seconds for cached payloads.
        """
        self._storage = storage
        self._config = config
        self._ttl = ttl

    @classmethod
    def from_environment(cls) -> ClipboardBridge:
        """Build a bridge from the environment, loading the config exactly once."""
        config = load_config()
        return cls(ClipboardStorage(), config, resolve_ttl(config))

    @property
    def storage(self) -> ClipboardStorage:
        return self._storage

    @property
    def config(self) -> BridgeConfig | None:
        return self._config

    @property
    def ttl(self) -> float:
        return self._ttl

    # --- consumer side ---

    def _fresh_or_evict(self, slot: SlotKind) -> bool:
        """True if the slot is fresh; otherwise drop whatever stale file is there."""
        if self._storage.is_fresh(slot, self._ttl):
            return True
        self._storage.evict_if_present(slot)
        return False

    def targets(self) -> list[str]:
        """MIME types currently available, image formats before text."""
        available: list[str] = []

        if self._fresh_or_evict(SlotKind.IMAGE):
            stored = self._storage.read_image_format()
            if stored is not None:
                available.extend(image_targets(stored))

        if self._fresh_or_evict(SlotKind.TEXT):
            available.extend(TEXT_TARGETS)

        return available

    def output(self, mime: str, stdout: BinaryIO) -> int:
        """Write the cached payload for ``mime`` to ``stdout``.

        Returns:
            0 if the payload was written, 1 if nothing fresh matches.

        Raises:
            OSError: If a fresh payload cannot be read or written.
        """
        slot = slot_for(mime)
        if slot is None:
            logger.debug("No slot for requested type %s", mime)
            return 1

        if not self._fresh_or_evict(slot):
            return 1

        if slot is SlotKind.IMAGE:
            stored = self._storage.read_image_format()
            if stored is None or not image_formats_match(mime, stored):
                # Still valid for its own format, so it stays
                logger.debug("Image stored as %s, requested %s", stored, mime)
                return 1

        stdout.write(self._storage.read(slot))
        stdout.flush()
        return 0

    # --- producer side ---

    def _stdin_limit(self) -> int | None:
        """Byte limit for image payloads read from stdin (None = unbounded)."""
        if self._config is None or self._config.max_file_size_mb is None:
            return DEFAULT_STDIN_LIMIT_MB * BYTES_PER_MB
        return self._config.max_file_size_bytes

    def _read_source(self, source_path: str | None, stdin: BinaryIO) -> bytes:
        if source_path is not None:
            validate_file_access(source_path, self._config)
            return Path(source_path).read_bytes()
        return stdin.read()

    def _read_image_source(self, source_path: str | None, stdin: BinaryIO) -> bytes:
        if source_path is not None:
            return self._read_source(source_path, stdin)

        limit = self._stdin_limit()
        if limit is None:
            return stdin.read()

        # One extra byte tells "exactly at the limit" apart from "over it"
        data = stdin.read(limit + 1)
        if len(data) > limit:
            raise InputTooLargeError(limit)
        return data

    def input(self, mime: str, stdin: BinaryIO, source_path: str | None = None) -> int:
        """Store a new payload for ``mime`` from ``source_path`` or ``stdin``.

        Returns:
            0 once the payload is stored.

        Raises:
            UnsupportedFormatError: ``mime`` is neither text nor a supported image.
            AccessDeniedError: ``source_path`` fails the access policy.
            InputTooLargeError: The stdin image payload exceeds the size limit.
            OSError: Reading the source or writing the slot failed.
        """
        slot = slot_for(mime)
        if slot is None:
            raise UnsupportedFormatError(mime)

        self._storage.ensure()

        if slot is SlotKind.TEXT:
            data = self._read_source(source_path, stdin)
            self._storage.write_text(data)
            logger.debug("Stored %d bytes of text", len(data))
            return 0

        data = self._read_image_source(source_path, stdin)
        max_dim = self._config.max_image_dimension if self._config else None
        data = downscale_if_needed(data, mime, max_dim)
        fmt = self._storage.write_image(data, mime)
        logger.debug("Stored %d bytes of %s", len(data), fmt)
        return 0

    # --- dispatch ---

    def run(
        self,
        *,
        output_mode: bool,
        mime: str | None,
        input_file: str | None,
        stdin: BinaryIO,
        stdout: BinaryIO,
    ) -> int:
        """Run one xclip-style invocation and return its exit code."""
        if output_mode:
            if mime is None or mime == TARGETS:
                for target in self.targets():
                    stdout.write(f"{target}\n".encode("utf-8"))
                stdout.flush()
                return 0
            return self.output(mime, stdout)

        return self.input(mime or TEXT_PREFIX, stdin, input_file)
