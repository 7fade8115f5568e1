"""Clipboard slot kinds and MIME handling."""
from __future__ import annotations

from enum import Enum


class SlotKind(Enum):
    """The two independent clipboard slots."""

    TEXT = "text"
    IMAGE = "image"


TEXT_PREFIX = "text/plain"
TARGETS = "TARGETS"

# Lines printed for a fresh text slot, in xclip's order
TEXT_TARGETS = ("text/plain;charset=utf-8", "STRING")

JPEG = "image/jpeg"
JPG_ALIAS = "image/jpg"

SUPPORTED_IMAGE_TYPES = frozenset(
    {"image/png", JPEG, JPG_ALIAS, "image/gif", "image/webp"}
)


def is_text(mime: str) -> bool:
    """Any ``text/plain`` variant (charset parameters included)."""
    return mime.startswith(TEXT_PREFIX)


def is_image(mime: str) -> bool:
    """One of the supported image MIME types (exact match)."""
    return mime in SUPPORTED_IMAGE_TYPES


def slot_for(mime: str) -> SlotKind | None:
    """Slot a MIME type maps to, or None if it is unsupported."""
    if is_text(mime):
        return SlotKind.TEXT
    if is_image(mime):
        return SlotKind.IMAGE
    return None


def normalize_image_mime(mime: str) -> str:
    """Normalize ``image/jpg`` to ``image/jpeg``; other types pass through."""
    return JPEG if mime == JPG_ALIAS else mime


def image_formats_match(requested: str, stored: str) -> bool:
    """True if a request for ``requested`` can be served by a stored ``stored``.

    ``image/jpg`` and ``image/jpeg`` are interchangeable in both directions.
    """
    return normalize_image_mime(requested) == normalize_image_mime(stored)


def image_targets(stored: str) -> list[str]:
    """Target lines for a stored image format (jpeg also lists the jpg alias)."""
    if stored == JPEG:
        return [JPEG, JPG_ALIAS]
    return [stored]
