"""File-backed clipboard slots and the xclip protocol built on them."""
from wsl_clip_bridge.clipboard.imaging import downscale_if_needed
from wsl_clip_bridge.clipboard.manager import ClipboardBridge
from wsl_clip_bridge.clipboard.storage import ClipboardStorage, is_fresh
from wsl_clip_bridge.clipboard.types import (
    SUPPORTED_IMAGE_TYPES,
    TARGETS,
    SlotKind,
    normalize_image_mime,
)

__all__ = [
    "ClipboardBridge",
    "ClipboardStorage",
    "SlotKind",
    "SUPPORTED_IMAGE_TYPES",
    "TARGETS",
    "downscale_if_needed",
    "is_fresh",
    "normalize_image_mime",
]
