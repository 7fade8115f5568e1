"""Optional downscaling of images before they are cached.

Large screenshots are shrunk so their longer side fits the configured
maximum. The transform never fails outward: bytes Pillow cannot decode,
resize or re-encode are stored exactly as received.
"""
from __future__ import annotations

import io
import logging

from PIL import Image

logger = logging.getLogger(__name__)

# Pillow encoder names by MIME type
PIL_FORMATS: dict[str, str] = {
    "image/png": "PNG",
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/gif": "GIF",
    "image/webp": "WEBP",
}

# Modes the JPEG encoder accepts as-is
_JPEG_MODES = frozenset({"RGB", "L", "CMYK"})

_UNFILTERED_MODES = frozenset({"P", "1"})

_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def scaled_size(width: int, height: int, max_dim: int) -> tuple[int, int]:
    """Dimensions after scaling so the longer side equals ``max_dim``.

    Both sides are scaled by ``max_dim / max(width, height)`` and truncated,
    not rounded. Integer arithmetic keeps the longer side exactly
    ``max_dim``.
    """
    current_max = max(width, height)
    return width * max_dim // current_max, height * max_dim // current_max


def _encode(img: Image.Image, pil_format: str) -> bytes:
    if pil_format == "JPEG" and img.mode not in _JPEG_MODES:
        img = img.convert("RGB")
    out = io.BytesIO()
    img.save(out, format=pil_format)
    return out.getvalue()


def downscale_if_needed(data: bytes, mime: str, max_dim: int | None) -> bytes:
    """Shrink an image whose longer side exceeds ``max_dim``.

    Args:
        data: Encoded image bytes.
        mime: Declared MIME type; the output is re-encoded in this format.
        max_dim: Maximum side length in pixels. None or 0 disables scaling.

    Returns:
        The re-encoded, downscaled image, or ``data`` unchanged when no
        scaling is needed or any step fails.
    """
    if not max_dim:
        return data

    pil_format = PIL_FORMATS.get(mime)
    if pil_format is None:
        return data

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except _DECODE_ERRORS as e:
        logger.debug("Not an image Pillow can decode, storing as-is: %s", e)
        return data

    width, height = img.size
    if max(width, height) <= max_dim:
        return data

    new_size = scaled_size(width, height, max_dim)
    if 0 in new_size:
        logger.debug("Downscale of %sx%s truncates to zero, storing original", width, height)
        return data

    # Pillow resizes palette and bilevel images with NEAREST whatever filter is asked for
    if img.mode in _UNFILTERED_MODES:
        img = img.convert("RGBA" if "transparency" in img.info else "RGB")

    try:
        resized = img.resize(new_size, Image.Resampling.LANCZOS)
        encoded = _encode(resized, pil_format)
    except (OSError, ValueError, KeyError) as e:
        logger.debug("Downscale to %sx%s failed, storing original: %s", *new_size, e)
        return data

    logger.info(
        "Downscaled %s from %sx%s to %sx%s", mime, width, height, *new_size
    )
    return encoded
