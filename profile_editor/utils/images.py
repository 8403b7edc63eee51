"""Image inspection helpers for uploaded avatars."""

import io
import logging
from typing import Optional, Set

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Pillow format name -> (stored extension, MIME type, accepted extensions)
IMAGE_FORMATS = {
    "PNG": ("png", "image/png", {"png"}),
    "JPEG": ("jpg", "image/jpeg", {"jpg", "jpeg"}),
    "BMP": ("bmp", "image/bmp", {"bmp"}),
    "GIF": ("gif", "image/gif", {"gif"}),
}


def sniff_format(content: bytes) -> Optional[str]:
    """
    Identify the image format from the file content, ignoring its name.

    Returns:
        Pillow format name ("PNG", "JPEG", ...) or None when the bytes
        are not an image Pillow can open.
    """
    if not content:
        return None
    try:
        with Image.open(io.BytesIO(content)) as img:
            return img.format
    except (UnidentifiedImageError, OSError, EOFError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Content is not a readable image: {e}")
        return None


def guess_extensions(content: bytes) -> Set[str]:
    """Return every extension consistent with the sniffed content."""
    fmt = sniff_format(content)
    if fmt not in IMAGE_FORMATS:
        return set()
    return set(IMAGE_FORMATS[fmt][2])


def guess_extension(content: bytes) -> Optional[str]:
    """Return the canonical extension to store the content under."""
    fmt = sniff_format(content)
    return IMAGE_FORMATS[fmt][0] if fmt in IMAGE_FORMATS else None


def guess_mime_type(content: bytes) -> Optional[str]:
    """Return the MIME type of the sniffed content."""
    fmt = sniff_format(content)
    return IMAGE_FORMATS[fmt][1] if fmt in IMAGE_FORMATS else None
