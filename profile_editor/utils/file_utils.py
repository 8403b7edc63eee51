"""File handling utilities."""

import base64
import html
import logging
from pathlib import Path
from typing import Optional
from .images import guess_mime_type

logger = logging.getLogger(__name__)

class FileUtils:
    """Utilities for file operations."""

    @staticmethod
    def load_logo_bytes(logo_candidates: list) -> Optional[bytes]:
        """Load logo bytes from the first available candidate path."""
        for path in logo_candidates:
            if isinstance(path, str):
                path = Path(path)
            if path.exists():
                try:
                    return path.read_bytes()
                except OSError as e:
                    logger.warning(f"Could not read logo {path}: {e}")
                    continue
        return None

    @staticmethod
    def data_uri(content: bytes) -> str:
        """Encode image bytes as a data URI, typed by the sniffed content."""
        mime = guess_mime_type(content) or "application/octet-stream"
        b64 = base64.b64encode(content).decode()
        return f"data:{mime};base64,{b64}"

    @staticmethod
    def create_image_tag(content: Optional[bytes], height: int = 86, alt: str = "", rounded: bool = False) -> str:
        """Create an HTML img tag for inline image bytes."""
        if not content:
            return ""

        style = f"height:{height}px;"
        if rounded:
            style += f"width:{height}px;border-radius:50%;object-fit:cover;"
        return f"<img src='{FileUtils.data_uri(content)}' alt='{html.escape(alt, quote=True)}' style='{style}'/>"

    @staticmethod
    def create_initials_tag(initials: str, size: int = 40) -> str:
        """Create a round placeholder showing the user's initials."""
        return (
            f"<div class='avatar-initials' style='width:{size}px;height:{size}px;"
            f"line-height:{size}px;font-size:{size * 2 // 5}px'>{html.escape(initials)}</div>"
        )
