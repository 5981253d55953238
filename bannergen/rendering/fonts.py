"""
Font Loader

Finds TrueType fonts for banner text and caches them per (weight, size).
Search order: configured paths, then common system locations, then
Pillow's built-in default font.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

BOLD = "bold"
REGULAR = "regular"

DEFAULT_FONT_PATHS: Dict[str, Sequence[str]] = {
    BOLD: (
        "/usr/share/fonts/truetype/roboto/unhinted/RobotoTTF/Roboto-Black.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        r"C:\Windows\Fonts\arialbd.ttf",
    ),
    REGULAR: (
        "/usr/share/fonts/truetype/roboto/unhinted/RobotoTTF/Roboto-Regular.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/dejavu/DejaVuSans.ttf",
        "/Library/Fonts/Arial.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        r"C:\Windows\Fonts\arial.ttf",
    ),
}


class FontLoader:
    """Resolves and caches fonts by weight and pixel size."""

    def __init__(self, font_paths: Optional[Dict[str, Iterable[str]]] = None):
        configured = font_paths or {}
        self._search: Dict[str, List[Path]] = {
            weight: [Path(p) for p in configured.get(weight, [])] + [Path(p) for p in defaults]
            for weight, defaults in DEFAULT_FONT_PATHS.items()
        }
        self._cache: Dict[Tuple[str, int], ImageFont.ImageFont] = {}

    @classmethod
    def from_settings(cls, settings: dict) -> "FontLoader":
        return cls(font_paths=settings.get("fonts", {}))

    def get(self, weight: str, size: int):
        """
        Return a font of the given weight ('bold' or 'regular') and size.

        Falls back to Pillow's scalable default font when no TrueType
        file is found.
        """
        key = (weight, size)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        for path in self._search.get(weight, self._search[REGULAR]):
            if not path.exists():
                continue
            try:
                font = ImageFont.truetype(str(path), size)
            except OSError as e:
                logger.debug("Cannot read font %s: %s", path, e)
                continue
            logger.debug("Loaded %s font (%d px) from %s", weight, size, path)
            self._cache[key] = font
            return font

        logger.warning("No TrueType %s font found, using Pillow default", weight)
        font = ImageFont.load_default(size=size)
        self._cache[key] = font
        return font
