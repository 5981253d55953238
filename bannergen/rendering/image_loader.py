"""
Image Loader

Downloads and decodes product photos. Failures never propagate: the
caller gets a LoadedImage without an image and paints a placeholder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import requests
from PIL import Image

from ..common import constants
from ..common.errors import ImageLoadFailure

logger = logging.getLogger(__name__)


@dataclass
class LoadedImage:
    """Decoded RGB photo, or the failure that replaced it."""
    url: str
    image: Optional[Image.Image] = None
    error: Optional[ImageLoadFailure] = None

    @property
    def is_placeholder(self) -> bool:
        return self.image is None


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing transparency onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background.convert("RGB")
    return img.convert("RGB")


class ImageLoader:
    """Fetches product photos over HTTP."""

    def __init__(
        self,
        timeout: float = constants.REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": constants.USER_AGENT,
            "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
        })

    @classmethod
    def from_settings(cls, settings: dict, session: Optional[requests.Session] = None) -> "ImageLoader":
        images = settings.get("images", {})
        return cls(timeout=images.get("timeout", constants.REQUEST_TIMEOUT), session=session)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _download(self, url: str) -> Image.Image:
        if not url:
            raise ImageLoadFailure(url, ValueError("product has no image URL"))
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            img = Image.open(BytesIO(response.content))
            img.load()
        except (requests.RequestException, OSError, Image.DecompressionBombError) as e:
            raise ImageLoadFailure(url, e) from e
        return _flatten(img)

    def load(self, url: str) -> LoadedImage:
        """Load a photo; on any failure return a placeholder descriptor."""
        try:
            return LoadedImage(url=url, image=self._download(url))
        except ImageLoadFailure as e:
            logger.warning("%s, painting placeholder", e)
            return LoadedImage(url=url, error=e)
