"""
Banner Export

Serializes rendered banners to JPEG and saves them as pardo_<sku>.jpg.
"""

import logging
from io import BytesIO
from pathlib import Path

from ..common import constants
from ..common.text_utils import sanitize_filename
from ..models import Product
from .layout import RenderedBanner

logger = logging.getLogger(__name__)


class BannerExporter:
    """Writes rendered banners to disk."""

    def __init__(self, quality: int = constants.JPEG_QUALITY):
        if not 1 <= quality <= 95:
            raise ValueError(f"JPEG quality must be between 1 and 95, got {quality}")
        self.quality = quality

    @classmethod
    def from_settings(cls, settings: dict) -> "BannerExporter":
        return cls(quality=settings.get("render", {}).get("jpeg_quality", constants.JPEG_QUALITY))

    @staticmethod
    def filename_for(product: Product) -> str:
        return constants.EXPORT_FILENAME_TEMPLATE.format(sku=sanitize_filename(product.sku))

    def to_jpeg_bytes(self, banner: RenderedBanner) -> bytes:
        buffer = BytesIO()
        banner.image.convert("RGB").save(buffer, "JPEG", quality=self.quality)
        return buffer.getvalue()

    def save(self, banner: RenderedBanner, output_dir: str | Path) -> Path:
        """
        Save a banner into output_dir.

        Args:
            banner: Rendered banner
            output_dir: Target directory (created if missing)

        Returns:
            Path of the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        path = output_dir / self.filename_for(banner.product)
        path.write_bytes(self.to_jpeg_bytes(banner))
        logger.info("Saved %s", path)
        return path
