"""
Banner rendering.

Modules:
    layout - plan_layout() and LayoutEngine (1000x1000 banner composition)
    image_loader - ImageLoader, photo download with placeholder fallback
    fonts - FontLoader, TrueType discovery and caching
    export - BannerExporter, JPEG serialization and pardo_<sku>.jpg files
"""

from .export import BannerExporter
from .fonts import FontLoader
from .image_loader import ImageLoader, LoadedImage
from .layout import (
    LayoutElement,
    LayoutEngine,
    RenderedBanner,
    fit_photo,
    installment_text,
    plan_layout,
)

__all__ = [
    'BannerExporter',
    'FontLoader',
    'ImageLoader',
    'LoadedImage',
    'LayoutElement',
    'LayoutEngine',
    'RenderedBanner',
    'fit_photo',
    'installment_text',
    'plan_layout',
]
