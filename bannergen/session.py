"""
Banner Session

Caller-facing entry points: load a feed, pick a product, render the
selection or the whole collection. Owns the AppState; the fetcher,
normalizer and layout engine stay stateless.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .batch import BatchRenderer
from .common.config_loader import load_settings
from .common.errors import FeedError
from .feed import FeedFetcher, FeedNormalizer
from .models import DEMO_PRODUCT, AppState, Product, RenderConfig
from .rendering import BannerExporter, FontLoader, ImageLoader, LayoutEngine, RenderedBanner

logger = logging.getLogger(__name__)


class BannerSession:
    """Holds the loaded products and drives fetching and rendering."""

    def __init__(
        self,
        settings: Optional[Dict[str, Any]] = None,
        fetcher: Optional[FeedFetcher] = None,
        normalizer: Optional[FeedNormalizer] = None,
        engine: Optional[LayoutEngine] = None,
        exporter: Optional[BannerExporter] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings if settings is not None else load_settings()
        self.fetcher = fetcher or FeedFetcher.from_settings(self.settings)
        self.normalizer = normalizer or FeedNormalizer.from_settings(self.settings)
        self.engine = engine or LayoutEngine(
            image_loader=ImageLoader.from_settings(self.settings),
            fonts=FontLoader.from_settings(self.settings),
        )
        self.exporter = exporter or BannerExporter.from_settings(self.settings)
        self._sleep = sleep
        self.state = AppState(products=[DEMO_PRODUCT], selected=DEMO_PRODUCT)
        self.last_batch: Optional[BatchRenderer] = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.fetcher.close()
        self.engine.image_loader.close()

    @property
    def output_dir(self) -> Path:
        return Path(self.settings["batch"]["output_dir"])

    def default_config(self) -> RenderConfig:
        return RenderConfig.from_settings(self.settings)

    def load_feed(self, source: str) -> bool:
        """
        Replace the product collection with the products of a feed.

        The collection is cleared first; on any feed failure it stays empty
        and state.error_message carries the reason.

        Args:
            source: Cluster id or feed URL

        Returns:
            True if products were loaded
        """
        state = self.state
        state.loading = True
        state.error_message = None
        state.clear_products()

        try:
            result = self.fetcher.fetch(source)
            products = self.normalizer.normalize(result.text)
        except (FeedError, ValueError) as e:
            logger.error("XML Fetch Error: %s", e)
            state.error_message = str(e) or "Error desconocido"
            return False
        finally:
            state.loading = False

        state.source_label = result.source_label
        state.replace_products(products)
        logger.info("Loaded %d product(s) via %s", len(products), result.source_label)
        return True

    def load_demo(self) -> None:
        """Load the built-in reference product."""
        self.state.error_message = None
        self.state.replace_products([DEMO_PRODUCT])

    def select(self, sku: str) -> Product:
        """
        Select a loaded product by SKU (or id).

        Raises:
            KeyError: If no loaded product matches
        """
        for product in self.state.products:
            if sku in (product.sku, product.id):
                self.state.select(product)
                return product
        raise KeyError(f"No loaded product with SKU {sku!r}")

    def render_selected(self, config: Optional[RenderConfig] = None) -> RenderedBanner:
        """
        Render the selected product with the given (or default) config.

        Raises:
            LookupError: If nothing is selected
        """
        if self.state.selected is None:
            raise LookupError("Seleccione un producto.")
        return self.engine.render(self.state.selected, config or self.default_config())

    def export_selected(
        self,
        config: Optional[RenderConfig] = None,
        output_dir: Optional[str | Path] = None,
    ) -> Path:
        """Render the selected product and save it as pardo_<sku>.jpg."""
        banner = self.render_selected(config)
        return self.exporter.save(banner, output_dir or self.output_dir)

    def run_batch(
        self,
        config: Optional[RenderConfig] = None,
        output_dir: Optional[str | Path] = None,
    ) -> int:
        """
        Render and export every loaded product sequentially.

        Returns:
            Number of products processed
        """
        batch_settings = self.settings["batch"]
        batch = BatchRenderer(
            engine=self.engine,
            exporter=self.exporter,
            output_dir=output_dir or self.output_dir,
            settle_delay=batch_settings["settle_delay"],
            pacing_delay=batch_settings["pacing_delay"],
            sleep=self._sleep,
        )
        self.last_batch = batch
        return batch.run(self.state.products, config or self.default_config(), state=self.state)
