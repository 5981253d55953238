"""
Batch Renderer

Renders and exports every loaded product, one at a time.

Features:
- Strictly sequential rendering (one surface in use at a time)
- Fixed settle delay before each render and pacing delay after each export
- Failed exports are tracked and do not stop the batch
- manifest.csv listing every banner written
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from ..common import constants
from ..common.csv_utils import MANIFEST_FIELDNAMES, write_csv
from ..models import AppState, Product, RenderConfig
from ..rendering import BannerExporter, LayoutEngine

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.csv"


class BatchRenderer:
    """Sequential banner generation with fixed pacing."""

    def __init__(
        self,
        engine: LayoutEngine,
        exporter: BannerExporter,
        output_dir: str | Path = "output/banners",
        settle_delay: float = constants.SETTLE_DELAY,
        pacing_delay: float = constants.PACING_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the batch renderer.

        Args:
            engine: Layout engine used for every product
            exporter: Writes each banner to output_dir
            output_dir: Directory for banners and the manifest
            settle_delay: Seconds to wait after selecting a product, before rendering
            pacing_delay: Seconds to wait after exporting a product
            sleep: Sleep function (replaceable in tests)
        """
        self.engine = engine
        self.exporter = exporter
        self.output_dir = Path(output_dir)
        self.settle_delay = settle_delay
        self.pacing_delay = pacing_delay
        self._sleep = sleep

        self.manifest_file = self.output_dir / MANIFEST_FILENAME
        self.processed = 0
        self.placeholders = 0
        self.failed: List[Dict[str, str]] = []
        self.written: List[Path] = []
        self._manifest_rows: List[Dict[str, object]] = []
        self.start_time: Optional[datetime] = None

    def run(
        self,
        products: Sequence[Product],
        config: RenderConfig,
        state: Optional[AppState] = None,
    ) -> int:
        """
        Render and export all products in order.

        Args:
            products: Products to render
            config: Render options applied to every product
            state: Session state to keep selection/progress current

        Returns:
            Number of products processed
        """
        self.start_time = datetime.now()
        self.processed = 0
        self.placeholders = 0
        self.failed = []
        self.written = []
        self._manifest_rows = []

        os.makedirs(self.output_dir, exist_ok=True)
        total = len(products)

        if state is not None:
            state.processing = True
            state.generated_count = 0

        try:
            for i, product in enumerate(products, 1):
                logger.info("[%d/%d] %s", i, total, product.sku)
                if state is not None:
                    state.select(product)

                self._sleep(self.settle_delay)
                self._render_one(product, config)

                self.processed += 1
                if state is not None:
                    state.generated_count = self.processed

                self._sleep(self.pacing_delay)
        finally:
            if state is not None:
                state.processing = False
            write_csv(self.manifest_file, self._manifest_rows, fieldnames=MANIFEST_FIELDNAMES)

        elapsed = (datetime.now() - self.start_time).total_seconds()
        logger.info("Proceso finalizado: %d banner(s) in %.1fs, %d placeholder photo(s), %d failed export(s)",
                    self.processed, elapsed, self.placeholders, len(self.failed))
        return self.processed

    def _render_one(self, product: Product, config: RenderConfig) -> None:
        banner = self.engine.render(product, config)
        if banner.photo_placeholder:
            self.placeholders += 1

        try:
            path = self.exporter.save(banner, self.output_dir)
        except (OSError, ValueError) as e:
            error_msg = f"{type(e).__name__}: {str(e)[:100]}"
            logger.error("Export failed for %s: %s", product.sku, error_msg)
            self.failed.append({
                "sku": product.sku,
                "error": error_msg,
                "timestamp": datetime.now().isoformat(),
            })
            return

        self.written.append(path)
        self._manifest_rows.append({
            "sku": product.sku,
            "name": product.name,
            "price": product.price,
            "installments": product.installments,
            "file": path.name,
            "placeholder": banner.photo_placeholder,
        })

    def get_stats(self) -> dict:
        """Return batch statistics."""
        return {
            'processed': self.processed,
            'written': len(self.written),
            'placeholders': self.placeholders,
            'failed': len(self.failed),
        }
