"""
Application state.

Selection, progress and error fields that the caller-facing layer owns.
Feed, normalization and rendering code never reads this; only the session
and the batch renderer update it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .product import Product


@dataclass
class AppState:
    """Mutable state of one working session."""
    products: List[Product] = field(default_factory=list)
    selected: Optional[Product] = None
    loading: bool = False
    processing: bool = False
    generated_count: int = 0
    error_message: Optional[str] = None
    source_label: str = ""

    def select(self, product: Optional[Product]) -> None:
        self.selected = product

    def replace_products(self, products: List[Product]) -> None:
        """Swap the whole collection and select its first product."""
        self.products = list(products)
        self.selected = self.products[0] if self.products else None

    def clear_products(self) -> None:
        self.products = []
        self.selected = None
