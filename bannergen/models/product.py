"""
Product data models.

Pure data classes for representing normalized feed products and the
per-render configuration. Both are frozen: a different view means a new
instance.
"""

from dataclasses import dataclass
from typing import Any, Dict

from ..common import constants


@dataclass(frozen=True)
class Product:
    """
    Canonical, feed-agnostic product consumed by the layout engine.

    Prices are in the feed's currency unit. A price of 0 means unknown,
    a list_price of 0 means there is no pre-discount price, and
    installments == 1 means no instalment plan.
    """

    id: str
    name: str
    price: float
    sku: str
    list_price: float = 0.0
    image_url: str = ""
    installments: int = 1
    free_shipping: bool = False
    pickup: bool = True
    bank_promo: str = ""   # Empty: renderer falls back to RenderConfig.default_bank_text

    def __post_init__(self):
        """Validate invariants after initialization."""
        if self.price < 0:
            raise ValueError(f"Product price must be >= 0, got {self.price}")
        if self.list_price < 0:
            raise ValueError(f"Product list price must be >= 0, got {self.list_price}")
        if self.installments < 1:
            raise ValueError(f"Product installments must be >= 1, got {self.installments}")

    @property
    def has_installment_plan(self) -> bool:
        return self.installments > 1

    def resolve_bank_promo(self, default_text: str) -> str:
        """Return the product's own promo text, or default_text when it has none."""
        return self.bank_promo or default_text


@dataclass(frozen=True)
class RenderConfig:
    """Caller-supplied options for one render call."""

    frame_color: str = constants.COLORS["pardo_blue"]
    show_price: bool = True
    show_badges: bool = True
    default_bank_text: str = constants.DEFAULT_BANK_TEXT

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "RenderConfig":
        """Build a config from the 'render' section of the loaded settings."""
        render = settings.get("render", {})
        return cls(
            frame_color=render.get("frame_color", cls.frame_color),
            show_price=bool(render.get("show_price", True)),
            show_badges=bool(render.get("show_badges", True)),
            default_bank_text=render.get("default_bank_text", cls.default_bank_text) or "",
        )


DEMO_PRODUCT = Product(
    id="demo-lg-86",
    name="Smart TV 86” UHD 4K Qned LG 86QNED85SQA",
    price=6199999,
    list_price=0,
    image_url="https://images.fravega.com/f500/1d04400f0896024927500589d8544d65.jpg",
    installments=12,
    free_shipping=False,
    pickup=True,
    sku="86QNED85SQA",
    bank_promo="10% OFF 1 PAGO DÉBITO",
)
