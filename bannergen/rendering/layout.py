"""
Layout Engine

Renders a Product into a fixed 1000x1000 promotional banner.

Rendering is split in two steps:
- plan_layout() is a pure function that decides every element (photo,
  badges, price, frame, brand text) and where it goes;
- LayoutEngine paints the plan onto a fresh Pillow surface.

Paint order is the plan order: background, photo, badges, price, frame
bars, brand text. Frame bars are painted after the content so they cover
anything that spills to the edges.

Badge slots:
    left column  - bank promotion
    right column - instalments, then pickup directly below
A slot only advances when the badge above it was drawn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from ..common import constants as C
from ..common.text_utils import format_price
from ..models import Product, RenderConfig
from .fonts import BOLD, REGULAR, FontLoader
from .image_loader import ImageLoader

logger = logging.getLogger(__name__)

Box = Tuple[int, int, int, int]

# Element shapes
RECT = "rect"
ROUNDED_RECT = "rounded_rect"
TEXT = "text"
PHOTO = "photo"

PHOTO_MAX_WIDTH = C.CANVAS_WIDTH - C.IMAGE_PADDING * 2
PHOTO_MAX_HEIGHT = C.SAFE_AREA_HEIGHT - C.PRICE_RESERVED_HEIGHT

BANK_BADGE_SIZE = (280, 80)
INSTALLMENT_BADGE_SIZE = (260, 70)
PICKUP_BADGE_SIZE = (260, 40)
LEFT_SLOT_STEP = 90
RIGHT_SLOT_STEP = 80
PRICE_BASELINE = C.CANVAS_HEIGHT - C.FRAME_BOTTOM - 30
INSTALLMENT_LINE_OFFSET = 110


@dataclass(frozen=True)
class LayoutElement:
    """
    One painted element.

    Shapes use box (x0, y0, x1, y1, exclusive end). Text uses the first two
    box values as the anchor point and a Pillow anchor code.
    """
    kind: str
    shape: str
    box: Box
    fill: str = ""
    text: str = ""
    font: Optional[Tuple[str, int]] = None
    anchor: str = "la"
    radius: int = 0

    @property
    def width(self) -> int:
        return self.box[2] - self.box[0]

    @property
    def height(self) -> int:
        return self.box[3] - self.box[1]


@dataclass
class RenderedBanner:
    """Filled surface plus the plan that produced it."""
    image: Image.Image
    elements: List[LayoutElement]
    product: Product
    config: RenderConfig
    photo_placeholder: bool = False

    def find(self, kind: str) -> List[LayoutElement]:
        return [e for e in self.elements if e.kind == kind]

    def has(self, kind: str) -> bool:
        return any(e.kind == kind for e in self.elements)

    @property
    def kinds(self) -> List[str]:
        return [e.kind for e in self.elements]


def _text(kind: str, x: float, y: float, text: str, fill: str, weight: str, size: int, anchor: str) -> LayoutElement:
    x, y = int(round(x)), int(round(y))
    return LayoutElement(kind=kind, shape=TEXT, box=(x, y, x, y), fill=fill, text=text,
                         font=(weight, size), anchor=anchor)


def fit_photo(width: int, height: int) -> Box:
    """
    Scale a photo uniformly into the photo region.

    The photo is centered horizontally, its top sits IMAGE_TOP_OFFSET below
    the safe area, and the bottom PRICE_RESERVED_HEIGHT of the safe area is
    kept free for the price.
    """
    scale = min(PHOTO_MAX_WIDTH / width, PHOTO_MAX_HEIGHT / height)
    draw_w = max(1, int(round(width * scale)))
    draw_h = max(1, int(round(height * scale)))
    x = (C.CANVAS_WIDTH - draw_w) // 2
    y = C.SAFE_AREA_TOP + C.IMAGE_TOP_OFFSET
    return (x, y, x + draw_w, y + draw_h)


def _plan_photo(photo_size: Optional[Tuple[int, int]]) -> List[LayoutElement]:
    if photo_size is not None and photo_size[0] > 0 and photo_size[1] > 0:
        return [LayoutElement(kind="photo", shape=PHOTO, box=fit_photo(*photo_size))]

    return [
        LayoutElement(
            kind="placeholder", shape=RECT,
            box=(100, C.SAFE_AREA_TOP, 900, C.SAFE_AREA_TOP + C.SAFE_AREA_HEIGHT),
            fill=C.COLORS["placeholder_fill"],
        ),
        _text("placeholder_text", C.CANVAS_WIDTH / 2, C.CANVAS_HEIGHT / 2, C.NO_IMAGE_TEXT,
              C.COLORS["placeholder_text"], REGULAR, 30, "mm"),
    ]


def _plan_badges(product: Product, config: RenderConfig) -> List[LayoutElement]:
    elements: List[LayoutElement] = []
    left_y = C.SAFE_AREA_TOP + C.BADGE_TOP_OFFSET
    right_y = left_y

    promo_text = product.resolve_bank_promo(config.default_bank_text)
    if promo_text:
        w, h = BANK_BADGE_SIZE
        x = C.BADGE_MARGIN
        center_x = x + w / 2
        elements += [
            LayoutElement(kind="bank_badge", shape=ROUNDED_RECT, box=(x, left_y, x + w, left_y + h),
                          fill=C.COLORS["debit_badge"], radius=10),
            _text("bank_headline", center_x, left_y + 40, C.BANK_BADGE_HEADLINE,
                  C.COLORS["badge_text"], BOLD, 36, "ms"),
            _text("bank_text", center_x, left_y + 65, promo_text,
                  C.COLORS["badge_text"], REGULAR, 18, "ms"),
        ]
        left_y += LEFT_SLOT_STEP

    if product.has_installment_plan:
        w, h = INSTALLMENT_BADGE_SIZE
        x = C.CANVAS_WIDTH - w - C.BADGE_MARGIN
        elements += [
            LayoutElement(kind="installment_badge", shape=ROUNDED_RECT, box=(x, right_y, x + w, right_y + h),
                          fill=C.COLORS["orange_badge"], radius=10),
            _text("installment_count", x + 15, right_y + h / 2 + 2, str(product.installments),
                  C.COLORS["badge_text"], BOLD, 50, "lm"),
            _text("installment_label_top", x + 80, right_y + 25, C.INSTALLMENT_LABEL_TOP,
                  C.COLORS["badge_text"], BOLD, 20, "lm"),
            _text("installment_label_bottom", x + 80, right_y + 48, C.INSTALLMENT_LABEL_BOTTOM,
                  C.COLORS["badge_text"], BOLD, 20, "lm"),
        ]
        right_y += RIGHT_SLOT_STEP

    if product.pickup:
        w, h = PICKUP_BADGE_SIZE
        x = C.CANVAS_WIDTH - w - C.BADGE_MARGIN
        elements += [
            LayoutElement(kind="pickup_badge", shape=ROUNDED_RECT, box=(x, right_y, x + w, right_y + h),
                          fill=C.COLORS["pickup_badge"], radius=20),
            _text("pickup_text", x + w / 2, right_y + h / 2 + 2, C.PICKUP_LABEL,
                  C.COLORS["pickup_text"], BOLD, 20, "mm"),
        ]

    return elements


def installment_text(product: Product) -> str:
    """'Hasta 12x $ 516.667 cuotas sin interés' for the price block."""
    per_installment = product.price / product.installments
    return f"Hasta {product.installments}x {format_price(per_installment)} cuotas sin interés"


def _plan_price(product: Product) -> List[LayoutElement]:
    center_x = C.CANVAS_WIDTH / 2
    elements = [
        _text("price", center_x, PRICE_BASELINE, format_price(product.price),
              C.COLORS["price"], BOLD, 110, "ms"),
    ]
    if product.has_installment_plan:
        elements.append(
            _text("installment_line", center_x, PRICE_BASELINE - INSTALLMENT_LINE_OFFSET,
                  installment_text(product), C.COLORS["orange_badge"], BOLD, 32, "ms")
        )
    return elements


def _plan_frame(config: RenderConfig) -> List[LayoutElement]:
    w, h = C.CANVAS_WIDTH, C.CANVAS_HEIGHT
    color = config.frame_color
    return [
        LayoutElement(kind="frame_top", shape=RECT, box=(0, 0, w, C.FRAME_TOP), fill=color),
        LayoutElement(kind="frame_bottom", shape=RECT, box=(0, h - C.FRAME_BOTTOM, w, h), fill=color),
        LayoutElement(kind="frame_left", shape=RECT, box=(0, 0, C.FRAME_SIDE, h), fill=color),
        LayoutElement(kind="frame_right", shape=RECT, box=(w - C.FRAME_SIDE, 0, w, h), fill=color),
        _text("brand_top", w / 2, C.FRAME_TOP / 2, C.BRAND_TOP_TEXT,
              C.COLORS["frame_text"], BOLD, 80, "mm"),
        _text("brand_bottom", w / 2, h - C.FRAME_BOTTOM / 2, C.BRAND_BOTTOM_TEXT,
              C.COLORS["frame_text"], BOLD, 30, "mm"),
    ]


def plan_layout(
    product: Product,
    config: RenderConfig,
    photo_size: Optional[Tuple[int, int]] = None,
) -> List[LayoutElement]:
    """
    Decide every element of the banner, in paint order.

    Args:
        product: Product to render
        config: Render options
        photo_size: Pixel size of the loaded photo, or None to plan the placeholder

    Returns:
        Ordered list of LayoutElement
    """
    elements = [
        LayoutElement(kind="background", shape=RECT, box=(0, 0, C.CANVAS_WIDTH, C.CANVAS_HEIGHT),
                      fill=C.COLORS["background"]),
    ]
    elements += _plan_photo(photo_size)
    if config.show_badges:
        elements += _plan_badges(product, config)
    if config.show_price:
        elements += _plan_price(product)
    elements += _plan_frame(config)
    return elements


class LayoutEngine:
    """Paints banners. Holds no per-render state: every call starts from a new surface."""

    def __init__(
        self,
        image_loader: Optional[ImageLoader] = None,
        fonts: Optional[FontLoader] = None,
    ):
        self.image_loader = image_loader or ImageLoader()
        self.fonts = fonts or FontLoader()

    def render(self, product: Product, config: RenderConfig) -> RenderedBanner:
        """
        Render one product.

        An unreachable or corrupt photo is replaced by a placeholder; this
        method does not raise for valid Product/RenderConfig input.
        """
        loaded = self.image_loader.load(product.image_url)
        photo_size = loaded.image.size if loaded.image is not None else None

        elements = plan_layout(product, config, photo_size)
        surface = self._paint(elements, loaded.image)

        logger.debug("Rendered %s (%d elements, placeholder=%s)",
                     product.sku, len(elements), loaded.is_placeholder)
        return RenderedBanner(
            image=surface,
            elements=elements,
            product=product,
            config=config,
            photo_placeholder=loaded.is_placeholder,
        )

    def _paint(self, elements: List[LayoutElement], photo: Optional[Image.Image]) -> Image.Image:
        surface = Image.new("RGB", (C.CANVAS_WIDTH, C.CANVAS_HEIGHT), C.COLORS["background"])
        draw = ImageDraw.Draw(surface)

        for element in elements:
            if element.shape == PHOTO:
                if photo is not None:
                    resized = photo.resize((element.width, element.height), Image.Resampling.LANCZOS)
                    surface.paste(resized, element.box[:2])
            elif element.shape == RECT:
                x0, y0, x1, y1 = element.box
                draw.rectangle((x0, y0, x1 - 1, y1 - 1), fill=element.fill)
            elif element.shape == ROUNDED_RECT:
                x0, y0, x1, y1 = element.box
                draw.rounded_rectangle((x0, y0, x1 - 1, y1 - 1), radius=element.radius, fill=element.fill)
            elif element.shape == TEXT:
                weight, size = element.font
                draw.text(element.box[:2], element.text, fill=element.fill,
                          font=self.fonts.get(weight, size), anchor=element.anchor)

        return surface
