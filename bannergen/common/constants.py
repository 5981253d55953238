"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Feed sources
CLUSTER_URL_TEMPLATE = "https://www.pardo.com.ar/XMLData/cluster{cluster_id}.xml"
DEFAULT_FEED_SOURCE = "https://www.pardo.com.ar/XMLData/cluster1629.xml"

# Relays tried in order; {url} is the percent-encoded target URL
DEFAULT_TRANSPORT_STRATEGIES = [
    {"name": "AllOrigins Raw", "url": "https://api.allorigins.win/raw?url={url}", "unwrap_contents": False},
    {"name": "CORSProxy", "url": "https://corsproxy.io/?{url}", "unwrap_contents": False},
    {"name": "AllOrigins Wrapped", "url": "https://api.allorigins.win/get?url={url}", "unwrap_contents": True},
]

# Image proxy returning a normalized square JPEG
IMAGE_PROXY_TEMPLATE = "https://wsrv.nl/?url={url}&output=jpg&w=1000&h=1000"

REQUEST_TIMEOUT = 30
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

# Normalization
NO_NAME_SENTINEL = "Sin Nombre"
NO_SKU_SENTINEL = "N/A"
FREE_SHIPPING_THRESHOLD = 100000

# Canvas geometry (pixels)
CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 1000
FRAME_TOP = 130
FRAME_BOTTOM = 130
FRAME_SIDE = 30
SAFE_AREA_TOP = FRAME_TOP
SAFE_AREA_HEIGHT = CANVAS_HEIGHT - FRAME_TOP - FRAME_BOTTOM
IMAGE_PADDING = 20
IMAGE_TOP_OFFSET = 40
PRICE_RESERVED_HEIGHT = 140
BADGE_MARGIN = 30
BADGE_TOP_OFFSET = 20

# Colours
COLORS = {
    "pardo_blue": "#0033A0",
    "orange_badge": "#FF6600",
    "debit_badge": "#0055FF",
    "pickup_badge": "#B3D4FC",
    "pickup_text": "#004488",
    "price": "#FF6600",
    "frame_text": "#FFFF00",
    "background": "#FFFFFF",
    "placeholder_fill": "#F5F5F5",
    "placeholder_text": "#CCCCCC",
    "badge_text": "#FFFFFF",
}

# Literal texts painted on the banner
BRAND_TOP_TEXT = "PARDO"
BRAND_BOTTOM_TEXT = "WWW.PARDO.COM.AR"
BANK_BADGE_HEADLINE = "10% OFF"
INSTALLMENT_LABEL_TOP = "SIN"
INSTALLMENT_LABEL_BOTTOM = "INTERÉS"
PICKUP_LABEL = "¡RETIRO GRATIS!"
NO_IMAGE_TEXT = "Sin Imagen"
DEFAULT_BANK_TEXT = "10% OFF 1 PAGO Débito"

# Batch pacing (seconds)
SETTLE_DELAY = 0.6
PACING_DELAY = 0.5

JPEG_QUALITY = 90
EXPORT_FILENAME_TEMPLATE = "pardo_{sku}.jpg"
