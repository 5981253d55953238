"""
Feed acquisition and normalization.

Modules:
    fetcher - FeedFetcher, ordered relay fallback with HTML detection
    normalizer - FeedNormalizer, XML to canonical Product records
"""

from .fetcher import (
    DEFAULT_STRATEGIES,
    FeedFetcher,
    FetchResult,
    TransportStrategy,
    looks_like_html,
    resolve_feed_url,
    strategies_from_settings,
)
from .normalizer import FeedNormalizer, first_text, proxy_image_url

__all__ = [
    'DEFAULT_STRATEGIES',
    'FeedFetcher',
    'FetchResult',
    'TransportStrategy',
    'looks_like_html',
    'resolve_feed_url',
    'strategies_from_settings',
    'FeedNormalizer',
    'first_text',
    'proxy_image_url',
]
