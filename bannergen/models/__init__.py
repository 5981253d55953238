"""
Data models for feed products, rendering and session state.

This module contains pure data classes with no business logic.
"""

from .product import DEMO_PRODUCT, Product, RenderConfig
from .state import AppState

__all__ = ['Product', 'RenderConfig', 'DEMO_PRODUCT', 'AppState']
