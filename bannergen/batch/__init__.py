"""
Batch rendering.

Modules:
    batch_renderer - BatchRenderer, sequential render + export with pacing
"""

from .batch_renderer import MANIFEST_FILENAME, BatchRenderer

__all__ = ['BatchRenderer', 'MANIFEST_FILENAME']
