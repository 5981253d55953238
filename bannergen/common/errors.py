"""
Error taxonomy.

Feed acquisition and normalization failures derive from FeedError and abort a
feed load as a whole. ImageLoadFailure is recovered inside the rendering layer.
"""

from typing import List, Optional


class BannerGenError(Exception):
    """Base class for all application errors."""


class FeedError(BannerGenError):
    """Feed could not be acquired or normalized."""


class InvalidContent(FeedError):
    """A relay answered with an HTML page instead of the feed document."""

    def __init__(self, source_label: str, reason: str):
        self.source_label = source_label
        self.reason = reason
        super().__init__(
            f"El proxy ({source_label}) devolvió una página HTML en vez de XML: {reason}"
        )


class FetchExhausted(FeedError):
    """Every transport strategy failed or returned invalid content."""

    def __init__(
        self,
        target_url: str,
        last_error: Optional[BaseException] = None,
        invalid: Optional[List[InvalidContent]] = None,
    ):
        self.target_url = target_url
        self.last_error = last_error
        self.invalid = list(invalid or [])

        message = "No se pudo obtener el XML. Verifique la URL o intente más tarde."
        if self.last_error is not None:
            message += f" Último error: {type(self.last_error).__name__}: {self.last_error}"
        for item in self.invalid:
            message += f" [{item}]"
        super().__init__(message)


class FeedParseError(FeedError):
    """The document is not well-formed XML."""


class NoProductsFound(FeedError):
    """No <item>, <entry> or <product> elements in the document."""


class EmptyAfterFiltering(FeedError):
    """Product elements existed but none carried a usable price or name."""


class ImageLoadFailure(BannerGenError):
    """A product photo could not be fetched or decoded."""

    def __init__(self, url: str, cause: Optional[BaseException] = None):
        self.url = url
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Could not load image {url!r}{detail}")
