"""
Feed Fetcher

Retrieves the raw feed document through a fixed, ordered list of public
relays. The first relay that answers successfully with something other
than an HTML page wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from ..common import constants
from ..common.errors import FetchExhausted, InvalidContent
from ..common.text_utils import encode_uri_component

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportStrategy:
    """One relay: how to rewrite the target URL and whether to unwrap a JSON envelope."""
    name: str
    url_template: str
    unwrap_contents: bool = False

    def build_url(self, target_url: str) -> str:
        return self.url_template.format(url=encode_uri_component(target_url))


@dataclass(frozen=True)
class FetchResult:
    """Document text plus the label of the relay that produced it."""
    text: str
    source_label: str
    url: str


DEFAULT_STRATEGIES = tuple(
    TransportStrategy(s["name"], s["url"], s.get("unwrap_contents", False))
    for s in constants.DEFAULT_TRANSPORT_STRATEGIES
)


def resolve_feed_url(source: str, cluster_url_template: str = constants.CLUSTER_URL_TEMPLATE) -> str:
    """
    Turn a feed reference into a URL.

    Args:
        source: Bare cluster id (e.g. "1629") or an absolute URL

    Returns:
        Feed URL

    Raises:
        ValueError: If source is empty
    """
    trimmed = (source or "").strip()
    if not trimmed:
        raise ValueError("Feed source is required")
    if trimmed.isascii() and trimmed.isdigit():
        return cluster_url_template.format(cluster_id=trimmed)
    return trimmed


def looks_like_html(text: str) -> bool:
    """True when text is an HTML page (relays degrade to HTML error pages)."""
    lowered = text.strip().lower()
    return lowered.startswith("<!doctype html") or "<html" in lowered


def _describe_html(text: str) -> str:
    """Short description of an HTML error page for log and error messages."""
    soup = BeautifulSoup(text, "lxml")
    if soup.title and soup.title.string:
        return f"título de la página: {soup.title.string.strip()[:80]!r}"
    return f"inicio: {text.strip()[:80]!r}"


def strategies_from_settings(feed_settings: dict) -> List[TransportStrategy]:
    """Build the ordered strategy list from the 'feed' settings section."""
    return [
        TransportStrategy(
            name=entry["name"],
            url_template=entry["url"],
            unwrap_contents=bool(entry.get("unwrap_contents", False)),
        )
        for entry in feed_settings.get("strategies", constants.DEFAULT_TRANSPORT_STRATEGIES)
    ]


class FeedFetcher:
    """Fetches feed documents through fallback relays, strictly in order."""

    def __init__(
        self,
        strategies: Optional[Iterable[TransportStrategy]] = None,
        timeout: float = constants.REQUEST_TIMEOUT,
        cluster_url_template: str = constants.CLUSTER_URL_TEMPLATE,
        user_agent: str = constants.USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)
        if not self.strategies:
            raise ValueError("At least one transport strategy is required")
        self.timeout = timeout
        self.cluster_url_template = cluster_url_template
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
        })

    @classmethod
    def from_settings(cls, settings: dict, session: Optional[requests.Session] = None) -> "FeedFetcher":
        feed = settings.get("feed", {})
        return cls(
            strategies=strategies_from_settings(feed),
            timeout=feed.get("timeout", constants.REQUEST_TIMEOUT),
            cluster_url_template=feed.get("cluster_url_template", constants.CLUSTER_URL_TEMPLATE),
            user_agent=feed.get("user_agent", constants.USER_AGENT),
            session=session,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _request(self, strategy: TransportStrategy, target_url: str) -> str:
        """
        Issue one request through a relay.

        Returns:
            Body text

        Raises:
            requests.RequestException: On transport failure or a non-success HTTP status
            ValueError: If a wrapped response has no usable 'contents'
        """
        response = self.session.get(strategy.build_url(target_url), timeout=self.timeout)
        if not response.ok:
            raise requests.HTTPError(
                f"{strategy.name} answered HTTP {response.status_code}", response=response
            )

        if not strategy.unwrap_contents:
            return response.text

        envelope = response.json()
        contents = envelope.get("contents") if isinstance(envelope, dict) else None
        if not isinstance(contents, str) or not contents:
            raise ValueError(f"{strategy.name} envelope has no 'contents' field")
        return contents

    def fetch(self, source: str) -> FetchResult:
        """
        Fetch the feed document for a cluster id or URL.

        Args:
            source: Bare cluster id or absolute feed URL

        Returns:
            FetchResult with the document text and the relay label

        Raises:
            ValueError: If source is empty
            FetchExhausted: If no relay produced a non-HTML document
        """
        target_url = resolve_feed_url(source, self.cluster_url_template)
        last_error: Optional[BaseException] = None
        invalid: List[InvalidContent] = []

        for strategy in self.strategies:
            logger.info("Intentando XML vía %s...", strategy.name)
            try:
                text = self._request(strategy, target_url)
            except (requests.RequestException, ValueError) as e:
                # requests' JSONDecodeError is both a RequestException and a ValueError
                logger.warning("%s failed: %s: %s", strategy.name, type(e).__name__, e)
                last_error = e
                continue

            if not text.strip():
                logger.warning("%s returned an empty body", strategy.name)
                continue

            if looks_like_html(text):
                error = InvalidContent(strategy.name, _describe_html(text))
                logger.warning("%s", error)
                invalid.append(error)
                continue

            logger.info("XML obtenido exitosamente vía %s (%d chars)", strategy.name, len(text))
            return FetchResult(text=text, source_label=strategy.name, url=target_url)

        raise FetchExhausted(target_url, last_error=last_error, invalid=invalid)
