"""Shared test fixtures."""

from pathlib import Path

import pytest
from PIL import Image

from bannergen.models import Product, RenderConfig
from bannergen.rendering import FontLoader, LayoutEngine, LoadedImage

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeImageLoader:
    """Image loader that never touches the network."""

    def __init__(self, size=(800, 600), color="red"):
        self.size = size
        self.color = color
        self.requested = []

    def load(self, url):
        self.requested.append(url)
        if not url:
            return LoadedImage(url=url)
        return LoadedImage(url=url, image=Image.new("RGB", self.size, self.color))

    def close(self):
        pass


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def google_feed_xml():
    """RSS feed with g: namespaced fields."""
    return (FIXTURES_DIR / "feed_google_shopping.xml").read_text(encoding="utf-8")


@pytest.fixture
def atom_feed_xml():
    """Atom feed with <entry> products."""
    return (FIXTURES_DIR / "feed_atom.xml").read_text(encoding="utf-8")


@pytest.fixture
def flat_feed_xml():
    """Flat <product> feed with ns: prefixed fields."""
    return (FIXTURES_DIR / "feed_flat_products.xml").read_text(encoding="utf-8")


@pytest.fixture
def proxy_error_html():
    """HTML error page as returned by a failing relay."""
    return (FIXTURES_DIR / "proxy_error.html").read_text(encoding="utf-8")


@pytest.fixture
def tv_product():
    """Product with a 12-instalment plan and pickup."""
    return Product(
        id="86QNED85SQA",
        name="Smart TV 86” UHD 4K Qned LG 86QNED85SQA",
        price=6199999,
        sku="86QNED85SQA",
        image_url="https://wsrv.nl/?url=https%3A%2F%2Fimages.example.com%2Ftv86.jpg&output=jpg&w=1000&h=1000",
        installments=12,
        free_shipping=True,
        pickup=True,
    )


@pytest.fixture
def plain_product():
    """Product without instalments, pickup or bank promo."""
    return Product(
        id="PAVA-01",
        name="Pava Eléctrica 1,7L",
        price=45999.9,
        sku="PAVA-01",
        image_url="https://wsrv.nl/?url=pava&output=jpg&w=1000&h=1000",
        installments=1,
        pickup=False,
    )


@pytest.fixture
def render_config():
    """Default render config."""
    return RenderConfig()


@pytest.fixture
def fake_loader():
    return FakeImageLoader()


@pytest.fixture
def engine(fake_loader):
    """Layout engine with an offline image loader."""
    return LayoutEngine(image_loader=fake_loader, fonts=FontLoader())
