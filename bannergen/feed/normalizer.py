"""
Feed Normalizer

Maps a Google-Shopping-style XML document onto canonical Product records.

Feeds vary in the element used for products (RSS <item>, Atom <entry>,
flat <product>) and in whether fields are declared unprefixed or under a
vendor namespace (g:price, ns:price). Lookups are done on qualified
element names, so the prefix written in the document is what matters,
not the namespace URI.
"""

from __future__ import annotations

import logging
import uuid
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Sequence

from ..common import constants
from ..common.errors import EmptyAfterFiltering, FeedParseError, NoProductsFound
from ..common.text_utils import encode_uri_component, first_int, parse_price, strip_query
from ..models import Product

logger = logging.getLogger(__name__)

PRODUCT_TAGS = ('item', 'entry', 'product')
NAMESPACE_PREFIXES = ('g', 'ns')

# Candidate field names per logical field, in lookup order
TITLE_FIELDS = ('title', 'name')
ID_FIELDS = ('id', 'sku')
PRICE_FIELDS = ('price',)
SALE_PRICE_FIELDS = ('sale_price',)
IMAGE_FIELDS = ('image_link',)
INSTALLMENT_FIELDS = ('installment', 'installments')


def _text_content(element: ET.Element) -> str:
    """All descendant text, like DOM textContent, stripped."""
    return "".join(element.itertext()).strip()


def _name_variants(name: str) -> List[str]:
    """Plain name first, then each known namespace prefix."""
    return [name] + [f"{prefix}:{name}" for prefix in NAMESPACE_PREFIXES]


class _QualifiedDocument:
    """
    Parsed XML document with the prefixed name of every element.

    ElementTree replaces prefixes with '{uri}' on parse; the prefix
    bindings are captured from start-ns events so 'g:price' can still be
    matched the way a DOM getElementsByTagName('g:price') would.
    """

    def __init__(self, text: str):
        parser = ET.XMLPullParser(events=('start-ns', 'start'))
        uri_to_prefix: Dict[str, str] = {}
        self.qnames: Dict[ET.Element, str] = {}
        self.root: Optional[ET.Element] = None

        try:
            parser.feed(text)
            parser.close()
            events = list(parser.read_events())
        except ET.ParseError as e:
            raise FeedParseError(
                f"Error al procesar el formato XML. El archivo podría estar corrupto ({e})."
            ) from e

        for event, payload in events:
            if event == 'start-ns':
                prefix, uri = payload
                uri_to_prefix[uri] = prefix
                continue

            element = payload
            if self.root is None:
                self.root = element
            self.qnames[element] = self._qualify(element.tag, uri_to_prefix)

        if self.root is None:
            raise FeedParseError("Error al procesar el formato XML: documento vacío.")

    @staticmethod
    def _qualify(tag: str, uri_to_prefix: Dict[str, str]) -> str:
        if not tag.startswith('{'):
            return tag
        uri, local = tag[1:].split('}', 1)
        prefix = uri_to_prefix.get(uri, '')
        return f"{prefix}:{local}" if prefix else local

    def qname(self, element: ET.Element) -> str:
        return self.qnames.get(element, element.tag)

    def find_all(self, name: str) -> List[ET.Element]:
        """All elements (document order) whose qualified name is name."""
        return [el for el in self.root.iter() if self.qname(el) == name]

    def first_descendants(self, element: ET.Element) -> Dict[str, ET.Element]:
        """Map qualified name -> first descendant with that name."""
        index: Dict[str, ET.Element] = {}
        for el in element.iter():
            if el is element:
                continue
            index.setdefault(self.qname(el), el)
        return index


def first_text(index: Dict[str, ET.Element], candidates: Sequence[str]) -> str:
    """
    Resolve a logical field through its candidate names.

    Each candidate is tried unprefixed, then under every known namespace
    prefix. The first element with non-empty text wins; nothing is merged.

    Args:
        index: Qualified name -> first matching descendant
        candidates: Field names in priority order

    Returns:
        Stripped text, or '' when no candidate matched
    """
    for name in candidates:
        for variant in _name_variants(name):
            element = index.get(variant)
            if element is None:
                continue
            text = _text_content(element)
            if text:
                return text
    return ''


def proxy_image_url(raw_url: str, proxy_template: str = constants.IMAGE_PROXY_TEMPLATE) -> str:
    """Strip the query string and route the image through the JPEG proxy."""
    clean = strip_query(raw_url.strip()) if raw_url else ''
    if not clean:
        return ''
    return proxy_template.format(url=encode_uri_component(clean))


class FeedNormalizer:
    """Converts feed XML text into an ordered list of Products."""

    def __init__(self, image_proxy_template: str = constants.IMAGE_PROXY_TEMPLATE):
        self.image_proxy_template = image_proxy_template

    @classmethod
    def from_settings(cls, settings: dict) -> "FeedNormalizer":
        images = settings.get("images", {})
        return cls(image_proxy_template=images.get("proxy_template", constants.IMAGE_PROXY_TEMPLATE))

    def normalize(self, document_text: str) -> List[Product]:
        """
        Parse a feed and map every product element.

        Raises:
            FeedParseError: If the text is not well-formed XML
            NoProductsFound: If there are no item/entry/product elements
            EmptyAfterFiltering: If every mapped record lacked both price and name
        """
        document = _QualifiedDocument(document_text)
        elements = self._find_product_elements(document)

        if not elements:
            logger.warning("XML content preview: %s", document_text[:300])
            raise NoProductsFound(
                "El XML no contiene productos (se buscaron etiquetas <item>, <entry>, <product>)."
            )

        mapped = [self._map_element(document, element) for element in elements]
        products = [p for p in mapped if p.price > 0 or p.name != constants.NO_NAME_SENTINEL]

        dropped = len(mapped) - len(products)
        if dropped:
            logger.info("Dropped %d element(s) without price or name", dropped)

        if not products:
            raise EmptyAfterFiltering(
                "Se encontraron items pero no se pudo extraer información válida (precios/nombres)."
            )

        logger.info("Normalized %d product(s) from %d element(s)", len(products), len(elements))
        return products

    @staticmethod
    def _find_product_elements(document: _QualifiedDocument) -> List[ET.Element]:
        for tag in PRODUCT_TAGS:
            elements = document.find_all(tag)
            if elements:
                logger.debug("Found %d <%s> element(s)", len(elements), tag)
                return elements
        return []

    def _map_element(self, document: _QualifiedDocument, element: ET.Element) -> Product:
        index = document.first_descendants(element)

        title = first_text(index, TITLE_FIELDS)
        product_id = first_text(index, ID_FIELDS)
        raw_price = first_text(index, PRICE_FIELDS)
        raw_sale_price = first_text(index, SALE_PRICE_FIELDS)
        raw_image = first_text(index, IMAGE_FIELDS)

        sale_price = parse_price(raw_sale_price)
        list_value = parse_price(raw_price)
        price = sale_price if raw_sale_price and sale_price > 0 else list_value
        list_price = list_value if raw_sale_price and raw_price else 0.0

        return Product(
            id=product_id or uuid.uuid4().hex[:12],
            name=title or constants.NO_NAME_SENTINEL,
            price=price,
            list_price=list_price,
            image_url=proxy_image_url(raw_image, self.image_proxy_template),
            installments=self._resolve_installments(document, index),
            free_shipping=price > constants.FREE_SHIPPING_THRESHOLD,
            pickup=True,
            sku=product_id or constants.NO_SKU_SENTINEL,
            bank_promo='',
        )

    @staticmethod
    def _resolve_installments(document: _QualifiedDocument, index: Dict[str, ET.Element]) -> int:
        """
        Number of interest-free instalments.

        A nested <g:installment><g:months>12</g:months>...</g:installment>
        node only ever yields its months value (1 when months is missing).
        Without a nested node, the first digit run of a flat text
        installment(s) field is used; otherwise 1.
        """
        node = next((index[name] for name in _name_variants('installment') if name in index), None)
        if node is not None and len(node):
            count = first_int(first_text(document.first_descendants(node), ('months',)))
            return max(1, count) if count is not None else 1

        # Flat tier reads text-only elements
        leaves = {name: element for name, element in index.items() if not len(element)}
        count = first_int(first_text(leaves, INSTALLMENT_FIELDS))
        if count is not None:
            return max(1, count)
        return 1
