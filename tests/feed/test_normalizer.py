"""Tests for bannergen/feed/normalizer.py"""

import pytest

from bannergen.common.errors import EmptyAfterFiltering, FeedParseError, NoProductsFound
from bannergen.feed import FeedNormalizer, proxy_image_url


@pytest.fixture
def normalizer():
    return FeedNormalizer()


class TestGoogleShoppingFeed:
    def test_drops_record_without_price_and_name(self, normalizer, google_feed_xml):
        products = normalizer.normalize(google_feed_xml)
        assert [p.sku for p in products] == ["86QNED85SQA", "HEL-300", "PAVA-01"]

    def test_nested_installment_months(self, normalizer, google_feed_xml):
        tv = normalizer.normalize(google_feed_xml)[0]
        assert tv.name == "Smart TV 86” UHD 4K Qned LG 86QNED85SQA"
        assert tv.price == 6199999
        assert tv.list_price == 0
        assert tv.installments == 12
        assert tv.free_shipping is True
        assert tv.pickup is True
        assert tv.bank_promo == ""

    def test_image_is_proxied_without_query(self, normalizer, google_feed_xml):
        tv = normalizer.normalize(google_feed_xml)[0]
        assert tv.image_url == (
            "https://wsrv.nl/?url=https%3A%2F%2Fimages.example.com%2Ftv86.jpg&output=jpg&w=1000&h=1000"
        )

    def test_sale_price_wins(self, normalizer, google_feed_xml):
        heladera = normalizer.normalize(google_feed_xml)[1]
        assert heladera.name == "Heladera No Frost 300L"
        assert heladera.price == 899999
        assert heladera.list_price == 950000

    def test_flat_installments_text(self, normalizer, google_feed_xml):
        heladera = normalizer.normalize(google_feed_xml)[1]
        assert heladera.installments == 6

    def test_comma_decimal_price_and_defaults(self, normalizer, google_feed_xml):
        pava = normalizer.normalize(google_feed_xml)[2]
        assert pava.price == pytest.approx(45999.9)
        assert pava.installments == 1
        assert pava.image_url == ""
        assert pava.free_shipping is False


class TestAtomFeed:
    def test_entries_in_default_namespace(self, normalizer, atom_feed_xml):
        products = normalizer.normalize(atom_feed_xml)
        assert [p.name for p in products] == ["Lavarropas Automático 8kg", "Microondas 20L"]
        assert products[0].price == 720000
        assert products[0].list_price == 0

    def test_zero_sale_price_falls_back_to_list(self, normalizer, atom_feed_xml):
        microondas = normalizer.normalize(atom_feed_xml)[1]
        assert microondas.price == 189999
        assert microondas.list_price == 189999


class TestFlatProductFeed:
    def test_ns_prefixed_fields(self, normalizer, flat_feed_xml):
        (aire,) = normalizer.normalize(flat_feed_xml)
        assert aire.sku == "AIRE-3000"
        assert aire.id == "AIRE-3000"
        assert aire.name == "Aire Acondicionado 3000 Frigorías"
        assert aire.price == pytest.approx(1234.5)
        assert aire.installments == 3


class TestFieldResolution:
    def test_unprefixed_item_with_nested_installment(self, normalizer):
        xml = (
            "<rss><channel><item><title>TV</title><price>6199999 ARS</price>"
            "<installment><months>12</months></installment></item></channel></rss>"
        )
        (product,) = normalizer.normalize(xml)
        assert product.price == 6199999
        assert product.list_price == 0
        assert product.installments == 12

    def test_unprefixed_name_beats_namespaced(self, normalizer):
        xml = (
            '<rss xmlns:g="http://base.google.com/ns/1.0"><item>'
            "<g:title>Namespaced</g:title><title>Plain</title><g:price>10</g:price>"
            "</item></rss>"
        )
        assert normalizer.normalize(xml)[0].name == "Plain"

    def test_empty_plain_field_falls_back_to_prefixed(self, normalizer):
        xml = (
            '<rss xmlns:g="http://base.google.com/ns/1.0"><item>'
            "<title>  </title><g:title>Namespaced</g:title><g:price>10</g:price>"
            "</item></rss>"
        )
        assert normalizer.normalize(xml)[0].name == "Namespaced"

    def test_title_beats_name(self, normalizer):
        xml = "<catalog><product><name>Name</name><title>Title</title><price>5</price></product></catalog>"
        assert normalizer.normalize(xml)[0].name == "Title"

    def test_item_preferred_over_product(self, normalizer):
        xml = (
            "<root><product><title>P</title><price>1</price></product>"
            "<item><title>I</title><price>2</price></item></root>"
        )
        assert [p.name for p in normalizer.normalize(xml)] == ["I"]

    def test_missing_id_gets_random_id(self, normalizer):
        xml = "<rss><item><title>Sin código</title><price>100</price></item></rss>"
        (product,) = normalizer.normalize(xml)
        assert product.sku == "N/A"
        assert product.id
        assert product.id != "N/A"

    def test_name_without_price_is_kept(self, normalizer):
        (product,) = normalizer.normalize("<rss><item><title>Consultar</title></item></rss>")
        assert product.price == 0

    def test_price_without_name_is_kept(self, normalizer):
        (product,) = normalizer.normalize("<rss><item><price>10</price></item></rss>")
        assert product.name == "Sin Nombre"

    def test_installment_node_without_months_uses_flat_text(self, normalizer):
        xml = "<rss><item><title>X</title><price>10</price><installment>18</installment></item></rss>"
        assert normalizer.normalize(xml)[0].installments == 18

    def test_nested_installment_without_months_is_single_payment(self, normalizer):
        xml = (
            '<rss xmlns:g="http://base.google.com/ns/1.0"><item><title>X</title><g:price>10</g:price>'
            "<g:installment><g:amount>51666 ARS</g:amount></g:installment></item></rss>"
        )
        assert normalizer.normalize(xml)[0].installments == 1

    def test_ns_prefixed_nested_installment(self, normalizer):
        xml = (
            '<catalog xmlns:ns="http://vendor.example.com/schema"><product><ns:name>X</ns:name>'
            "<ns:price>10</ns:price><ns:installment><ns:months>12</ns:months>"
            "<ns:amount>100 ARS</ns:amount></ns:installment></product></catalog>"
        )
        assert normalizer.normalize(xml)[0].installments == 12

    def test_nested_node_wins_over_flat_installments_field(self, normalizer):
        xml = (
            "<rss><item><title>X</title><price>10</price>"
            "<installment><amount>5</amount></installment><installments>6 cuotas</installments>"
            "</item></rss>"
        )
        assert normalizer.normalize(xml)[0].installments == 1

    def test_zero_months_clamped_to_one(self, normalizer):
        xml = "<rss><item><title>X</title><price>10</price><installment><months>0</months></installment></item></rss>"
        assert normalizer.normalize(xml)[0].installments == 1

    def test_free_shipping_threshold_is_strict(self, normalizer):
        xml = "<rss><item><title>X</title><price>100000</price></item></rss>"
        assert normalizer.normalize(xml)[0].free_shipping is False


class TestNormalizerErrors:
    def test_malformed_xml(self, normalizer):
        with pytest.raises(FeedParseError):
            normalizer.normalize("<rss><item><title>broken</item>")

    def test_empty_document(self, normalizer):
        with pytest.raises(FeedParseError):
            normalizer.normalize("")

    def test_html_document_is_not_xml(self, normalizer, proxy_error_html):
        with pytest.raises((FeedParseError, NoProductsFound)):
            normalizer.normalize(proxy_error_html)

    def test_no_product_elements(self, normalizer):
        with pytest.raises(NoProductsFound, match="no contiene productos"):
            normalizer.normalize("<rss><channel><title>Vacío</title></channel></rss>")

    def test_every_record_filtered(self, normalizer):
        with pytest.raises(EmptyAfterFiltering):
            normalizer.normalize("<rss><item><description>x</description></item><item/></rss>")


class TestProxyImageUrl:
    def test_empty(self):
        assert proxy_image_url("") == ""

    def test_custom_template(self):
        assert proxy_image_url("https://a.example.com/x.png?s=1", "https://p.example.com/{url}") == (
            "https://p.example.com/https%3A%2F%2Fa.example.com%2Fx.png"
        )

    def test_from_settings(self):
        normalizer = FeedNormalizer.from_settings({"images": {"proxy_template": "https://p.example.com/{url}"}})
        assert normalizer.image_proxy_template == "https://p.example.com/{url}"
