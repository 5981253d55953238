"""Tests for bannergen/models/state.py"""

from bannergen.models import AppState


class TestAppState:
    def test_initial_state(self):
        state = AppState()
        assert state.products == []
        assert state.selected is None
        assert state.loading is False
        assert state.processing is False
        assert state.generated_count == 0
        assert state.error_message is None

    def test_replace_products_selects_first(self, tv_product, plain_product):
        state = AppState()
        state.replace_products([plain_product, tv_product])
        assert state.products == [plain_product, tv_product]
        assert state.selected is plain_product

    def test_replace_with_empty_clears_selection(self, tv_product):
        state = AppState(products=[tv_product], selected=tv_product)
        state.replace_products([])
        assert state.selected is None

    def test_clear_products(self, tv_product):
        state = AppState(products=[tv_product], selected=tv_product)
        state.clear_products()
        assert state.products == []
        assert state.selected is None

    def test_select(self, tv_product):
        state = AppState()
        state.select(tv_product)
        assert state.selected is tv_product
