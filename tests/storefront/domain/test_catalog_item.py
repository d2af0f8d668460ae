"""Tests for the CatalogItem aggregate — listing and stock decrement."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalog.events import CatalogItemListed, ItemSoldOut, StockDecremented
from storefront.catalog.item import CatalogItem
from storefront.exceptions import InsufficientStock


def _make_item(**overrides):
    defaults = {"item_id": "A", "name": "Vada Pao", "price": 25, "stock": 10}
    defaults.update(overrides)
    return CatalogItem.create(**defaults)


class TestCreateCatalogItem:
    def test_create_keeps_given_id_as_string(self):
        item = _make_item(item_id=1)
        assert item.id == "1"

    def test_create_raises_listed_event(self):
        item = _make_item()
        listed = [e for e in item._events if isinstance(e, CatalogItemListed)]
        assert len(listed) == 1
        assert listed[0].stock == 10

    def test_metadata_is_kept(self):
        item = _make_item(description="Spicy", category="snacks", rating=4.5, image_ref="/vada.jpg")
        assert item.category == "snacks"
        assert item.rating == 4.5

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _make_item(price=0)

    def test_stock_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            _make_item(stock=-1)


class TestDecrementStock:
    def test_decrement_reduces_stock(self):
        item = _make_item(stock=10)
        item.decrement_stock(3)
        assert item.stock == 7

    def test_decrement_to_zero(self):
        item = _make_item(stock=3)
        item.decrement_stock(3)
        assert item.stock == 0

    def test_decrement_zero_is_allowed(self):
        item = _make_item(stock=3)
        item.decrement_stock(0)
        assert item.stock == 3

    def test_decrement_more_than_stock_fails(self):
        item = _make_item(stock=2)
        with pytest.raises(InsufficientStock) as exc_info:
            item.decrement_stock(3)
        assert "stock" in exc_info.value.messages
        assert item.stock == 2

    def test_negative_amount_fails(self):
        item = _make_item(stock=2)
        with pytest.raises(InsufficientStock):
            item.decrement_stock(-1)
        assert item.stock == 2

    def test_insufficient_stock_is_a_validation_error(self):
        item = _make_item(stock=0)
        with pytest.raises(ValidationError):
            item.decrement_stock(1)

    def test_decrement_raises_event(self):
        item = _make_item(stock=10)
        item._events.clear()
        item.decrement_stock(4, order_id="ORD-1")
        assert len(item._events) == 1
        event = item._events[0]
        assert isinstance(event, StockDecremented)
        assert event.previous_stock == 10
        assert event.new_stock == 6
        assert event.order_id == "ORD-1"

    def test_selling_out_raises_sold_out_event(self):
        item = _make_item(stock=2)
        item._events.clear()
        item.decrement_stock(2)
        assert any(isinstance(e, ItemSoldOut) for e in item._events)

    def test_can_supply(self):
        item = _make_item(stock=2)
        assert item.can_supply(2)
        assert not item.can_supply(3)
        assert not item.can_supply(-1)
