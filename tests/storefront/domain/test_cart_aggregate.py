"""Tests for the Cart aggregate: lines, merging and clearing."""

import pytest
from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartCreated, CartItemAdded, CartItemRemoved
from storefront.errors import NotFound


class TestCartCreation:
    def test_create_with_session_id(self):
        cart = Cart.create(session_id="sess-001")
        assert cart.session_id == "sess-001"
        assert len(cart.items) == 0

    def test_create_sets_timestamps(self):
        cart = Cart.create(session_id="sess-001")
        assert cart.created_at is not None
        assert cart.updated_at is not None

    def test_create_raises_cart_created(self):
        cart = Cart.create(session_id="sess-001")
        assert isinstance(cart._events[0], CartCreated)


class TestCartLines:
    def test_add_item(self):
        cart = Cart.create(session_id="sess-001")
        cart.add_item(product_id="prod-001", quantity=2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].added_at is not None

    def test_adding_same_product_merges_lines(self):
        cart = Cart.create(session_id="sess-001")
        first = cart.add_item(product_id="prod-001", quantity=2)
        second = cart.add_item(product_id="prod-001", quantity=3)

        assert len(cart.items) == 1
        assert second.id == first.id
        assert cart.quantity_of("prod-001") == 5

    def test_merge_event_carries_line_quantity(self):
        cart = Cart.create(session_id="sess-001")
        cart.add_item(product_id="prod-001", quantity=2)
        cart._events.clear()
        cart.add_item(product_id="prod-001", quantity=3)

        event = cart._events[0]
        assert isinstance(event, CartItemAdded)
        assert event.quantity == 3
        assert event.line_quantity == 5

    def test_different_products_get_separate_lines(self):
        cart = Cart.create(session_id="sess-001")
        cart.add_item(product_id="prod-001", quantity=1)
        cart.add_item(product_id="prod-002", quantity=1)
        assert len(cart.items) == 2
        assert cart.item_count == 2

    def test_update_item_quantity(self):
        cart = Cart.create(session_id="sess-001")
        item = cart.add_item(product_id="prod-001", quantity=1)
        cart.update_item_quantity(item.id, 4)
        assert cart.quantity_of("prod-001") == 4

    def test_update_to_zero_removes_line(self):
        cart = Cart.create(session_id="sess-001")
        item = cart.add_item(product_id="prod-001", quantity=1)
        cart._events.clear()

        cart.update_item_quantity(item.id, 0)

        assert len(cart.items) == 0
        assert isinstance(cart._events[0], CartItemRemoved)

    def test_remove_item(self):
        cart = Cart.create(session_id="sess-001")
        item = cart.add_item(product_id="prod-001", quantity=1)
        cart.remove_item(item.id)
        assert len(cart.items) == 0

    def test_unknown_item_raises_not_found(self):
        cart = Cart.create(session_id="sess-001")
        with pytest.raises(NotFound):
            cart.remove_item("missing-item")
        with pytest.raises(NotFound):
            cart.update_item_quantity("missing-item", 2)

    def test_quantity_of_unknown_product_is_zero(self):
        cart = Cart.create(session_id="sess-001")
        assert cart.quantity_of("prod-404") == 0


class TestCartClear:
    def test_clear_removes_every_line(self):
        cart = Cart.create(session_id="sess-001")
        cart.add_item(product_id="prod-001", quantity=1)
        cart.add_item(product_id="prod-002", quantity=2)
        cart._events.clear()

        cart.clear()

        assert len(cart.items) == 0
        assert isinstance(cart._events[0], CartCleared)
        assert cart._events[0].items_removed == 2
