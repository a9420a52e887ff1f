"""Tests for the Cart aggregate: lines, ownership, merging and revalidation."""

import json
from types import SimpleNamespace

import pytest
from animalshop.cart.cart import Cart, CartOwner, OwnerKind
from animalshop.cart.events import (
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartReassigned,
    CartsMerged,
    CartStockRevalidated,
)
from animalshop.exceptions import InsufficientStockError, ResourceNotFoundError
from protean.exceptions import ValidationError


def _cart(owner=None):
    return Cart.create(owner or CartOwner.user("user-001"))


def _catalogue(**stocks):
    """A ``find_product`` stand-in backed by ``{product_id: stock}``."""

    def find(product_id):
        stock = stocks.get(str(product_id))
        return None if stock is None else SimpleNamespace(id=str(product_id), stock=stock)

    return find


class TestCartOwner:
    def test_user_owner(self):
        owner = CartOwner.user("user-001")
        assert owner.kind == OwnerKind.USER.value
        assert owner.is_user
        assert owner.key == "user:user-001"

    def test_guest_owner(self):
        owner = CartOwner.guest("guest-abc")
        assert not owner.is_user
        assert owner.key == "guest:guest-abc"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            CartOwner(kind="robot", identifier="r2")

    def test_create_records_owner_key(self):
        cart = _cart(CartOwner.guest("guest-abc"))
        assert cart.owner_key == "guest:guest-abc"
        assert cart.item_count == 0


class TestAddItem:
    def test_adds_new_line(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert isinstance(cart._events[-1], CartItemAdded)

    def test_merges_quantity_into_existing_line(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        cart.add_item("prod-001", 3, available_stock=10)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert cart._events[-1].line_quantity == 5

    def test_combined_quantity_checked_against_stock(self):
        cart = _cart()
        cart.add_item("prod-001", 3, available_stock=5)
        with pytest.raises(InsufficientStockError) as exc:
            cart.add_item("prod-001", 3, available_stock=5)

        assert cart.items[0].quantity == 3
        assert exc.value.in_cart == 3
        assert exc.value.messages["quantity"] == ["Insufficient stock. Available: 5, In cart: 3, Requested: 3"]

    def test_empty_cart_message_reports_zero_in_cart(self):
        cart = _cart()
        with pytest.raises(InsufficientStockError) as exc:
            cart.add_item("prod-001", 2, available_stock=1)
        assert "In cart: 0" in exc.value.messages["quantity"][0]
        assert len(cart.items) == 0


class TestUpdateAndRemove:
    def test_update_replaces_quantity(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        cart.update_item("prod-001", 7, available_stock=10)
        assert cart.items[0].quantity == 7
        event = cart._events[-1]
        assert isinstance(event, CartItemQuantityUpdated)
        assert (event.previous_quantity, event.new_quantity) == (2, 7)

    def test_update_over_stock_rejected(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        with pytest.raises(InsufficientStockError) as exc:
            cart.update_item("prod-001", 11, available_stock=10)
        assert cart.items[0].quantity == 2
        assert exc.value.messages["quantity"] == ["Insufficient stock. Available: 10, Requested: 11"]

    def test_update_missing_line_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            _cart().update_item("prod-404", 1, available_stock=10)

    def test_remove_line(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        cart.remove_item("prod-001")
        assert len(cart.items) == 0
        assert isinstance(cart._events[-1], CartItemRemoved)

    def test_remove_missing_line_not_found(self):
        with pytest.raises(ResourceNotFoundError):
            _cart().remove_item("prod-404")

    def test_item_count_sums_quantities(self):
        cart = _cart()
        cart.add_item("prod-001", 2, available_stock=10)
        cart.add_item("prod-002", 3, available_stock=10)
        assert cart.item_count == 5


class TestMerging:
    def test_reassign_moves_ownership(self):
        cart = _cart(CartOwner.guest("guest-abc"))
        cart.reassign_to(CartOwner.user("user-001"))
        assert cart.owner.is_user
        assert cart.owner_key == "user:user-001"
        assert cart._events[-1].previous_owner_key == "guest:guest-abc"
        assert isinstance(cart._events[-1], CartReassigned)

    def test_absorb_sums_overlapping_lines(self):
        user_cart = _cart()
        user_cart.add_item("prod-001", 2, available_stock=10)
        guest_cart = _cart(CartOwner.guest("guest-abc"))
        guest_cart.add_item("prod-001", 3, available_stock=10)
        guest_cart.add_item("prod-002", 1, available_stock=10)

        user_cart.absorb(guest_cart)

        quantities = {i.product_id: i.quantity for i in user_cart.items}
        assert quantities == {"prod-001": 5, "prod-002": 1}
        assert isinstance(user_cart._events[-1], CartsMerged)
        assert user_cart._events[-1].items_merged_count == 2


class TestRevalidation:
    def test_clamps_lines_over_stock(self):
        cart = _cart()
        cart.add_item("prod-001", 5, available_stock=10)

        clamped, dropped = cart.revalidate_stock(_catalogue(**{"prod-001": 3}))

        assert clamped == {"prod-001": 3}
        assert dropped == []
        assert cart.items[0].quantity == 3

    def test_drops_out_of_stock_and_missing_products(self):
        cart = _cart()
        cart.add_item("prod-001", 1, available_stock=10)
        cart.add_item("prod-002", 1, available_stock=10)
        cart.add_item("prod-003", 1, available_stock=10)

        clamped, dropped = cart.revalidate_stock(_catalogue(**{"prod-001": 0, "prod-003": 4}))

        assert sorted(dropped) == ["prod-001", "prod-002"]
        assert [i.product_id for i in cart.items] == ["prod-003"]
        event = cart._events[-1]
        assert isinstance(event, CartStockRevalidated)
        assert sorted(json.loads(event.dropped)) == ["prod-001", "prod-002"]

    def test_nothing_to_fix_raises_no_event(self):
        cart = _cart()
        cart.add_item("prod-001", 1, available_stock=10)
        cart._events.clear()

        assert cart.revalidate_stock(_catalogue(**{"prod-001": 10})) == ({}, [])
        assert cart._events == []
