"""Shared BDD fixtures and step definitions for the Animal Shop."""

import pytest
from animalshop.addresses import service as addresses
from animalshop.cart import service as carts
from animalshop.cart.cart import CartOwner
from animalshop.catalogue import ledger
from animalshop.catalogue import service as catalogue
from animalshop.exceptions import InsufficientStockError
from animalshop.order import service as orders
from animalshop.order.order import Order
from protean import current_domain
from pytest_bdd import given, parsers, then

ADDRESS = {
    "first_name": "Jane",
    "last_name": "Doe",
    "address1": "12 Kennel Lane",
    "city": "Springfield",
    "state": "IL",
    "postal_code": "62701",
    "country": "US",
}


def _owner(kind, who):
    return CartOwner.user(who) if kind == "user" else CartOwner.guest(who)


@pytest.fixture()
def owner():
    """Build a cart owner from step text: ``user "u-1"`` or ``guest "g-1"``."""
    return _owner


@pytest.fixture()
def address_fields():
    return dict(ADDRESS)


@pytest.fixture()
def products():
    """Products created by the scenario, keyed by name."""
    return {}


@pytest.fixture()
def saved_addresses():
    """Saved addresses keyed by ``(user_id, label)``."""
    return {}


@pytest.fixture()
def order():
    return {}


@pytest.fixture()
def error():
    """Container for the exception a When step ran into."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with stock {stock:d}'))
def a_product(products, name, price, stock):
    products[name] = catalogue.add_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('{kind} "{who}" has {qty:d} of "{name}" in the cart'))
def cart_contains(products, kind, who, qty, name):
    carts.add_item(_owner(kind, who), products[name]["id"], qty)


@given(parsers.cfparse('user "{user_id}" has a saved address'))
def a_saved_address(saved_addresses, user_id):
    saved_addresses[(user_id, "Home")] = addresses.add_address(user_id, label="Home", **ADDRESS)


@given(parsers.cfparse('user "{user_id}" saved an address labelled "{label}"'))
def a_labelled_address(saved_addresses, user_id, label):
    saved_addresses[(user_id, label)] = addresses.add_address(user_id, label=label, **ADDRESS)


@given(parsers.cfparse('the stock of "{name}" drops to {stock:d}'))
def stock_drops(products, name, stock):
    catalogue.restock_product(products[name]["id"], stock)


@given(parsers.cfparse('"{name}" is removed from the catalogue'))
def removed_from_catalogue(products, name):
    catalogue.remove_product(products[name]["id"])


@given(parsers.cfparse('user "{user_id}" has placed an order for {qty:d} of "{name}"'))
def placed_order(products, order, user_id, qty, name):
    address = addresses.add_address(user_id, label="Home", **ADDRESS)
    shopper = CartOwner.user(user_id)
    carts.add_item(shopper, products[name]["id"], qty)
    order.update(orders.checkout(shopper, address_id=address["id"]))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is rejected for insufficient stock")
def rejected_for_stock(error):
    assert isinstance(error["exc"], InsufficientStockError)


@then(parsers.cfparse('{kind} "{who}" has {qty:d} of "{name}" in the cart'))
def cart_holds(products, kind, who, qty, name):
    view = carts.view_cart(_owner(kind, who))
    quantity = next((i["quantity"] for i in view["items"] if i["product_id"] == products[name]["id"]), 0)
    assert quantity == qty


@then(parsers.cfparse('{kind} "{who}" sees an empty cart'))
def empty_cart(kind, who):
    view = carts.view_cart(_owner(kind, who))
    assert view["id"] == ""
    assert view["items"] == []


@then(parsers.cfparse('"{name}" has stock {stock:d}'))
def product_stock(products, name, stock):
    assert ledger.get_product(products[name]["id"]).stock == stock


@then("no orders exist")
def no_orders():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
