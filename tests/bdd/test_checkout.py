"""BDD tests for checkout atomicity."""

from animalshop.exceptions import InsufficientStockError
from animalshop.order import queries
from animalshop.order import service as orders
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


@when(parsers.cfparse('user "{user_id}" checks out'))
def check_out(saved_addresses, owner, order, error, user_id):
    address = saved_addresses[(user_id, "Home")]
    try:
        order.update(orders.checkout(owner("user", user_id), address_id=address["id"]))
    except (InsufficientStockError, ValidationError) as exc:
        error["exc"] = exc


@then(parsers.cfparse('user "{user_id}" has a pending order totalling {total:f}'))
def pending_order(order, user_id, total):
    placed = queries.get_order(order["id"], user_id=user_id)
    assert placed["status"] == "pending"
    assert placed["total"] == total
