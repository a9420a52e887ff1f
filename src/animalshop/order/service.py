"""Entry points for checkout and order status changes.

Lock order: the cart owner (checkout) or the order (status changes) first,
then every product whose stock the operation may move.
"""

import structlog
from protean.utils.globals import current_domain

from animalshop.cart.cart import Cart, CartOwner
from animalshop.cart.service import require_user
from animalshop.locking import cart_key, locks, order_key, product_key
from animalshop.order.checkout import Checkout
from animalshop.order.lifecycle import CancelOrder, UpdateOrderStatus
from animalshop.order.queries import find_order

logger = structlog.get_logger(__name__)


def _product_locks(lines):
    return [product_key(line.product_id) for line in lines]


def checkout(owner: CartOwner, address_id=None) -> dict:
    user_id = require_user(owner, "check out")

    with locks.hold(cart_key(owner.key)):
        cart = current_domain.repository_for(Cart).for_owner(owner.key)
        lines = cart.items if cart is not None else []

        with locks.hold(*_product_locks(lines)):
            order = current_domain.process(Checkout(user_id=user_id, address_id=address_id), asynchronous=False)

    logger.info(
        "order_placed",
        user_id=user_id,
        order_id=order["id"],
        order_number=order["order_number"],
        total=order["total"],
    )
    return order


def update_status(order_id, status: str) -> dict:
    with locks.hold(order_key(order_id)):
        order = find_order(order_id)
        lines = order.items if order is not None else []

        with locks.hold(*_product_locks(lines)):
            result = current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)

    logger.info("order_status_changed", order_id=order_id, status=status)
    return result


def cancel(order_id, user_id) -> dict:
    with locks.hold(order_key(order_id)):
        order = find_order(order_id)
        lines = order.items if order is not None else []

        with locks.hold(*_product_locks(lines)):
            result = current_domain.process(CancelOrder(order_id=order_id, user_id=user_id), asynchronous=False)

    logger.info("order_cancelled", order_id=order_id, user_id=user_id)
    return result
