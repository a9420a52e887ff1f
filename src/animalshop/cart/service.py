"""Entry points for cart reads and writes.

Every write for an owner runs under that owner's lock, so two requests for
the same cart apply one after the other while carts of different owners
proceed independently.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from animalshop.cart.cart import CartOwner
from animalshop.cart.items import AddCartItem, ClearCart, RemoveCartItem, UpdateCartItem
from animalshop.cart.merge import MergeCarts
from animalshop.cart.shipping import SetShippingAddress
from animalshop.cart.view import get_cart
from animalshop.locking import cart_key, locks

logger = structlog.get_logger(__name__)


def require_user(owner: CartOwner, action: str) -> str:
    """Return the user id behind ``owner``; guests are turned away."""
    if not owner.is_user:
        raise ValidationError({"authentication": [f"Sign in to {action}"]})
    return owner.identifier


def view_cart(owner: CartOwner) -> dict:
    return get_cart(owner)


def add_item(owner: CartOwner, product_id, quantity: int) -> dict:
    with locks.hold(cart_key(owner.key)):
        cart = current_domain.process(
            AddCartItem(
                owner_kind=owner.kind,
                owner_id=owner.identifier,
                product_id=product_id,
                quantity=quantity,
            ),
            asynchronous=False,
        )
    logger.info("cart_item_added", owner_key=owner.key, product_id=product_id, quantity=quantity)
    return cart


def update_item(owner: CartOwner, product_id, quantity: int) -> dict:
    with locks.hold(cart_key(owner.key)):
        cart = current_domain.process(
            UpdateCartItem(
                owner_kind=owner.kind,
                owner_id=owner.identifier,
                product_id=product_id,
                quantity=quantity,
            ),
            asynchronous=False,
        )
    logger.info("cart_item_updated", owner_key=owner.key, product_id=product_id, quantity=quantity)
    return cart


def remove_item(owner: CartOwner, product_id) -> dict:
    with locks.hold(cart_key(owner.key)):
        cart = current_domain.process(
            RemoveCartItem(owner_kind=owner.kind, owner_id=owner.identifier, product_id=product_id),
            asynchronous=False,
        )
    logger.info("cart_item_removed", owner_key=owner.key, product_id=product_id)
    return cart


def clear_cart(owner: CartOwner) -> dict:
    with locks.hold(cart_key(owner.key)):
        result = current_domain.process(
            ClearCart(owner_kind=owner.kind, owner_id=owner.identifier),
            asynchronous=False,
        )
    logger.info("cart_cleared", owner_key=owner.key)
    return result


def set_shipping_address(owner: CartOwner, address_id) -> dict:
    user_id = require_user(owner, "set a shipping address")
    with locks.hold(cart_key(owner.key)):
        cart = current_domain.process(
            SetShippingAddress(user_id=user_id, address_id=address_id),
            asynchronous=False,
        )
    logger.info("shipping_address_selected", owner_key=owner.key, address_id=address_id)
    return cart


def merge_carts(user_id, guest_id) -> dict:
    user, guest = CartOwner.user(user_id), CartOwner.guest(guest_id)
    with locks.hold(cart_key(user.key), cart_key(guest.key)):
        cart = current_domain.process(MergeCarts(user_id=user_id, guest_id=guest_id), asynchronous=False)
    logger.info("carts_merged", user_id=user_id, guest_id=guest_id, item_count=cart["item_count"])
    return cart
