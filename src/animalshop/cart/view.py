"""Cart enrichment: join stored cart lines with live product data.

Read-only. Lines whose product has vanished are left out of the view (the
stored cart keeps them) and a shipping address that can no longer be resolved
is simply not shown.
"""

import structlog
from protean.utils.globals import current_domain

from animalshop.addresses.queries import get_owned_address
from animalshop.cart.cart import Cart
from animalshop.catalogue.ledger import find_product

logger = structlog.get_logger(__name__)


def empty_view() -> dict:
    """What an owner without a stored cart sees. Never persisted."""
    return {"id": "", "items": [], "item_count": 0, "total": 0.0}


def build_cart_view(cart: Cart) -> dict:
    items = []
    item_count = 0
    total = 0.0
    missing = []

    for line in cart.items:
        product = find_product(line.product_id)
        if product is None:
            missing.append(str(line.product_id))
            continue

        line_total = round(product.price * line.quantity, 2)
        items.append(
            {
                "product_id": str(line.product_id),
                "quantity": line.quantity,
                "added_at": line.added_at.isoformat() if line.added_at else None,
                "product": product.summary(),
                "line_total": line_total,
            }
        )
        item_count += line.quantity
        total += line_total

    if missing:
        logger.warning("cart_lines_hidden", cart_id=str(cart.id), product_ids=missing)

    view = {
        "id": str(cart.id),
        "items": items,
        "item_count": item_count,
        "total": round(total, 2),
    }

    if cart.shipping_address_id:
        view["shipping_address_id"] = str(cart.shipping_address_id)
        if cart.owner.is_user:
            address = get_owned_address(cart.shipping_address_id, cart.owner.identifier)
            if address is not None:
                view["shipping_address"] = address.shipping_label()

    return view


def get_cart(owner) -> dict:
    cart = current_domain.repository_for(Cart).for_owner(owner.key)
    if cart is None:
        return empty_view()
    return build_cart_view(cart)
