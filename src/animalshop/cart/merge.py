"""Login-time merge of a guest cart into the user's cart.

Two carts that were each valid on their own can exceed stock once combined,
so the merged cart goes through a stock revalidation pass that clamps or
drops lines rather than failing the login.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from animalshop.cart.cart import Cart, CartOwner
from animalshop.cart.view import build_cart_view, empty_view
from animalshop.catalogue.ledger import find_product
from animalshop.domain import shop

logger = structlog.get_logger(__name__)


@shop.command(part_of="Cart")
class MergeCarts:
    """Fold the cart of ``guest_id`` into the cart of ``user_id``."""

    user_id = Identifier(required=True)
    guest_id = String(required=True, max_length=255)


@shop.command_handler(part_of=Cart)
class MergeCartsHandler:
    @handle(MergeCarts)
    def merge_carts(self, command):
        repo = current_domain.repository_for(Cart)
        user = CartOwner.user(command.user_id)
        guest = CartOwner.guest(command.guest_id)

        guest_cart = repo.for_owner(guest.key)
        user_cart = repo.for_owner(user.key)

        if guest_cart is None:
            return build_cart_view(user_cart) if user_cart is not None else empty_view()

        if user_cart is None:
            guest_cart.reassign_to(user)
            cart = guest_cart
        else:
            user_cart.absorb(guest_cart)
            repo.discard(guest_cart)
            cart = user_cart

        clamped, dropped = cart.revalidate_stock(find_product)
        if clamped or dropped:
            logger.info(
                "merged_cart_revalidated",
                cart_id=str(cart.id),
                clamped=clamped,
                dropped=dropped,
            )

        repo.add(cart)
        return build_cart_view(cart)
