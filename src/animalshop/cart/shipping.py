"""Shipping address selection for a user's cart."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from animalshop.addresses.queries import get_owned_address
from animalshop.cart.cart import Cart, CartOwner
from animalshop.cart.view import build_cart_view
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError


@shop.command(part_of="Cart")
class SetShippingAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@shop.command_handler(part_of=Cart)
class ShippingAddressHandler:
    @handle(SetShippingAddress)
    def set_shipping_address(self, command):
        if get_owned_address(command.address_id, command.user_id) is None:
            raise ResourceNotFoundError("Address")

        owner = CartOwner.user(command.user_id)
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(owner.key) or Cart.create(owner)
        cart.select_shipping_address(command.address_id)
        repo.add(cart)
        return build_cart_view(cart)
