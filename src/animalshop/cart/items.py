"""Cart line management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from animalshop.cart.cart import Cart, CartOwner, OwnerKind
from animalshop.cart.view import build_cart_view
from animalshop.catalogue.ledger import get_product
from animalshop.config import MAX_ITEM_QUANTITY
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError


@shop.command(part_of="Cart")
class AddCartItem:
    owner_kind = String(required=True, choices=OwnerKind)
    owner_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)


@shop.command(part_of="Cart")
class UpdateCartItem:
    owner_kind = String(required=True, choices=OwnerKind)
    owner_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)


@shop.command(part_of="Cart")
class RemoveCartItem:
    owner_kind = String(required=True, choices=OwnerKind)
    owner_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@shop.command(part_of="Cart")
class ClearCart:
    owner_kind = String(required=True, choices=OwnerKind)
    owner_id = String(required=True, max_length=255)


def owner_of(command) -> CartOwner:
    return CartOwner(kind=command.owner_kind, identifier=command.owner_id)


def _existing_cart(repo, owner):
    cart = repo.for_owner(owner.key)
    if cart is None:
        raise ResourceNotFoundError("Cart")
    return cart


@shop.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        owner = owner_of(command)
        product = get_product(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(owner.key) or Cart.create(owner)
        cart.add_item(product.id, command.quantity, available_stock=product.stock)
        repo.add(cart)
        return build_cart_view(cart)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, owner_of(command))
        if cart.line_for(command.product_id) is None:
            raise ResourceNotFoundError("Cart item")
        product = get_product(command.product_id)

        cart.update_item(command.product_id, command.quantity, available_stock=product.stock)
        repo.add(cart)
        return build_cart_view(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _existing_cart(repo, owner_of(command))
        cart.remove_item(command.product_id)
        repo.add(cart)
        return build_cart_view(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_owner(owner_of(command).key)
        if cart is not None:
            repo.discard(cart)
        return {"message": "Cart cleared"}
