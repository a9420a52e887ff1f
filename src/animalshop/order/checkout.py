"""Checkout: turn a user's cart into a pending order.

All-or-nothing. Every line is validated against live stock before any stock
moves; only then is stock debited, the order stored and the cart removed.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from animalshop.addresses.queries import get_owned_address
from animalshop.cart.cart import Cart, CartOwner
from animalshop.catalogue.ledger import find_product
from animalshop.catalogue.product import Product
from animalshop.domain import shop
from animalshop.exceptions import InsufficientStockError, ResourceNotFoundError
from animalshop.order.numbering import order_numbers
from animalshop.order.order import Order


@shop.command(part_of="Order")
class Checkout:
    user_id = Identifier(required=True)
    address_id = Identifier()  # Falls back to the cart's shipping address


def _priced_lines(cart):
    """Validate every cart line; return ``(product, line)`` pairs."""
    priced = []
    for item in cart.items:
        product = find_product(item.product_id)
        if product is None:
            raise ValidationError({"items": [f"Product {item.product_id} not found"]})
        if not product.has_stock_for(item.quantity):
            raise InsufficientStockError(
                product_id=str(product.id),
                product_name=product.name,
                available=product.stock,
                requested=item.quantity,
            )
        priced.append(
            (
                product,
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "price": product.price,
                    "quantity": item.quantity,
                },
            )
        )
    return priced


@shop.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_owner(CartOwner.user(command.user_id).key)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        address_id = command.address_id or cart.shipping_address_id
        if not address_id:
            raise ValidationError({"address_id": ["Shipping address is required"]})
        if get_owned_address(address_id, command.user_id) is None:
            raise ResourceNotFoundError("Address")

        priced = _priced_lines(cart)

        product_repo = current_domain.repository_for(Product)
        for product, line in priced:
            product.debit_stock(line["quantity"])
            product_repo.add(product)

        order = Order.place(
            order_number=order_numbers.next(),
            user_id=command.user_id,
            address_id=address_id,
            lines=[line for _, line in priced],
        )
        current_domain.repository_for(Order).add(order)
        cart_repo.discard(cart)

        return order.view()
