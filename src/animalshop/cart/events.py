"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String, Text

from animalshop.domain import shop


@shop.event(part_of="Cart")
class CartItemAdded:
    """Units of a product were added to a cart."""

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@shop.event(part_of="Cart")
class CartItemQuantityUpdated:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@shop.event(part_of="Cart")
class CartItemRemoved:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shop.event(part_of="Cart")
class ShippingAddressSelected:
    """A user picked the address their cart ships to."""

    cart_id = Identifier(required=True)
    address_id = Identifier(required=True)


@shop.event(part_of="Cart")
class CartReassigned:
    """A guest cart was handed over to a signed-in user."""

    cart_id = Identifier(required=True)
    previous_owner_key = String(required=True, max_length=255)
    owner_key = String(required=True, max_length=255)


@shop.event(part_of="Cart")
class CartsMerged:
    """A guest cart's lines were folded into a user's cart."""

    cart_id = Identifier(required=True)
    source_cart_id = Identifier(required=True)
    items_merged_count = Integer(required=True)


@shop.event(part_of="Cart")
class CartStockRevalidated:
    """Lines were clamped or dropped to fit current stock."""

    cart_id = Identifier(required=True)
    clamped = Text()  # JSON: {product_id: new_quantity}
    dropped = Text()  # JSON: [product_id, ...]
