"""Domain events for the Order aggregate."""

from protean.fields import Float, Identifier, Integer, String

from animalshop.domain import shop


@shop.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    order_id = Identifier(required=True)
    order_number = Integer(required=True)
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)


@shop.event(part_of="Order")
class OrderStatusChanged:
    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)


@shop.event(part_of="Order")
class OrderCancelled:
    """An order was cancelled and its stock handed back."""

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=20)
    cancelled_by = String(required=True, max_length=20)
