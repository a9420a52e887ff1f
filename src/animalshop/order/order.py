"""Order aggregate: an immutable snapshot of a checkout plus its status.

Line items capture product name and price at checkout time, so later catalogue
changes never rewrite an order. Status moves only along the transition table
below; ``delivered`` and ``cancelled`` are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from animalshop.domain import shop
from animalshop.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING.value: {OrderStatus.PROCESSING.value, OrderStatus.CANCELLED.value},
    OrderStatus.PROCESSING.value: {OrderStatus.SHIPPED.value, OrderStatus.CANCELLED.value},
    OrderStatus.SHIPPED.value: {OrderStatus.DELIVERED.value},
    OrderStatus.DELIVERED.value: set(),
    OrderStatus.CANCELLED.value: set(),
}


def can_transition(current, target):
    return target in _VALID_TRANSITIONS.get(current, set())


@shop.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@shop.aggregate
class Order:
    order_number = Integer(required=True, unique=True)
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, order_number, user_id, address_id, lines):
        """Create a pending order from priced lines.

        ``lines`` is a list of dicts with product_id, product_name, price and
        quantity, taken from the catalogue at checkout.
        """
        now = datetime.now(UTC)
        total = round(sum(line["price"] * line["quantity"] for line in lines), 2)

        order = cls(
            order_number=order_number,
            user_id=user_id,
            address_id=address_id,
            total=total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(OrderItem(**line))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                address_id=str(address_id),
                total=total,
                item_count=sum(line["quantity"] for line in lines),
            )
        )
        return order

    def transition_to(self, new_status, cancelled_by="admin"):
        if not can_transition(self.status, new_status):
            raise ValidationError({"status": [f"Cannot change status from {self.status} to {new_status}"]})

        previous = self.status
        self.status = new_status
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
            )
        )
        if new_status == OrderStatus.CANCELLED.value:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    previous_status=previous,
                    cancelled_by=cancelled_by,
                )
            )

    def cancel_by_customer(self):
        if self.status != OrderStatus.PENDING.value:
            raise ValidationError({"status": ["Only pending orders can be cancelled"]})
        self.transition_to(OrderStatus.CANCELLED.value, cancelled_by="customer")

    def view(self):
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "user_id": str(self.user_id),
            "address_id": str(self.address_id),
            "items": [
                {
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "price": item.price,
                    "quantity": item.quantity,
                }
                for item in self.items
            ],
            "total": self.total,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
