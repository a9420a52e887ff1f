"""Order status changes: admin transitions and customer cancellation.

Cancelling, by either path, hands every line's quantity back to the product
it came from, provided that product still exists.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from animalshop.catalogue.ledger import find_product
from animalshop.catalogue.product import Product
from animalshop.domain import shop
from animalshop.exceptions import ResourceNotFoundError
from animalshop.order.order import Order, OrderStatus
from animalshop.order.queries import find_order

logger = structlog.get_logger(__name__)


@shop.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@shop.command(part_of="Order")
class CancelOrder:
    """Customer-initiated cancellation of a pending order."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


def _restock(order):
    repo = current_domain.repository_for(Product)
    skipped = []
    for item in order.items:
        product = find_product(item.product_id)
        if product is None:
            skipped.append(str(item.product_id))
            continue
        product.credit_stock(item.quantity)
        repo.add(product)

    if skipped:
        logger.info("restock_skipped_missing_products", order_id=str(order.id), product_ids=skipped)


@shop.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        order = find_order(command.order_id)
        if order is None:
            raise ResourceNotFoundError("Order")

        order.transition_to(command.status)
        if order.status == OrderStatus.CANCELLED.value:
            _restock(order)

        current_domain.repository_for(Order).add(order)
        return order.view()

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = find_order(command.order_id)
        if order is None or str(order.user_id) != str(command.user_id):
            raise ResourceNotFoundError("Order")

        order.cancel_by_customer()
        _restock(order)

        current_domain.repository_for(Order).add(order)
        return order.view()
