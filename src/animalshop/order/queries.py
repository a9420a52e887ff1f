"""Order lookups.

Customers only ever see their own orders; anyone else's order is reported as
not found.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from animalshop.config import DEFAULT_PAGE_SIZE
from animalshop.exceptions import ResourceNotFoundError
from animalshop.order.order import Order
from animalshop.utils.pagination import paginate


def find_order(order_id) -> Order | None:
    if not order_id:
        return None
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        return None


def get_order(order_id, user_id=None, is_admin=False) -> dict:
    order = find_order(order_id)
    if order is None or not (is_admin or str(order.user_id) == str(user_id)):
        raise ResourceNotFoundError("Order")
    return order.view()


def list_orders(user_id=None, status=None, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    """Newest first. ``user_id=None`` lists every order (admin view)."""
    filters = {}
    if user_id is not None:
        filters["user_id"] = str(user_id)
    if status:
        filters["status"] = status

    query = current_domain.repository_for(Order)._dao.query
    if filters:
        query = query.filter(**filters)
    return paginate(query.order_by("-order_number"), page, limit, serializer=Order.view)
