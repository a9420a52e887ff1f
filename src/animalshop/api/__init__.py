"""Animal Shop HTTP API package."""

from animalshop.api.routes import (
    address_router,
    auth_router,
    cart_router,
    category_router,
    order_router,
    product_router,
)

__all__ = ["auth_router", "product_router", "category_router", "address_router", "cart_router", "order_router"]
