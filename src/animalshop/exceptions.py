"""Domain failures that carry more than a message.

Both classes extend protean's own exceptions so the FastAPI integration keeps
mapping them (``ObjectNotFoundError`` to 404, ``ValidationError`` to 400).
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class ResourceNotFoundError(ObjectNotFoundError):
    """A referenced resource is missing, or is not visible to the caller."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds the product's current stock."""

    def __init__(
        self,
        product_id: str,
        available: int,
        requested: int,
        in_cart: int | None = None,
        product_name: str | None = None,
    ):
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        self.in_cart = in_cart

        if product_name is not None:
            message = f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}"
        elif in_cart is not None:
            message = f"Insufficient stock. Available: {available}, In cart: {in_cart}, Requested: {requested}"
        else:
            message = f"Insufficient stock. Available: {available}, Requested: {requested}"

        super().__init__({"quantity": [message]})

    def details(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "available": self.available,
            "in_cart": self.in_cart,
            "requested": self.requested,
        }


class AuthenticationError(Exception):
    """Credentials or bearer token were missing, wrong or expired."""

    def __init__(self, message: str = "Not authenticated"):
        self.message = message
        super().__init__(message)


class PermissionDeniedError(Exception):
    """The caller is authenticated but lacks the required role."""

    def __init__(self, message: str = "Insufficient permissions"):
        self.message = message
        super().__init__(message)
