"""Pydantic request/response schemas for the Animal Shop API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Shared ---


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str


# --- Accounts ---


class CredentialsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "correct-horse-battery",
                }
            ]
        }
    }

    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=8, max_length=72)


class ChangeRoleRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"role": "admin"}]}}

    role: str = Field(..., max_length=10)


class AccountResponse(BaseModel):
    id: str
    email: str
    role: str
    created_at: str | None = None
    updated_at: str | None = None


class AccountPage(BaseModel):
    data: list[AccountResponse]
    meta: PageMeta


# --- Products ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Dog Food Premium",
                    "price": 49.99,
                    "description": "High-quality dog food for all breeds",
                    "image": "https://example.com/dog-food.jpg",
                    "category": "dog-food",
                    "stock": 100,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=120, description="Category id or slug")
    stock: int = 0


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Dog Food Premium (5kg)",
                    "price": 54.99,
                }
            ]
        }
    }

    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = None
    description: str | None = None
    image: str | None = Field(None, max_length=500)
    category: str | None = Field(None, max_length=120, description="Category id or slug")


class RestockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"stock": 250}]}}

    stock: int


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float
    image: str | None = None
    category_id: str | None = None
    stock: int
    created_at: str | None = None
    updated_at: str | None = None


class ProductPage(BaseModel):
    data: list[ProductResponse]
    meta: PageMeta


# --- Categories ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Dog Food",
                    "description": "Dry and wet food for dogs",
                    "image": "https://example.com/dog-food.jpg",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CategoryPage(BaseModel):
    data: list[CategoryResponse]
    meta: PageMeta


# --- Addresses ---


class CreateAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "label": "Home",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "address1": "12 Kennel Lane",
                    "city": "Springfield",
                    "state": "IL",
                    "postal_code": "62701",
                    "country": "US",
                    "phone": "+1 555 0100",
                    "is_default": False,
                }
            ]
        }
    }

    label: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address1: str = Field(..., min_length=1, max_length=255)
    address2: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=2, max_length=100)
    phone: str | None = Field(None, max_length=30)
    is_default: bool = False


class UpdateAddressRequest(BaseModel):
    label: str | None = Field(None, min_length=1, max_length=50)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    address1: str | None = Field(None, min_length=1, max_length=255)
    address2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=100)
    postal_code: str | None = Field(None, min_length=1, max_length=20)
    country: str | None = Field(None, min_length=2, max_length=100)
    phone: str | None = Field(None, max_length=30)
    is_default: bool | None = None


class AddressResponse(BaseModel):
    id: str
    user_id: str
    label: str
    first_name: str
    last_name: str
    address1: str
    address2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str
    phone: str | None = None
    is_default: bool
    created_at: str | None = None
    updated_at: str | None = None


class AddressPage(BaseModel):
    data: list[AddressResponse]
    meta: PageMeta


# --- Cart ---


class AddCartItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str = Field(..., min_length=1)
    quantity: int


class UpdateCartItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity": 3}]}}

    quantity: int


class ShippingAddressRequest(BaseModel):
    address_id: str = Field(..., min_length=1)


class MergeCartRequest(BaseModel):
    guest_id: str = Field(..., min_length=1, max_length=255)


class CheckoutRequest(BaseModel):
    address_id: str | None = None


class CartProduct(BaseModel):
    id: str
    name: str
    price: float
    image: str | None = None
    stock: int


class CartItemResponse(BaseModel):
    product_id: str
    quantity: int
    added_at: str | None = None
    product: CartProduct
    line_total: float


class ShippingAddressSnapshot(BaseModel):
    first_name: str
    last_name: str
    address1: str
    address2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str


class CartResponse(BaseModel):
    id: str
    items: list[CartItemResponse]
    item_count: int
    total: float
    shipping_address_id: str | None = None
    shipping_address: ShippingAddressSnapshot | None = None


class LoginResponse(BaseModel):
    user: AccountResponse
    token: str
    cart: CartResponse | None = None


# --- Orders ---


class UpdateOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "processing"}]}}

    status: str = Field(..., max_length=20)


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    price: float
    quantity: int


class OrderResponse(BaseModel):
    id: str
    order_number: int
    user_id: str
    address_id: str
    items: list[OrderItemResponse]
    total: float
    status: str
    created_at: str | None = None
    updated_at: str | None = None


class OrderPage(BaseModel):
    data: list[OrderResponse]
    meta: PageMeta
