"""FastAPI endpoints for the Animal Shop API."""

from fastapi import APIRouter, Depends, Header, Query

from animalshop.accounts import service as accounts
from animalshop.addresses import queries as address_queries
from animalshop.addresses import service as addresses
from animalshop.api.identity import Caller, admin_caller, cart_owner, current_caller
from animalshop.api.schemas import (
    AccountPage,
    AccountResponse,
    AddCartItemRequest,
    AddressPage,
    AddressResponse,
    CartResponse,
    CategoryPage,
    CategoryResponse,
    ChangeRoleRequest,
    CheckoutRequest,
    CreateAddressRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    CredentialsRequest,
    LoginResponse,
    MergeCartRequest,
    MessageResponse,
    OrderPage,
    OrderResponse,
    ProductPage,
    ProductResponse,
    RestockRequest,
    ShippingAddressRequest,
    UpdateAddressRequest,
    UpdateCartItemRequest,
    UpdateCategoryRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from animalshop.cart import service as carts
from animalshop.cart.cart import CartOwner
from animalshop.catalogue import ledger
from animalshop.catalogue import service as catalogue
from animalshop.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from animalshop.order import queries as order_queries
from animalshop.order import service as orders

auth_router = APIRouter(prefix="/auth", tags=["auth"])
product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])
address_router = APIRouter(prefix="/addresses", tags=["addresses"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# --- Auth endpoints ---


@auth_router.post("/register", status_code=201, response_model=AccountResponse)
async def register(body: CredentialsRequest) -> dict:
    return accounts.register(email=body.email, password=body.password)


@auth_router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(body: CredentialsRequest, x_guest_id: str | None = Header(None)) -> dict:
    return accounts.login(email=body.email, password=body.password, guest_id=x_guest_id)


@auth_router.post("/logout", response_model=MessageResponse)
async def logout(caller: Caller = Depends(current_caller)) -> dict:
    return {"message": "Logged out successfully"}


@auth_router.get("/me", response_model=AccountResponse)
async def me(caller: Caller = Depends(current_caller)) -> dict:
    return accounts.get_account(caller.user_id)


@auth_router.get("/users", response_model=AccountPage)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    caller: Caller = Depends(admin_caller),
) -> dict:
    return accounts.list_accounts(page=page, limit=limit)


@auth_router.patch("/users/{account_id}/role", response_model=AccountResponse)
async def change_role(account_id: str, body: ChangeRoleRequest, caller: Caller = Depends(admin_caller)) -> dict:
    return accounts.change_role(account_id, body.role)


# --- Product endpoints ---


@product_router.get("", response_model=ProductPage)
async def list_products(
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> dict:
    return ledger.list_products(category=category, page=page, limit=limit)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> dict:
    return ledger.get_product(product_id).view()


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.add_product(**body.model_dump())


@product_router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.update_product(product_id, **body.model_dump(exclude_unset=True))


@product_router.put("/{product_id}/stock", response_model=ProductResponse)
async def restock_product(product_id: str, body: RestockRequest, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.restock_product(product_id, body.stock)


@product_router.delete("/{product_id}", response_model=ProductResponse)
async def delete_product(product_id: str, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.remove_product(product_id)


# --- Category endpoints ---


@category_router.get("", response_model=CategoryPage)
async def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> dict:
    return ledger.list_categories(page=page, limit=limit)


@category_router.get("/{identifier}", response_model=CategoryResponse)
async def get_category(identifier: str) -> dict:
    return ledger.get_category(identifier).view()


@category_router.get("/{identifier}/products", response_model=ProductPage)
async def list_category_products(
    identifier: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> dict:
    return ledger.list_category_products(identifier, page=page, limit=limit)


@category_router.post("", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.add_category(**body.model_dump())


@category_router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, caller: Caller = Depends(admin_caller)
) -> dict:
    return catalogue.update_category(category_id, **body.model_dump(exclude_unset=True))


@category_router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(category_id: str, caller: Caller = Depends(admin_caller)) -> dict:
    return catalogue.remove_category(category_id)


# --- Address endpoints ---


@address_router.get("", response_model=AddressPage)
async def list_addresses(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    caller: Caller = Depends(current_caller),
) -> dict:
    return address_queries.list_addresses(caller.user_id, page=page, limit=limit)


@address_router.get("/{address_id}", response_model=AddressResponse)
async def get_address(address_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return address_queries.get_address(address_id, caller.user_id)


@address_router.post("", status_code=201, response_model=AddressResponse)
async def create_address(body: CreateAddressRequest, caller: Caller = Depends(current_caller)) -> dict:
    return addresses.add_address(caller.user_id, **body.model_dump())


@address_router.patch("/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: str, body: UpdateAddressRequest, caller: Caller = Depends(current_caller)
) -> dict:
    return addresses.update_address(caller.user_id, address_id, **body.model_dump(exclude_unset=True))


@address_router.delete("/{address_id}", response_model=AddressResponse)
async def delete_address(address_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return addresses.remove_address(caller.user_id, address_id)


@address_router.put("/{address_id}/default", response_model=AddressResponse)
async def set_default_address(address_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return addresses.set_default_address(caller.user_id, address_id)


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse, response_model_exclude_none=True)
async def get_cart(owner: CartOwner = Depends(cart_owner)) -> dict:
    return carts.view_cart(owner)


@cart_router.post("/items", response_model=CartResponse, response_model_exclude_none=True)
async def add_cart_item(body: AddCartItemRequest, owner: CartOwner = Depends(cart_owner)) -> dict:
    return carts.add_item(owner, body.product_id, body.quantity)


@cart_router.patch("/items/{product_id}", response_model=CartResponse, response_model_exclude_none=True)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, owner: CartOwner = Depends(cart_owner)
) -> dict:
    return carts.update_item(owner, product_id, body.quantity)


@cart_router.delete("/items/{product_id}", response_model=CartResponse, response_model_exclude_none=True)
async def remove_cart_item(product_id: str, owner: CartOwner = Depends(cart_owner)) -> dict:
    return carts.remove_item(owner, product_id)


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(owner: CartOwner = Depends(cart_owner)) -> dict:
    return carts.clear_cart(owner)


@cart_router.put("/shipping-address", response_model=CartResponse, response_model_exclude_none=True)
async def set_shipping_address(body: ShippingAddressRequest, owner: CartOwner = Depends(cart_owner)) -> dict:
    return carts.set_shipping_address(owner, body.address_id)


@cart_router.post("/merge", response_model=CartResponse, response_model_exclude_none=True)
async def merge_cart(body: MergeCartRequest, caller: Caller = Depends(current_caller)) -> dict:
    return carts.merge_carts(caller.user_id, body.guest_id)


@cart_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest | None = None, owner: CartOwner = Depends(cart_owner)) -> dict:
    return orders.checkout(owner, address_id=body.address_id if body else None)


# --- Order endpoints ---


@order_router.get("", response_model=OrderPage)
async def list_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    caller: Caller = Depends(current_caller),
) -> dict:
    user_id = None if caller.is_admin else caller.user_id
    return order_queries.list_orders(user_id=user_id, status=status, page=page, limit=limit)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return order_queries.get_order(order_id, user_id=caller.user_id, is_admin=caller.is_admin)


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, caller: Caller = Depends(admin_caller)
) -> dict:
    return orders.update_status(order_id, body.status)


@order_router.patch("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, caller: Caller = Depends(current_caller)) -> dict:
    return orders.cancel(order_id, caller.user_id)
