"""Cart aggregate: a shopper's pending selection of products.

A cart belongs to exactly one owner, either a signed-in user or an anonymous
guest, and there is at most one cart per owner. Line quantities are checked
against live stock when they change; merging carts is the one place where
over-stock lines are clamped instead of rejected.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from animalshop.cart.events import (
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartReassigned,
    CartsMerged,
    CartStockRevalidated,
    ShippingAddressSelected,
)
from animalshop.domain import shop
from animalshop.exceptions import InsufficientStockError, ResourceNotFoundError


class OwnerKind(Enum):
    USER = "user"
    GUEST = "guest"


@shop.value_object(part_of="Cart")
class CartOwner:
    """Who a cart belongs to: ``user`` or ``guest``, never both."""

    kind = String(required=True, choices=OwnerKind)
    identifier = String(required=True, max_length=255)

    @classmethod
    def user(cls, user_id):
        return cls(kind=OwnerKind.USER.value, identifier=str(user_id))

    @classmethod
    def guest(cls, guest_id):
        return cls(kind=OwnerKind.GUEST.value, identifier=str(guest_id))

    @property
    def is_user(self):
        return self.kind == OwnerKind.USER.value

    @property
    def key(self):
        return f"{self.kind}:{self.identifier}"


@shop.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@shop.aggregate
class Cart:
    owner = ValueObject(CartOwner, required=True)
    owner_key = String(required=True, max_length=255, unique=True)
    shipping_address_id = Identifier()
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, owner):
        now = datetime.now(UTC)
        return cls(owner=owner, owner_key=owner.key, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Line items
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _line(self, product_id):
        item = self.line_for(product_id)
        if item is None:
            raise ResourceNotFoundError("Cart item")
        return item

    def add_item(self, product_id, quantity, available_stock):
        """Add ``quantity`` units, merging with an existing line.

        The combined line quantity must fit ``available_stock``; on failure the
        cart is left untouched.
        """
        existing = self.line_for(product_id)
        in_cart = existing.quantity if existing else 0

        if in_cart + quantity > available_stock:
            raise InsufficientStockError(
                product_id=str(product_id),
                available=available_stock,
                in_cart=in_cart,
                requested=quantity,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = in_cart + quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=in_cart + quantity,
            )
        )

    def update_item(self, product_id, quantity, available_stock):
        """Replace a line's quantity outright."""
        item = self._line(product_id)

        if quantity > available_stock:
            raise InsufficientStockError(
                product_id=str(product_id),
                available=available_stock,
                requested=quantity,
            )

        previous = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self._line(product_id)
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def select_shipping_address(self, address_id):
        self.shipping_address_id = address_id
        self.updated_at = datetime.now(UTC)

        self.raise_(ShippingAddressSelected(cart_id=str(self.id), address_id=str(address_id)))

    # -------------------------------------------------------------------
    # Merging (guest -> user)
    # -------------------------------------------------------------------
    def reassign_to(self, owner):
        """Hand this cart over to a new owner in place."""
        previous_key = self.owner_key
        self.owner = owner
        self.owner_key = owner.key
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartReassigned(
                cart_id=str(self.id),
                previous_owner_key=previous_key,
                owner_key=self.owner_key,
            )
        )

    def absorb(self, other):
        """Fold every line of ``other`` into this cart, summing quantities."""
        now = datetime.now(UTC)
        for line in other.items:
            existing = self.line_for(line.product_id)
            if existing:
                existing.quantity += line.quantity
            else:
                self.add_items(
                    CartItem(
                        product_id=line.product_id,
                        quantity=line.quantity,
                        added_at=line.added_at or now,
                    )
                )
        self.updated_at = now

        self.raise_(
            CartsMerged(
                cart_id=str(self.id),
                source_cart_id=str(other.id),
                items_merged_count=len(other.items),
            )
        )

    def revalidate_stock(self, find_product):
        """Clamp each line to current stock; drop lines that cannot be kept.

        ``find_product`` maps a product id to a product or ``None``. Returns
        ``(clamped, dropped)``: a ``{product_id: quantity}`` dict and a list
        of product ids.
        """
        clamped = {}
        dropped = []

        for item in list(self.items):
            product = find_product(item.product_id)
            stock = product.stock if product is not None else 0
            if product is None or stock <= 0:
                self.remove_items(item)
                dropped.append(str(item.product_id))
            elif item.quantity > stock:
                item.quantity = stock
                clamped[str(item.product_id)] = stock

        if clamped or dropped:
            self.updated_at = datetime.now(UTC)
            self.raise_(
                CartStockRevalidated(
                    cart_id=str(self.id),
                    clamped=json.dumps(clamped),
                    dropped=json.dumps(dropped),
                )
            )

        return clamped, dropped

    @property
    def item_count(self):
        return sum(i.quantity for i in self.items)


@shop.repository(part_of=Cart)
class CartRepository:
    def for_owner(self, owner_key) -> Cart | None:
        """The stored cart for an owner key, or ``None``."""
        carts = self._dao.query.filter(owner_key=owner_key).all().items
        if not carts:
            return None
        return self.get(carts[0].id)

    def discard(self, cart) -> None:
        self._dao.delete(cart)
