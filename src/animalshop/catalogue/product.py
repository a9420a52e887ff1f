"""Product aggregate: the catalogue entry that carries price and live stock."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from animalshop.catalogue.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductRestocked,
    StockCredited,
    StockDebited,
)
from animalshop.domain import shop
from animalshop.exceptions import InsufficientStockError


@shop.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    image = String(max_length=500)
    category_id = Identifier()
    stock = Integer(required=True, min_value=0, default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, stock=0, description=None, image=None, category_id=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            stock=stock,
            description=description,
            image=image,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply a partial update; ``None`` values are ignored."""
        changes = {field: value for field, value in changes.items() if value is not None}
        if not changes:
            return

        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=changes.get("name"),
                price=changes.get("price"),
            )
        )

    def restock(self, stock):
        previous = self.stock
        self.stock = stock
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                previous_stock=previous,
                new_stock=stock,
            )
        )

    # -------------------------------------------------------------------
    # Stock ledger
    # -------------------------------------------------------------------
    def has_stock_for(self, quantity):
        return quantity <= self.stock

    def debit_stock(self, quantity):
        """Take ``quantity`` units out of stock; never below zero."""
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                product_id=str(self.id),
                product_name=self.name,
                available=self.stock,
                requested=quantity,
            )

        self.stock -= quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDebited(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.stock,
            )
        )

    def credit_stock(self, quantity):
        self.stock += quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockCredited(
                product_id=str(self.id),
                quantity=quantity,
                remaining=self.stock,
            )
        )

    def summary(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "stock": self.stock,
        }

    def view(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "category_id": str(self.category_id) if self.category_id else None,
            "stock": self.stock,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
