"""Domain events for the Product and Category aggregates."""

from protean.fields import Float, Identifier, Integer, String

from animalshop.domain import shop


@shop.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    stock = Integer(required=True)


@shop.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive fields or price of a product changed."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    price = Float()


@shop.event(part_of="Product")
class ProductRestocked:
    """Stock level was set by an administrator."""

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@shop.event(part_of="Product")
class StockDebited:
    """Stock was taken for a placed order."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@shop.event(part_of="Product")
class StockCredited:
    """Stock was returned by a cancelled order."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining = Integer(required=True)


@shop.event(part_of="Category")
class CategoryAdded:
    category_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=120)


@shop.event(part_of="Category")
class CategoryDetailsUpdated:
    """Name, description or image of a category changed; a rename moves the slug."""

    category_id = Identifier(required=True)
    name = String(max_length=100)
    slug = String(required=True, max_length=120)
    previous_slug = String(required=True, max_length=120)
