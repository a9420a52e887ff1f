"""Catalogue management: commands and handler for admin product upkeep."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from animalshop.catalogue.ledger import find_category, get_product
from animalshop.catalogue.product import Product
from animalshop.domain import shop


@shop.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    image = String(max_length=500)
    category = String(max_length=120)
    stock = Integer(required=True, min_value=0)


@shop.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.01)
    image = String(max_length=500)
    category = String(max_length=120)


@shop.command(part_of="Product")
class RestockProduct:
    """Set a product's stock to an absolute level."""

    product_id = Identifier(required=True)
    stock = Integer(required=True, min_value=0)


@shop.command(part_of="Product")
class RemoveProduct:
    product_id = Identifier(required=True)


def category_id_for(identifier):
    """Resolve a category id or slug; ``None`` passes through."""
    if identifier is None:
        return None
    category = find_category(identifier)
    if category is None:
        raise ValidationError({"category": [f"Category {identifier} does not exist"]})
    return str(category.id)


@shop.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            image=command.image,
            category_id=category_id_for(command.category),
        )
        current_domain.repository_for(Product).add(product)
        return product.view()

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = get_product(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            image=command.image,
            category_id=category_id_for(command.category),
        )
        repo.add(product)
        return product.view()

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = get_product(command.product_id)
        product.restock(command.stock)
        repo.add(product)
        return product.view()

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = get_product(command.product_id)
        repo._dao.delete(product)
        return product.view()
