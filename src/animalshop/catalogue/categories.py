"""Category management: commands and handler for admin category upkeep.

Slugs are derived from names and kept unique; renaming a category moves its
slug. A category that still has products cannot be removed.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from animalshop.catalogue.category import Category, slugify
from animalshop.catalogue.ledger import count_category_products, get_category
from animalshop.domain import shop


@shop.command(part_of="Category")
class AddCategory:
    name = String(required=True, max_length=100)
    description = Text()
    image = String(max_length=500)


@shop.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    image = String(max_length=500)


@shop.command(part_of="Category")
class RemoveCategory:
    category_id = Identifier(required=True)


@shop.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(AddCategory)
    def add_category(self, command):
        repo = current_domain.repository_for(Category)
        category = Category.create(
            name=command.name,
            slug=slugify(command.name, repo.slugs_in_use()),
            description=command.description,
            image=command.image,
        )
        repo.add(category)
        return category.view()

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = get_category(command.category_id)

        slug = None
        if command.name is not None and command.name != category.name:
            slug = slugify(command.name, repo.slugs_in_use(exclude_id=category.id))

        category.update_details(
            slug=slug,
            name=command.name,
            description=command.description,
            image=command.image,
        )
        repo.add(category)
        return category.view()

    @handle(RemoveCategory)
    def remove_category(self, command):
        repo = current_domain.repository_for(Category)
        category = get_category(command.category_id)

        in_use = count_category_products(category.id)
        if in_use:
            raise ValidationError({"category": [f"Category {category.name} still has {in_use} product(s)"]})

        repo._dao.delete(category)
        return category.view()
