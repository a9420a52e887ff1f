"""Read side of the catalogue: products with their stock, and categories."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from animalshop.catalogue.category import Category
from animalshop.catalogue.product import Product
from animalshop.config import DEFAULT_PAGE_SIZE
from animalshop.exceptions import ResourceNotFoundError
from animalshop.utils.pagination import envelope, page_window, paginate


def find_product(product_id) -> Product | None:
    if not product_id:
        return None
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        return None


def get_product(product_id) -> Product:
    product = find_product(product_id)
    if product is None:
        raise ResourceNotFoundError("Product")
    return product


def list_products(category: str | None = None, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    """Products ordered by name, optionally narrowed to one category (id or slug).

    An unknown category matches nothing.
    """
    query = current_domain.repository_for(Product)._dao.query
    if category:
        found = find_category(category)
        if found is None:
            page, _, limit = page_window(page, limit)
            return envelope([], 0, page, limit)
        query = query.filter(category_id=str(found.id))
    return paginate(query.order_by("name"), page, limit, serializer=Product.view)


def find_category(identifier) -> Category | None:
    """Look a category up by id first, then by slug."""
    if not identifier:
        return None
    repo = current_domain.repository_for(Category)
    try:
        return repo.get(str(identifier))
    except ObjectNotFoundError:
        return repo.find_by_slug(str(identifier))


def get_category(identifier) -> Category:
    category = find_category(identifier)
    if category is None:
        raise ResourceNotFoundError("Category")
    return category


def list_categories(page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    query = current_domain.repository_for(Category)._dao.query.order_by("name")
    return paginate(query, page, limit, serializer=Category.view)


def list_category_products(identifier, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    """Products of one category; a missing category is not found."""
    category = get_category(identifier)
    return list_products(category=str(category.id), page=page, limit=limit)


def count_category_products(category_id) -> int:
    query = current_domain.repository_for(Product)._dao.query.filter(category_id=str(category_id))
    return query.all().total
