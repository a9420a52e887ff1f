"""Entry points for catalogue writes.

Stock-affecting writes share the per-product lock with checkout and
cancellation. Category writes, and product writes that name a category, share
one catalogue-wide key so slugs stay unique and a category cannot disappear
under a product being filed into it.
"""

import structlog
from protean.utils.globals import current_domain

from animalshop.catalogue.categories import AddCategory, RemoveCategory, UpdateCategory
from animalshop.catalogue.management import (
    AddProduct,
    RemoveProduct,
    RestockProduct,
    UpdateProductDetails,
)
from animalshop.locking import categories_key, locks, product_key

logger = structlog.get_logger(__name__)


def _category_keys(fields: dict) -> tuple[str, ...]:
    return (categories_key(),) if fields.get("category") is not None else ()


def add_product(**fields) -> dict:
    with locks.hold(*_category_keys(fields)):
        product = current_domain.process(AddProduct(**fields), asynchronous=False)
    logger.info("product_added", product_id=product["id"], stock=product["stock"])
    return product


def update_product(product_id, **changes) -> dict:
    with locks.hold(product_key(product_id), *_category_keys(changes)):
        return current_domain.process(UpdateProductDetails(product_id=product_id, **changes), asynchronous=False)


def restock_product(product_id, stock: int) -> dict:
    with locks.hold(product_key(product_id)):
        product = current_domain.process(RestockProduct(product_id=product_id, stock=stock), asynchronous=False)
    logger.info("product_restocked", product_id=product_id, stock=stock)
    return product


def remove_product(product_id) -> dict:
    with locks.hold(product_key(product_id)):
        product = current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    logger.info("product_removed", product_id=product_id)
    return product


def add_category(**fields) -> dict:
    with locks.hold(categories_key()):
        category = current_domain.process(AddCategory(**fields), asynchronous=False)
    logger.info("category_added", category_id=category["id"], slug=category["slug"])
    return category


def update_category(category_id, **changes) -> dict:
    with locks.hold(categories_key()):
        category = current_domain.process(UpdateCategory(category_id=category_id, **changes), asynchronous=False)
    logger.info("category_updated", category_id=category_id, slug=category["slug"])
    return category


def remove_category(category_id) -> dict:
    with locks.hold(categories_key()):
        category = current_domain.process(RemoveCategory(category_id=category_id), asynchronous=False)
    logger.info("category_removed", category_id=category_id)
    return category
