"""Category aggregate: a named shelf of the catalogue, addressable by id or slug."""

import re
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from animalshop.catalogue.events import CategoryAdded, CategoryDetailsUpdated
from animalshop.domain import shop

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")


def slugify(name: str, taken=()) -> str:
    """Lower-case, strip punctuation, join words with dashes.

    When the base slug is in ``taken`` a numeric suffix is added:
    ``dog-food``, ``dog-food-1``, ``dog-food-2`` ...
    """
    base = _WHITESPACE.sub("-", _DISALLOWED.sub("", name.lower().strip()))
    if not base.strip("-"):
        raise ValidationError({"name": ["Name must contain letters or digits"]})

    taken = set(taken)
    if base not in taken:
        return base

    counter = 1
    while f"{base}-{counter}" in taken:
        counter += 1
    return f"{base}-{counter}"


@shop.aggregate
class Category:
    name = String(required=True, max_length=100)
    slug = String(required=True, max_length=120)
    description = Text()
    image = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, slug, description=None, image=None):
        now = datetime.now(UTC)
        category = cls(
            name=name,
            slug=slug,
            description=description,
            image=image,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryAdded(
                category_id=str(category.id),
                name=category.name,
                slug=category.slug,
            )
        )
        return category

    def update_details(self, slug=None, **changes):
        """Apply a partial update. A new ``slug`` accompanies a rename."""
        changes = {field: value for field, value in changes.items() if value is not None}
        if not changes:
            return

        previous_slug = self.slug
        for field, value in changes.items():
            setattr(self, field, value)
        if slug is not None:
            self.slug = slug
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryDetailsUpdated(
                category_id=str(self.id),
                name=changes.get("name"),
                slug=self.slug,
                previous_slug=previous_slug,
            )
        )

    def view(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "image": self.image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@shop.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug) -> Category | None:
        categories = self._dao.query.filter(slug=slug).all().items
        return categories[0] if categories else None

    def slugs_in_use(self, exclude_id=None) -> set[str]:
        return {
            category.slug
            for category in self._dao.query.limit(None).all().items
            if exclude_id is None or str(category.id) != str(exclude_id)
        }
