"""Page envelopes for list queries."""

import math

from animalshop.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def page_window(page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> tuple[int, int, int]:
    """Clamp page/limit to sane bounds and return ``(page, offset, limit)``."""
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_PAGE_SIZE)
    return page, (page - 1) * limit, limit


def envelope(items: list, total: int, page: int, limit: int) -> dict:
    return {
        "data": items,
        "meta": {
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": math.ceil(total / limit),
        },
    }


def paginate(query, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, serializer=None) -> dict:
    """Run a protean queryset one page at a time.

    ``query`` is an unevaluated queryset (filters and ordering applied);
    ``serializer`` turns each record into a plain dict.
    """
    page, offset, limit = page_window(page, limit)
    results = query.offset(offset).limit(limit).all()
    items = results.items
    if serializer is not None:
        items = [serializer(item) for item in items]
    return envelope(items, results.total, page, limit)


def paginate_list(items: list, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict:
    page, offset, limit = page_window(page, limit)
    return envelope(items[offset : offset + limit], len(items), page, limit)
