"""Page/limit pagination and caller-controlled sorting over protean querysets.

Listing endpoints for products, orders and categories all accept
``page``/``limit``/``sort`` query parameters; this module turns them into
offset/limit/order_by on a queryset and computes the pagination metadata
returned to clients.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Page:
    items: list[Any] = field(default_factory=list)
    current: int = 1
    pages: int = 0
    total: int = 0
    limit: int = 20

    def pagination(self) -> dict:
        return {
            "current": self.current,
            "pages": self.pages,
            "total": self.total,
            "limit": self.limit,
        }


def validate_window(page: int, limit: int) -> None:
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be 1 or greater"]
    if limit < 1 or limit > MAX_PAGE_SIZE:
        errors["limit"] = [f"Limit must be between 1 and {MAX_PAGE_SIZE}"]
    if errors:
        raise ValidationError(errors)


def resolve_sort(sort: str | None, allowed: dict[str, str], default: str = "-created_at") -> str:
    """Translate a client sort key such as ``-createdAt`` into a field ordering.

    ``allowed`` maps the public key (camelCase or snake_case) to the
    aggregate attribute name. A leading ``-`` requests descending order.
    """
    if not sort:
        return default

    descending = sort.startswith("-")
    key = sort.lstrip("-+")
    if key not in allowed:
        raise ValidationError({"sort": [f"Cannot sort by '{key}'. Allowed: {', '.join(sorted(allowed))}"]})

    return f"-{allowed[key]}" if descending else allowed[key]


def fetch_page(queryset, page: int, limit: int) -> Page:
    """Run ``queryset`` for one page and report the totals across all pages."""
    validate_window(page, limit)

    result = queryset.offset((page - 1) * limit).limit(limit).all()
    total = result.total
    return Page(
        items=list(result.items),
        current=page,
        pages=math.ceil(total / limit) if total else 0,
        total=total,
        limit=limit,
    )


def iterate_all(queryset, batch_size: int = 500):
    """Yield every record matched by ``queryset``, one batch at a time."""
    offset = 0
    while True:
        items = queryset.offset(offset).limit(batch_size).all().items
        yield from items
        if len(items) < batch_size:
            return
        offset += batch_size
