import math
from dataclasses import dataclass
from typing import Any, List

from rest_framework.exceptions import ValidationError

MAX_PAGE_SIZE = 100


@dataclass
class Page:
    items: List[Any]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def meta(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def _positive_int(raw, name, default):
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: [f"'{name}' must be an integer."]})
    if value < 1:
        raise ValidationError({name: [f"'{name}' must be greater than zero."]})
    return value


def parse_pagination(query_params, default_limit=20):
    """Read 1-based ``page`` and ``limit`` from query params, capping the page size."""
    page = _positive_int(query_params.get("page"), "page", 1)
    limit = _positive_int(query_params.get("limit"), "limit", default_limit)
    return page, min(limit, MAX_PAGE_SIZE)


def paginate(queryset, page: int, limit: int) -> Page:
    total = queryset.count()
    offset = (page - 1) * limit
    return Page(items=list(queryset[offset : offset + limit]), page=page, limit=limit, total=total)
