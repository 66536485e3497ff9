from fastapi import Query, Request
from fastapi.exceptions import RequestValidationError
from typing import Iterable, List

from inventory.core.config import settings
from inventory.db.session import get_db
from inventory.schemas.product import ProductFilters

__all__ = ["get_db", "get_product_filters", "parse_category_ids"]


def parse_category_ids(raw_values: Iterable[str]) -> List[int]:
    """
    "1,2" и повторяющиеся параметры -> [1, 2], повторы убираются.
    Нечисловой или неположительный id -> ValueError.
    """
    ids = []
    for value in raw_values:
        for part in str(value).split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit() or int(part) <= 0:
                raise ValueError(f"Invalid category ID: {part!r}")
            ids.append(int(part))
    return list(dict.fromkeys(ids))


def get_product_filters(
    request: Request,
    search: str = Query("", max_length=255, description="Search by product name"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> ProductFilters:
    # axios шлёт массивы как categoryIds[]=1&categoryIds[]=2
    raw_ids = (
        request.query_params.getlist("categoryIds")
        + request.query_params.getlist("categoryIds[]")
    )
    try:
        category_ids = parse_category_ids(raw_ids)
    except ValueError:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("query", "categoryIds"),
            "msg": "Category IDs must be positive integers",
            "input": raw_ids,
        }])

    return ProductFilters(
        search=search,
        category_ids=category_ids,
        page=page,
        limit=limit,
    )
