from math import ceil

from inventory.schemas.common import Pagination


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total_count: int) -> Pagination:
    total_pages = ceil(total_count / limit) if total_count > 0 else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_count=total_count,
        limit=limit,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
