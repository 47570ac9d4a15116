"""Page/limit helpers shared by paginated listings"""

import math
from typing import Optional

from pydantic import BaseModel


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasMore: bool


def clamp_page(page: Optional[int], limit: Optional[int], default_limit: int, max_limit: int) -> tuple[int, int]:
    """Normalize ``page`` to >= 1 and ``limit`` to 1..max_limit"""
    page_num = max(page or 1, 1)
    page_size = min(max(limit or default_limit, 1), max_limit)
    return page_num, page_size


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit) if limit else 0
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        totalPages=total_pages,
        hasMore=page < total_pages,
    )
