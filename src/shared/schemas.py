"""Pydantic building blocks shared by every MAEVA API.

The storefront speaks camelCase JSON (``productId``, ``imageUrl``); Python code
uses snake_case. ``CamelModel`` bridges the two and accepts either spelling.
"""

import math

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResponse(CamelModel):
    success: bool = True
    message: str | None = None


class IdResponse(CamelModel):
    success: bool = True
    id: str


class Pagination(CamelModel):
    total: int
    page: int
    pages: int
    limit: int


def paginate(items: list, page: int, limit: int) -> tuple[list, Pagination]:
    """Slice ``items`` to the requested page; pages are 1-based."""
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    pagination = Pagination(
        total=len(items),
        page=page,
        pages=math.ceil(len(items) / limit),
        limit=limit,
    )
    return items[start : start + limit], pagination
