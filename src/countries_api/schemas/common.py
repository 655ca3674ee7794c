from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from countries_api.core.pagination import PaginationResult

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every transfer object: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginatedResponse(CamelModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_page(cls, page: PaginationResult[T]) -> "PaginatedResponse[T]":
        return cls(
            items=page.items,
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )


class ProblemDetails(BaseModel):
    """RFC 7807 style error body."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str | None = None
