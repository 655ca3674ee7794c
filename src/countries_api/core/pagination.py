"""
Paged query contract shared by every list operation.

`PaginationResult` is what repositories return from `get_paged()`: one bounded
slice of the matching rows plus the total number of matches across all pages.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def normalize_page(page: int | None) -> int:
    """Clamp the page number to >= 1."""
    if page is None:
        return DEFAULT_PAGE
    return max(1, page)


def normalize_page_size(page_size: int | None) -> int:
    """Clamp the page size to [1, MAX_PAGE_SIZE]."""
    if page_size is None:
        return DEFAULT_PAGE_SIZE
    return max(1, min(MAX_PAGE_SIZE, page_size))


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


@dataclass(frozen=True)
class PaginationResult(Generic[T]):
    """
    One page of a filtered query.

    Invariants (checked on construction):
        - page >= 1 and 1 <= page_size <= MAX_PAGE_SIZE
        - len(items) <= page_size
        - total_count >= len(items)
    """

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be within [1, {MAX_PAGE_SIZE}], got {self.page_size}")
        if len(self.items) > self.page_size:
            raise ValueError("a page cannot hold more items than page_size")
        if self.total_count < len(self.items):
            raise ValueError("total_count cannot be lower than the number of items on the page")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0

    def map(self, fn: Callable[[T], U]) -> PaginationResult[U]:
        """Return the same page with every item converted by `fn`."""
        return PaginationResult(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            page=self.page,
            page_size=self.page_size,
        )
