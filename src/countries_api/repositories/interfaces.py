"""
Repository contract shared by every entity type.

Services depend on this interface only, so tests can hand them an
`AsyncMock(spec=...)` instead of a database-backed repository.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement

from countries_api.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PaginationResult
from countries_api.core.result import Result

EntityType = TypeVar("EntityType")


class AbstractRepository(ABC, Generic[EntityType]):

    @abstractmethod
    async def get_paged(
        self,
        predicate: ColumnElement[bool],
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PaginationResult[EntityType]:
        """
        Return one page of entities matching `predicate` plus the total match count.

        Storage faults are not converted here; they propagate to the caller.
        """

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Result[EntityType]:
        """Failure(NotFound) when no entity has this id."""

    @abstractmethod
    async def add(self, entity: EntityType) -> Result[EntityType]:
        """Persist a new entity. Failure(Unexpected) on storage fault."""

    @abstractmethod
    async def update(self, entity: EntityType) -> Result[EntityType]:
        """Persist changes to an existing entity. Failure(Unexpected) on storage fault."""

    @abstractmethod
    async def delete(self, id: UUID) -> Result[None]:
        """Failure(NotFound) if absent, Failure(Unexpected) on storage fault."""
