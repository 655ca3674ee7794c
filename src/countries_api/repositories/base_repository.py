"""
Generic SQLAlchemy repository.

Concrete repositories only bind a model class; the paged query and the CRUD
operations live here. Every operation except `get_paged` reports its outcome as
a Result. Lookup and write faults are funnelled through `db_error_handler`, which rolls
the session back and raises a `RepositoryError` that is turned into a Failure
right here, so nothing storage-specific reaches the service layer.
"""

import logging
import time
from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from countries_api.core.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    PaginationResult,
    normalize_page,
    normalize_page_size,
    page_offset,
)
from countries_api.core.result import Error, Failure, Result, Success
from countries_api.database.base import Base
from countries_api.exceptions import RepositoryError, db_error_handler

from .interfaces import AbstractRepository

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class BaseRepository(AbstractRepository[ModelType], Generic[ModelType]):
    """
    Generic repository over one mapped model.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: The SQLAlchemy model class (e.g. `Country`, not `Country()`)
            db: The async database session, one per request
        """
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _ordering(self) -> tuple:
        # Creation sequence, with the id as tie-breaker, so pages never overlap
        return (self.model.created_at, self.model.id)

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def get_paged(
        self,
        predicate: ColumnElement[bool],
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PaginationResult[ModelType]:
        page = normalize_page(page)
        page_size = normalize_page_size(page_size)
        start = time.perf_counter()

        logger.debug(
            "repo.get_paged.start",
            extra={"model": self.model_name, "page": page, "page_size": page_size},
        )

        count_stmt = select(func.count()).select_from(self.model).where(predicate)
        total_count = (await self.db.execute(count_stmt)).scalar_one()

        stmt = (
            select(self.model)
            .where(predicate)
            .order_by(*self._ordering())
            .offset(page_offset(page, page_size))
            .limit(page_size)
        )
        items = list((await self.db.execute(stmt)).scalars().all())

        logger.debug(
            "repo.get_paged.success",
            extra={
                "model": self.model_name,
                "page": page,
                "page_size": page_size,
                "returned": len(items),
                "total_count": total_count,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return PaginationResult(items=items, total_count=total_count, page=page, page_size=page_size)

    async def get_by_id(self, id: UUID) -> Result[ModelType]:
        # populate_existing refreshes an instance already held by the identity map
        stmt = select(self.model).where(self.model.id == id).execution_options(populate_existing=True)
        try:
            async with db_error_handler(self.db, self.model_name):
                entity = (await self.db.execute(stmt)).scalar_one_or_none()
        except RepositoryError as exc:
            return self._failure("get_by_id", exc)

        if entity is None:
            logger.debug("repo.get_by_id.not_found", extra={"model": self.model_name, "id": str(id)})
            return Failure(Error.not_found(f"{self.model_name} with ID {id} not found."))
        return Success(entity)

    # =================================================================================================================
    # Write Operations
    # =================================================================================================================

    async def add(self, entity: ModelType) -> Result[ModelType]:
        start = time.perf_counter()
        try:
            async with db_error_handler(self.db, self.model_name):
                self.db.add(entity)
                await self.db.flush()
                await self.db.commit()
        except RepositoryError as exc:
            return self._failure("add", exc)

        logger.info(
            "repo.add.success",
            extra={"model": self.model_name, "id": str(entity.id), "duration_ms": _elapsed_ms(start)},
        )
        return Success(entity)

    async def update(self, entity: ModelType) -> Result[ModelType]:
        start = time.perf_counter()
        try:
            async with db_error_handler(self.db, self.model_name):
                # no-op for an instance this session already tracks
                self.db.add(entity)
                await self.db.flush()
                await self.db.commit()
        except RepositoryError as exc:
            return self._failure("update", exc)

        logger.info(
            "repo.update.success",
            extra={"model": self.model_name, "id": str(entity.id), "duration_ms": _elapsed_ms(start)},
        )
        return Success(entity)

    async def delete(self, id: UUID) -> Result[None]:
        start = time.perf_counter()
        try:
            async with db_error_handler(self.db, self.model_name):
                entity = await self.db.get(self.model, id, populate_existing=True)
                if entity is None:
                    logger.debug("repo.delete.not_found", extra={"model": self.model_name, "id": str(id)})
                    return Failure(Error.not_found(f"{self.model_name} with ID {id} not found."))

                await self.db.delete(entity)
                await self.db.flush()
                await self.db.commit()
        except RepositoryError as exc:
            return self._failure("delete", exc)

        logger.info(
            "repo.delete.success",
            extra={"model": self.model_name, "id": str(id), "duration_ms": _elapsed_ms(start)},
        )
        return Success()

    def _failure(self, operation: str, exc: RepositoryError) -> Failure:
        logger.info(
            f"repo.{operation}.failed",
            extra={"model": self.model_name, "kind": exc.kind.value, "constraint": exc.constraint},
        )
        return Failure(exc.to_error())
