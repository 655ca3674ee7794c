import logging
from dataclasses import dataclass
from uuid import UUID

from countries_api.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PaginationResult
from countries_api.core.result import Error, Failure, Result, Success
from countries_api.models import Country
from countries_api.repositories.interfaces import AbstractRepository
from countries_api.schemas import CountryCreateDto, CountryResponse, CountryUpdateDto

from .predicates import country_predicate

logger = logging.getLogger(__name__)


def to_country_response(country: Country) -> CountryResponse:
    return CountryResponse.model_validate(country)


@dataclass
class CountryService:
    """
    Use cases for countries.

    Expected failures come back as `Failure`. Storage faults that escape the
    repository are logged and converted to `Unexpected` for the list and
    delete operations.
    """

    country_repository: AbstractRepository[Country]

    async def get_countries(
        self,
        search: str | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Result[PaginationResult[CountryResponse]]:
        try:
            paged = await self.country_repository.get_paged(country_predicate(search), page, page_size)
            return Success(paged.map(to_country_response))
        except Exception as exc:
            logger.exception("service.country.list_failed", extra={"search": search, "page": page})
            return Failure(Error.unexpected(str(exc)))

    async def get_country_by_id(self, id: UUID) -> Result[CountryResponse]:
        result = await self.country_repository.get_by_id(id)
        if not result:
            return result
        return Success(to_country_response(result.value))

    async def create_country(self, dto: CountryCreateDto) -> Result[CountryResponse]:
        created = Country.create(dto.name, dto.code)
        if not created:
            logger.info("service.country.invalid", extra={"reason": created.error.message})
            return created

        added = await self.country_repository.add(created.value)
        if not added:
            return added

        logger.info("service.country.created", extra={"id": str(added.value.id)})
        return Success(to_country_response(added.value))

    async def update_country(self, id: UUID, dto: CountryUpdateDto) -> Result[CountryResponse]:
        existing = await self.country_repository.get_by_id(id)
        if not existing:
            return existing

        country = existing.value
        changed = country.update(dto.name, dto.code)
        if not changed:
            logger.info("service.country.invalid", extra={"id": str(id), "reason": changed.error.message})
            return changed

        updated = await self.country_repository.update(country)
        if not updated:
            return updated
        return Success(to_country_response(updated.value))

    async def delete_country(self, id: UUID) -> Result[None]:
        try:
            return await self.country_repository.delete(id)
        except Exception as exc:
            logger.exception("service.country.delete_failed", extra={"id": str(id)})
            return Failure(Error.unexpected(str(exc)))
