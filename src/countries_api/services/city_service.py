import logging
from dataclasses import dataclass
from uuid import UUID

from countries_api.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, PaginationResult
from countries_api.core.result import Error, Failure, Result, Success
from countries_api.models import City, Country
from countries_api.repositories.interfaces import AbstractRepository
from countries_api.schemas import CityCreateDto, CityResponse, CityUpdateDto

from .predicates import city_predicate

logger = logging.getLogger(__name__)

INVALID_COUNTRY_MESSAGE = "Invalid country id"


def to_city_response(city: City) -> CityResponse:
    return CityResponse.model_validate(city)


@dataclass
class CityService:
    """
    Use cases for cities.

    On top of what `CountryService` does, creating or updating a city first
    checks that the referenced country exists.
    """

    city_repository: AbstractRepository[City]
    country_repository: AbstractRepository[Country]

    async def get_cities(
        self,
        search: str | None = None,
        country_id: UUID | None = None,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Result[PaginationResult[CityResponse]]:
        try:
            paged = await self.city_repository.get_paged(city_predicate(search, country_id), page, page_size)
            return Success(paged.map(to_city_response))
        except Exception as exc:
            logger.exception("service.city.list_failed", extra={"search": search, "page": page})
            return Failure(Error.unexpected(str(exc)))

    async def get_city_by_id(self, id: UUID) -> Result[CityResponse]:
        result = await self.city_repository.get_by_id(id)
        if not result:
            return result
        return Success(to_city_response(result.value))

    async def create_city(self, dto: CityCreateDto) -> Result[CityResponse]:
        # country existence -> entity rules -> persist
        country_check = await self._validate_country_exists(dto.country_id)
        if not country_check:
            return country_check

        created = City.create(dto.name, dto.country_id)
        if not created:
            logger.info("service.city.invalid", extra={"reason": created.error.message})
            return created

        added = await self.city_repository.add(created.value)
        if not added:
            return added

        logger.info("service.city.created", extra={"id": str(added.value.id), "country_id": str(dto.country_id)})
        return Success(to_city_response(added.value))

    async def update_city(self, id: UUID, dto: CityUpdateDto) -> Result[CityResponse]:
        # existing city -> country existence -> entity rules -> persist
        existing = await self.city_repository.get_by_id(id)
        if not existing:
            return existing

        country_check = await self._validate_country_exists(dto.country_id)
        if not country_check:
            return country_check

        city = existing.value
        changed = city.update(dto.name, dto.country_id)
        if not changed:
            logger.info("service.city.invalid", extra={"id": str(id), "reason": changed.error.message})
            return changed

        updated = await self.city_repository.update(city)
        if not updated:
            return updated
        return Success(to_city_response(updated.value))

    async def delete_city(self, id: UUID) -> Result[None]:
        try:
            return await self.city_repository.delete(id)
        except Exception as exc:
            logger.exception("service.city.delete_failed", extra={"id": str(id)})
            return Failure(Error.unexpected(str(exc)))

    async def _validate_country_exists(self, country_id: UUID) -> Result[None]:
        found = await self.country_repository.get_by_id(country_id)
        if not found:
            logger.info("service.city.invalid_country", extra={"country_id": str(country_id)})
            return Failure(Error.not_found(INVALID_COUNTRY_MESSAGE))
        return Success()
