from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from countries_api.database import get_async_session
from countries_api.repositories import CityRepository, CountryRepository
from countries_api.services import CityService, CountryService


def get_country_service(db: AsyncSession = Depends(get_async_session)) -> CountryService:
    return CountryService(country_repository=CountryRepository(db))


def get_city_service(db: AsyncSession = Depends(get_async_session)) -> CityService:
    # both repositories share the request's session
    return CityService(
        city_repository=CityRepository(db),
        country_repository=CountryRepository(db),
    )
