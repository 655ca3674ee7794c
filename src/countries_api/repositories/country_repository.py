from sqlalchemy.ext.asyncio import AsyncSession

from countries_api.models.country import Country
from .base_repository import BaseRepository


class CountryRepository(BaseRepository[Country]):
    """Repository for Country rows. Loaded countries carry their cities (selectin)."""

    def __init__(self, db: AsyncSession):
        super().__init__(Country, db)
