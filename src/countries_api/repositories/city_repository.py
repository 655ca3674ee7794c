from sqlalchemy.ext.asyncio import AsyncSession

from countries_api.models.city import City
from .base_repository import BaseRepository


class CityRepository(BaseRepository[City]):

    def __init__(self, db: AsyncSession):
        super().__init__(City, db)
