from uuid import UUID

from .common import CamelModel


class CityCreateDto(CamelModel):
    name: str
    country_id: UUID


class CityUpdateDto(CamelModel):
    name: str
    country_id: UUID


class CityResponse(CamelModel):
    id: UUID
    name: str
    country_id: UUID
