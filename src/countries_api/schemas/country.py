from uuid import UUID

from pydantic import Field

from .city import CityResponse
from .common import CamelModel


# Length and blank checks are the entity's job, the DTOs only fix the shape.
class CountryCreateDto(CamelModel):
    name: str
    code: str | None = None


class CountryUpdateDto(CamelModel):
    name: str
    code: str | None = None


class CountryResponse(CamelModel):
    id: UUID
    name: str
    code: str | None = None
    cities: list[CityResponse] = Field(default_factory=list)
