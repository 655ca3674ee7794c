from .common import CamelModel, PaginatedResponse, ProblemDetails
from .city import CityCreateDto, CityUpdateDto, CityResponse
from .country import CountryCreateDto, CountryUpdateDto, CountryResponse

__all__ = [
    "CamelModel",
    "PaginatedResponse",
    "ProblemDetails",
    "CityCreateDto",
    "CityUpdateDto",
    "CityResponse",
    "CountryCreateDto",
    "CountryUpdateDto",
    "CountryResponse",
]
