from .country_service import CountryService
from .city_service import CityService
from .predicates import city_predicate, country_predicate

__all__ = [
    "CountryService",
    "CityService",
    "city_predicate",
    "country_predicate",
]
