"""
Repository layer.

Usage:
    from countries_api.repositories import CountryRepository, CityRepository
"""

from .interfaces import AbstractRepository
from .base_repository import BaseRepository
from .country_repository import CountryRepository
from .city_repository import CityRepository

__all__ = [
    "AbstractRepository",
    "BaseRepository",
    "CountryRepository",
    "CityRepository",
]
