"""
Centralized access to the database models.

    from countries_api.models import Country, City
"""

from .country import Country
from .city import City

__all__ = [
    "Country",
    "City",
]
