"""
Filter predicates for the list endpoints.

Each builder returns a SQLAlchemy boolean clause that the repository pushes
into both the count and the page query. "No filter" is `true()`.
"""

from uuid import UUID

from sqlalchemy import ColumnElement, and_, or_, true

from countries_api.models import City, Country


def _term(search: str | None) -> str | None:
    if search is None or not search.strip():
        return None
    return search.strip()


def country_predicate(search: str | None = None) -> ColumnElement[bool]:
    """Case-insensitive substring match on name, or on code when the country has one."""
    term = _term(search)
    if term is None:
        return true()

    # autoescape keeps % and _ in the search text literal
    return or_(
        Country.name.icontains(term, autoescape=True),
        and_(Country.code.is_not(None), Country.code.icontains(term, autoescape=True)),
    )


def city_predicate(search: str | None = None, country_id: UUID | None = None) -> ColumnElement[bool]:
    term = _term(search)

    if term is None and country_id is None:
        return true()
    if term is None:
        return City.country_id == country_id
    if country_id is None:
        return City.name.icontains(term, autoescape=True)
    return and_(City.name.icontains(term, autoescape=True), City.country_id == country_id)
