import uuid

import pytest
from sqlalchemy.sql.elements import True_

from countries_api.services.predicates import city_predicate, country_predicate


class TestPredicateShapes:

    @pytest.mark.parametrize("search", [None, "", "   "])
    def test_blank_country_search_means_no_filter(self, search):
        assert isinstance(country_predicate(search), True_)

    def test_no_city_filters_means_no_filter(self):
        assert isinstance(city_predicate(None, None), True_)

    def test_country_search_checks_name_and_code(self):
        sql = str(country_predicate("fr"))

        assert "countries.name" in sql
        assert "countries.code IS NOT NULL" in sql

    def test_city_country_only_is_an_equality(self):
        sql = str(city_predicate(None, uuid.uuid4()))

        assert "cities.country_id =" in sql
        assert "cities.name" not in sql

    def test_city_search_and_country_are_combined(self):
        sql = str(city_predicate("ma", uuid.uuid4()))

        assert "cities.name" in sql
        assert "cities.country_id =" in sql
        assert " AND " in sql


class TestCountryPredicateAgainstDatabase:

    async def test_search_is_case_insensitive_substring(self, create_country, country_repository):
        """
        Behavior:
            - Argentina, Australia, Austria and Belgium exist; searching "A" matches the first three.
        """
        for name in ("Argentina", "Australia", "Austria", "Belgium"):
            await create_country(name)

        page = await country_repository.get_paged(country_predicate("A"), 1, 10)

        assert sorted(c.name for c in page.items) == ["Argentina", "Australia", "Austria"]
        assert page.total_count == 3

    async def test_search_matches_code(self, create_country, country_repository):
        await create_country("Deutschland", "de")
        await create_country("France", "fr")

        page = await country_repository.get_paged(country_predicate("DE"), 1, 10)

        assert [c.name for c in page.items] == ["Deutschland"]

    async def test_countries_without_code_are_matched_by_name_only(self, create_country, country_repository):
        await create_country("Nocode")

        page = await country_repository.get_paged(country_predicate("noc"), 1, 10)

        assert page.total_count == 1

    async def test_wildcards_in_search_are_literal(self, create_country, country_repository):
        await create_country("Plain")

        page = await country_repository.get_paged(country_predicate("%"), 1, 10)

        assert page.total_count == 0


class TestCityPredicateAgainstDatabase:

    async def test_four_filter_combinations(self, create_country, create_city, city_repository):
        spain = await create_country("Spain")
        italy = await create_country("Italy")
        await create_city(spain.id, "Madrid")
        await create_city(spain.id, "Malaga")
        await create_city(italy.id, "Milan")
        await create_city(italy.id, "Rome")

        async def names(search=None, country_id=None):
            page = await city_repository.get_paged(city_predicate(search, country_id), 1, 10)
            return sorted(c.name for c in page.items)

        assert await names() == ["Madrid", "Malaga", "Milan", "Rome"]
        assert await names(country_id=spain.id) == ["Madrid", "Malaga"]
        assert await names(search="MA") == ["Madrid", "Malaga"]
        assert await names(search="mi", country_id=italy.id) == ["Milan"]
        assert await names(search="mi", country_id=spain.id) == []
