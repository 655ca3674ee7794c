import uuid
from unittest.mock import ANY

import pytest

from countries_api.core.pagination import PaginationResult
from countries_api.core.result import Error, ErrorKind, Failure, Success
from countries_api.models import Country
from countries_api.schemas import CountryCreateDto, CountryResponse, CountryUpdateDto


def make_country(name="France", code="FR") -> Country:
    return Country.create(name, code).value


@pytest.mark.asyncio
class TestGetCountries:

    async def test_maps_page_items_to_responses(self, country_service, mock_country_repository):
        country = make_country()
        mock_country_repository.get_paged.return_value = PaginationResult(
            items=[country], total_count=1, page=1, page_size=10
        )

        result = await country_service.get_countries("fr", 1, 10)

        assert result.is_success
        assert result.value.items == [CountryResponse(id=country.id, name="France", code="FR", cities=[])]
        assert result.value.total_count == 1
        mock_country_repository.get_paged.assert_awaited_once_with(ANY, 1, 10)

    async def test_storage_fault_becomes_unexpected(self, country_service, mock_country_repository):
        """
        Behavior:
            - The repository's paged query raises; the service returns Failure(Unexpected).
        Importance:
            - get_paged is the one repository call that is allowed to raise.
        """
        mock_country_repository.get_paged.side_effect = RuntimeError("connection lost")

        result = await country_service.get_countries()

        assert result.error.kind is ErrorKind.UNEXPECTED


@pytest.mark.asyncio
class TestGetCountryById:

    async def test_found(self, country_service, mock_country_repository):
        country = make_country()
        mock_country_repository.get_by_id.return_value = Success(country)

        result = await country_service.get_country_by_id(country.id)

        assert result.value.id == country.id

    async def test_not_found_propagates_unchanged(self, country_service, mock_country_repository):
        failure = Failure(Error.not_found("Country with ID x not found."))
        mock_country_repository.get_by_id.return_value = failure

        assert await country_service.get_country_by_id(uuid.uuid4()) is failure


@pytest.mark.asyncio
class TestCreateCountry:

    async def test_valid_country_is_persisted(self, country_service, mock_country_repository):
        mock_country_repository.add.side_effect = lambda entity: Success(entity)

        result = await country_service.create_country(CountryCreateDto(name=" France ", code="fr"))

        assert result.is_success
        assert (result.value.name, result.value.code) == ("France", "FR")
        persisted = mock_country_repository.add.await_args.args[0]
        assert isinstance(persisted, Country)

    async def test_validation_failure_skips_persistence(self, country_service, mock_country_repository):
        result = await country_service.create_country(CountryCreateDto(name="   "))

        assert result.error.kind is ErrorKind.VALIDATION
        mock_country_repository.add.assert_not_awaited()

    async def test_storage_failure_propagates(self, country_service, mock_country_repository):
        mock_country_repository.add.return_value = Failure(Error.unexpected("db down"))

        result = await country_service.create_country(CountryCreateDto(name="France"))

        assert result.error.kind is ErrorKind.UNEXPECTED


@pytest.mark.asyncio
class TestUpdateCountry:

    async def test_existing_country_is_updated(self, country_service, mock_country_repository):
        country = make_country()
        mock_country_repository.get_by_id.return_value = Success(country)
        mock_country_repository.update.side_effect = lambda entity: Success(entity)

        result = await country_service.update_country(country.id, CountryUpdateDto(name="Gaul", code="ga"))

        assert (result.value.id, result.value.name, result.value.code) == (country.id, "Gaul", "GA")
        mock_country_repository.update.assert_awaited_once_with(country)

    async def test_missing_country_is_not_found(self, country_service, mock_country_repository):
        mock_country_repository.get_by_id.return_value = Failure(Error.not_found("missing"))

        result = await country_service.update_country(uuid.uuid4(), CountryUpdateDto(name="Gaul"))

        assert result.error.kind is ErrorKind.NOT_FOUND
        mock_country_repository.update.assert_not_awaited()

    async def test_invalid_values_are_not_persisted(self, country_service, mock_country_repository):
        country = make_country()
        mock_country_repository.get_by_id.return_value = Success(country)

        result = await country_service.update_country(country.id, CountryUpdateDto(name="x" * 101))

        assert result.error.kind is ErrorKind.VALIDATION
        assert country.name == "France"
        mock_country_repository.update.assert_not_awaited()


@pytest.mark.asyncio
class TestDeleteCountry:

    async def test_delegates_to_repository(self, country_service, mock_country_repository):
        mock_country_repository.delete.return_value = Success()
        country_id = uuid.uuid4()

        result = await country_service.delete_country(country_id)

        assert result.is_success
        mock_country_repository.delete.assert_awaited_once_with(country_id)

    async def test_raised_fault_becomes_unexpected(self, country_service, mock_country_repository):
        mock_country_repository.delete.side_effect = RuntimeError("boom")

        result = await country_service.delete_country(uuid.uuid4())

        assert result.error.kind is ErrorKind.UNEXPECTED
