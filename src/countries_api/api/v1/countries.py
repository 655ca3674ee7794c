from uuid import UUID

from fastapi import APIRouter, Depends, Query

from countries_api.api.auth import get_current_principal
from countries_api.api.dependencies import get_country_service
from countries_api.api.rate_limit import enforce_rate_limit
from countries_api.api.responses import result_response
from countries_api.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from countries_api.schemas import CountryCreateDto, CountryResponse, CountryUpdateDto, PaginatedResponse
from countries_api.services import CountryService

router = APIRouter(
    prefix="/countries",
    tags=["countries"],
    dependencies=[Depends(enforce_rate_limit), Depends(get_current_principal)],
)


@router.get("", response_model=PaginatedResponse[CountryResponse])
async def list_countries(
    search: str | None = None,
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    service: CountryService = Depends(get_country_service),
):
    result = await service.get_countries(search, page, page_size)
    # the only failure a list can produce is Unexpected -> problem response
    return result_response(result.map(PaginatedResponse[CountryResponse].from_page), failure_status=500)


@router.get("/{id}", response_model=CountryResponse)
async def get_country(id: UUID, service: CountryService = Depends(get_country_service)):
    result = await service.get_country_by_id(id)
    return result_response(result, failure_status=404)


@router.post("", response_model=CountryResponse, status_code=201)
async def create_country(dto: CountryCreateDto, service: CountryService = Depends(get_country_service)):
    result = await service.create_country(dto)
    location = f"/countries/{result.value.id}" if result else None
    return result_response(result, failure_status=400, success_status=201, location=location)


@router.put("/{id}", response_model=CountryResponse)
async def update_country(id: UUID, dto: CountryUpdateDto, service: CountryService = Depends(get_country_service)):
    result = await service.update_country(id, dto)
    return result_response(result, failure_status=400)


@router.delete("/{id}", status_code=204)
async def delete_country(id: UUID, service: CountryService = Depends(get_country_service)):
    result = await service.delete_country(id)
    return result_response(result, failure_status=404, success_status=204)
