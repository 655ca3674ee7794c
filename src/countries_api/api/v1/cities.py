from uuid import UUID

from fastapi import APIRouter, Depends, Query

from countries_api.api.auth import get_current_principal
from countries_api.api.dependencies import get_city_service
from countries_api.api.rate_limit import enforce_rate_limit
from countries_api.api.responses import result_response
from countries_api.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from countries_api.schemas import CityCreateDto, CityResponse, CityUpdateDto, PaginatedResponse
from countries_api.services import CityService

router = APIRouter(
    prefix="/cities",
    tags=["cities"],
    dependencies=[Depends(enforce_rate_limit), Depends(get_current_principal)],
)


@router.get("", response_model=PaginatedResponse[CityResponse])
async def list_cities(
    search: str | None = None,
    country_id: UUID | None = Query(None, alias="countryId"),
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    service: CityService = Depends(get_city_service),
):
    result = await service.get_cities(search, country_id, page, page_size)
    return result_response(result.map(PaginatedResponse[CityResponse].from_page), failure_status=500)


@router.get("/{id}", response_model=CityResponse)
async def get_city(id: UUID, service: CityService = Depends(get_city_service)):
    result = await service.get_city_by_id(id)
    return result_response(result, failure_status=404)


@router.post("", response_model=CityResponse, status_code=201)
async def create_city(dto: CityCreateDto, service: CityService = Depends(get_city_service)):
    result = await service.create_city(dto)
    location = f"/cities/{result.value.id}" if result else None
    return result_response(result, failure_status=400, success_status=201, location=location)


@router.put("/{id}", response_model=CityResponse)
async def update_city(id: UUID, dto: CityUpdateDto, service: CityService = Depends(get_city_service)):
    result = await service.update_city(id, dto)
    return result_response(result, failure_status=400)


@router.delete("/{id}", status_code=204)
async def delete_city(id: UUID, service: CityService = Depends(get_city_service)):
    result = await service.delete_city(id)
    return result_response(result, failure_status=404, success_status=204)
