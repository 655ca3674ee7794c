from fastapi import APIRouter

from .cities import router as cities_router
from .countries import router as countries_router

api_router = APIRouter()
api_router.include_router(countries_router)
api_router.include_router(cities_router)

__all__ = ["api_router"]
