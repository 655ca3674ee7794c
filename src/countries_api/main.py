"""ASGI entry point: `uvicorn countries_api.main:app`."""

from countries_api.api import create_app

app = create_app()
