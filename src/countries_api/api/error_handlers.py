import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from countries_api.core.result import ErrorKind

from .responses import UNEXPECTED_DETAIL, problem

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed request data is a client error: 400, like entity validation failures.
    logger.info("http.request_validation_failed", extra={"path": request.url.path})
    return JSONResponse(
        status_code=400,
        content={
            "code": ErrorKind.VALIDATION.value,
            "message": "The request is invalid.",
            "errors": jsonable_encoder(exc.errors(), exclude={"ctx", "input", "url"}),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("http.unhandled_exception", extra={"path": request.url.path})
    return problem(500, UNEXPECTED_DETAIL)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
