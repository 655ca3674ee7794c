"""
Result -> HTTP translation.

Each route states which status a failure maps to. `Unexpected` failures are
the exception: they always become a 500 problem response whose detail is
generic, the real message only goes to the log.
"""

import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from countries_api.core.result import Error, ErrorKind, Result
from countries_api.schemas import ProblemDetails

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
UNEXPECTED_DETAIL = "An unexpected error occurred."

_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    429: "Too Many Requests",
    500: "Internal Server Error",
}


def problem(status_code: int, detail: str | None = None, title: str | None = None) -> JSONResponse:
    body = ProblemDetails(title=title or _TITLES.get(status_code, "Error"), status=status_code, detail=detail)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def error_body(error: Error) -> dict[str, str]:
    return {"code": error.code, "message": error.message}


def to_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return jsonable_encoder(value, by_alias=True)


def failure_response(error: Error, failure_status: int) -> Response:
    if error.kind is ErrorKind.UNEXPECTED:
        logger.error("http.unexpected_failure", extra={"error_code": error.code, "error_message": error.message})
        return problem(500, UNEXPECTED_DETAIL)
    return JSONResponse(status_code=failure_status, content=error_body(error))


def result_response(
    result: Result,
    *,
    failure_status: int,
    success_status: int = 200,
    location: str | None = None,
) -> Response:
    """
    Render a Result.

    Success: `success_status` with the serialized value (no body for 204).
    Failure: `failure_status` with {"code", "message"}, or a 500 problem for Unexpected.
    """
    if not result:
        return failure_response(result.error, failure_status)

    if success_status == 204:
        return Response(status_code=204)

    headers = {"Location": location} if location else None
    return JSONResponse(status_code=success_status, content=to_json(result.value), headers=headers)
