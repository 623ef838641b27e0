# peoplenrich/services/api/errors.py
from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from peoplenrich.common.logging import get_logger
from peoplenrich.domain.errors import (
    EnrichmentFailed,
    NotFound,
    PeopleError,
    StoreError,
    ValidationError,
)
from peoplenrich.services.schemas.envelope import APIError

logger = get_logger(__name__)

# most specific first
_STATUS_BY_ERROR: list[tuple[type[PeopleError], HTTPStatus]] = [
    (ValidationError, HTTPStatus.BAD_REQUEST),
    (NotFound, HTTPStatus.NOT_FOUND),
    (EnrichmentFailed, HTTPStatus.BAD_GATEWAY),
    (StoreError, HTTPStatus.INTERNAL_SERVER_ERROR),
]


def status_for(exc: PeopleError) -> HTTPStatus:
    for err_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, err_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


def error_response(request: Request, status: HTTPStatus, message: str) -> JSONResponse:
    body = APIError(code=int(status), message=message, resource=request.url.path)
    return JSONResponse(status_code=int(status), content=body.model_dump())


async def _people_error(request: Request, exc: PeopleError) -> JSONResponse:
    status = status_for(exc)
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error("%s %s -> %d: %s", request.method, request.url.path, status, exc)
    else:
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, status, exc)
    return error_response(request, status, str(exc))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = "; ".join(parts) or "invalid request"
    logger.warning("%s %s -> 400: %s", request.method, request.url.path, message)
    return error_response(request, HTTPStatus.BAD_REQUEST, message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PeopleError, _people_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
