"""
Mapping of application exceptions onto HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from partner_calendar.core.exceptions import (
    ApplicationException,
    AuthenticationException,
    ConflictException,
    DatabaseException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from partner_calendar.schemas.common import ErrorResponse, error_map

logger = logging.getLogger("API_ERRORS")

STATUS_CODES = {
    ValidationException: status.HTTP_400_BAD_REQUEST,
    AuthenticationException: status.HTTP_401_UNAUTHORIZED,
    ForbiddenException: status.HTTP_403_FORBIDDEN,
    NotFoundException: status.HTTP_404_NOT_FOUND,
    ConflictException: status.HTTP_409_CONFLICT,
    DatabaseException: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _render(status_code: int, error: str, detail: str, errors=None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, errors=errors or {})
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    errors = exc.errors if isinstance(exc, ValidationException) else None
    return _render(status_code, exc.error_code, exc.message, errors)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = error_map(exc.errors(), skip_prefix=("body", "query", "path", "header"))
    return _render(status.HTTP_400_BAD_REQUEST, ValidationException.error_code, "Invalid request data", errors)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
