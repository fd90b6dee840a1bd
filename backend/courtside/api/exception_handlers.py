"""
Map service-layer errors to HTTP responses.

Response body: {"detail": "<message>", "code": "<ERROR_CODE>"}
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from courtside.core.errors import (
    CourtsideError,
    ValidationError,
    NotFoundError,
    ForbiddenError,
    GoneError,
    ConflictError,
    ExhaustionError,
)
from courtside.core.utils import format_error

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    GoneError: status.HTTP_410_GONE,
    ExhaustionError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: CourtsideError) -> int:
    for exc_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def courtside_error_handler(request: Request, exc: CourtsideError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content=format_error(exc.message, exc.code))


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourtsideError, courtside_error_handler)
