"""
Exception handlers translating domain errors into JSON responses.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import (
    BadPasswordError,
    DuplicateKeyError,
    InvalidInputError,
    MemoryBoxError,
    NotFoundError,
    ResetFlowError,
    SendFailureError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

# Most specific classes first
ERROR_STATUS: list[tuple[type[MemoryBoxError], int]] = [
    (DuplicateKeyError, status.HTTP_400_BAD_REQUEST),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ResetFlowError, status.HTTP_400_BAD_REQUEST),
    (BadPasswordError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (SendFailureError, status.HTTP_502_BAD_GATEWAY),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: MemoryBoxError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def domain_exception_handler(request: Request, exc: MemoryBoxError):
    """Handle domain errors raised by the services."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    else:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return error_response(status_code, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with the same error body as domain errors."""
    logger.warning("HTTP %s: %s - %s", exc.status_code, exc.detail, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MemoryBoxError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
