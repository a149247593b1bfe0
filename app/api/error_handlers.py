"""
Exception handlers translating storage errors into response envelopes
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import StoreError
from app.utils.responses import error_response

logger = logging.getLogger(__name__)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
        # Server-side failures never leak details to the client
        return error_response(
            message=exc.public_message,
            error_code=exc.code,
            status_code=exc.status_code,
        )
    return error_response(message=exc.message, error_code=exc.code, status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        message="Validation failed",
        error_code="validation_error",
        details=exc.errors(),
        status_code=422,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(message="Internal server error", error_code="internal_error", status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
