import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_snake

from book_catalog_api.errors import (
    InvalidPagination,
    InvalidQuery,
    StorageUnavailable,
    ValidationFailed,
)
from book_catalog_api.schemas.book import ValidationErrorResponse, ViolationRead

logger = logging.getLogger(__name__)


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    body = ValidationErrorResponse(
        detail="One or more fields are invalid",
        violations=[ViolationRead(field=v.field, reason=v.reason) for v in exc.violations],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def request_body_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed book bodies the same way as rule violations."""
    errors = exc.errors()
    if not errors or any(error["loc"][0] != "body" for error in errors):
        return await request_validation_exception_handler(request, exc)

    body = ValidationErrorResponse(
        detail="One or more fields are invalid",
        violations=[
            ViolationRead(field=to_snake(str(error["loc"][-1])), reason=error["msg"])
            for error in errors
        ],
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


async def bad_request_handler(
    request: Request, exc: InvalidQuery | InvalidPagination
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def storage_unavailable_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    logger.error("Request failed on storage: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Book storage is temporarily unavailable"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error: %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_body_error_handler)
    app.add_exception_handler(InvalidQuery, bad_request_handler)
    app.add_exception_handler(InvalidPagination, bad_request_handler)
    app.add_exception_handler(StorageUnavailable, storage_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
