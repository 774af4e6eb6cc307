"""Translation of failures into HTTP responses."""
import logging
from typing import TypeVar, Union

import pydantic
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from drive_api.results import ErrorKind, Result, StoreError
from drive_api.schemas import ErrorResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_FOR_ERROR_KIND = {
    ErrorKind.INVALID_PATH: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_OBJECT: status.HTTP_409_CONFLICT,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class StoreOperationError(Exception):
    """Raised by route handlers to hand a failed :class:`StoreError` to the exception handler."""

    def __init__(self, error: StoreError):
        super().__init__(error.message)
        self.error = error


def _printable(key: str) -> str:
    """Keys rejected for not being UTF-8 are echoed back with escapes."""
    return key.encode("utf-8", "backslashreplace").decode("utf-8")


def store_error_response(error: StoreError) -> JSONResponse:
    body = ErrorResponse(
        message=error.message,
        error_kind=error.kind.value,
        keys=[_printable(key) for key in error.keys],
        detail=error.detail,
    )
    return JSONResponse(
        status_code=STATUS_FOR_ERROR_KIND[error.kind],
        content=body.model_dump(),
    )


async def handle_store_operation_errors(request: Request, exc: StoreOperationError) -> JSONResponse:
    return store_error_response(exc.error)


async def handle_pydantic_validation_errors(
    request: Request, exc: Union[RequestValidationError, pydantic.ValidationError]
) -> JSONResponse:
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "message": "Request validation failed",
            "error_kind": ErrorKind.INVALID_PATH.value,
            "errors": jsonable_encoder(
                [
                    {
                        "loc": list(error.get("loc", ())),
                        "msg": error["msg"],
                        "input": error.get("input"),
                    }
                    for error in errors
                ]
            ),
        },
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates during the request lifecycle."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(err)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error_kind": ErrorKind.UNEXPECTED.value,
            },
        )


def value_or_raise(result: Result[T]) -> T:
    """Success value of ``result``, or raise so the app's handler renders the error."""
    if not result.ok:
        raise StoreOperationError(result.error)
    return result.value


def invalid_path(message: str, *keys: str) -> StoreOperationError:
    """Error for a request the HTTP layer rejects before reaching the store."""
    return StoreOperationError(StoreError(kind=ErrorKind.INVALID_PATH, message=message, keys=keys))
