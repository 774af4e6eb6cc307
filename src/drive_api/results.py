"""Result types returned by every path adapter operation."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

from botocore.exceptions import (
    ClientError,
    ConnectionError as BotoConnectionError,
    HTTPClientError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
)

from drive_api.exceptions import InvalidPathError, StoreConfigurationError

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories a caller can act on."""
    TRANSIENT = "transient"
    NOT_FOUND = "not_found"
    DUPLICATE_OBJECT = "duplicate_object"
    CONFIGURATION = "configuration"
    INVALID_PATH = "invalid_path"
    UNEXPECTED = "unexpected"


NOT_FOUND_CODES = {"NoSuchKey", "NotFound", "404"}

CONFIGURATION_CODES = {
    "AccessDenied",
    "AllAccessDisabled",
    "AccountProblem",
    "AuthorizationHeaderMalformed",
    "ExpiredToken",
    "InvalidAccessKeyId",
    "InvalidBucketName",
    "InvalidToken",
    "NoSuchBucket",
    "PermanentRedirect",
    "SignatureDoesNotMatch",
    "403",
}

TRANSIENT_CODES = {
    "InternalError",
    "RequestTimeout",
    "ServiceUnavailable",
    "SlowDown",
    "Throttling",
    "ThrottlingException",
    "500",
    "503",
}


@dataclass(frozen=True)
class StoreError:
    """What went wrong, and which keys were involved."""
    kind: ErrorKind
    message: str
    keys: Tuple[str, ...] = ()
    detail: Optional[str] = None


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a success value or a :class:`StoreError`, never both."""
    value: Optional[T] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        keys: Tuple[str, ...] = (),
        detail: Optional[str] = None,
    ) -> "Result[T]":
        return cls(error=StoreError(kind=kind, message=message, keys=keys, detail=detail))


def error_kind_for(exc: Exception) -> ErrorKind:
    """Map an exception raised while talking to the store onto an :class:`ErrorKind`."""
    if isinstance(exc, InvalidPathError):
        return ErrorKind.INVALID_PATH
    if isinstance(exc, (StoreConfigurationError, NoCredentialsError, PartialCredentialsError, NoRegionError)):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, (BotoConnectionError, HTTPClientError)):
        return ErrorKind.TRANSIENT
    if isinstance(exc, ClientError):
        return _error_kind_for_client_error(exc)
    return ErrorKind.UNEXPECTED


def _error_kind_for_client_error(exc: ClientError) -> ErrorKind:
    code = str(exc.response.get("Error", {}).get("Code", ""))
    status_code = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode") or 0

    if code in NOT_FOUND_CODES:
        return ErrorKind.NOT_FOUND
    if code in CONFIGURATION_CODES:
        return ErrorKind.CONFIGURATION
    if code in TRANSIENT_CODES:
        return ErrorKind.TRANSIENT

    # unknown code, fall back on the HTTP status
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 403:
        return ErrorKind.CONFIGURATION
    if status_code >= 500:
        return ErrorKind.TRANSIENT
    return ErrorKind.UNEXPECTED
