import pytest
from botocore.exceptions import EndpointConnectionError, NoCredentialsError

from drive_api.exceptions import InvalidPathError, StoreConfigurationError
from drive_api.results import ErrorKind, Result, error_kind_for
from tests.fakes import client_error


@pytest.mark.parametrize(
    "code, status_code, expected",
    [
        ("NoSuchKey", 404, ErrorKind.NOT_FOUND),
        ("404", 404, ErrorKind.NOT_FOUND),
        ("AccessDenied", 403, ErrorKind.CONFIGURATION),
        ("InvalidAccessKeyId", 403, ErrorKind.CONFIGURATION),
        ("NoSuchBucket", 404, ErrorKind.CONFIGURATION),
        ("SlowDown", 503, ErrorKind.TRANSIENT),
        ("InternalError", 500, ErrorKind.TRANSIENT),
        ("SomethingNew", 502, ErrorKind.TRANSIENT),
        ("SomethingNew", 403, ErrorKind.CONFIGURATION),
        ("InvalidArgument", 400, ErrorKind.UNEXPECTED),
    ],
)
def test_client_error_classification(code, status_code, expected):
    assert error_kind_for(client_error(code, "PutObject", status_code)) is expected


def test_botocore_error_classification():
    assert error_kind_for(NoCredentialsError()) is ErrorKind.CONFIGURATION
    assert error_kind_for(EndpointConnectionError(endpoint_url="http://x")) is ErrorKind.TRANSIENT


def test_drive_error_classification():
    assert error_kind_for(InvalidPathError("bad")) is ErrorKind.INVALID_PATH
    assert error_kind_for(StoreConfigurationError("no bucket")) is ErrorKind.CONFIGURATION
    assert error_kind_for(RuntimeError("boom")) is ErrorKind.UNEXPECTED


def test_result_success_and_failure():
    ok = Result.success("a/b.txt")
    assert ok.ok
    assert ok.value == "a/b.txt"
    assert ok.error is None

    failed = Result.failure(ErrorKind.NOT_FOUND, "missing", keys=("a/b.txt",))
    assert not failed.ok
    assert failed.value is None
    assert failed.error.kind is ErrorKind.NOT_FOUND
    assert failed.error.keys == ("a/b.txt",)
