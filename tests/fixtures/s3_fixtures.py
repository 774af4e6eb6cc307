"""S3 fixtures backed by moto."""
import boto3
import pytest
from moto import mock_aws

from drive_api.adapters.object_store import S3ObjectStore
from drive_api.adapters.path_adapter import PathAdapter
from drive_api.config.settings import Settings, get_settings
from tests.consts import TEST_BUCKET_NAME, TEST_REGION


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    for name in ("AWS_ENDPOINT_URL", "AWS_PROFILE", "S3_BUCKET_NAME"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws():
    """moto-mocked AWS with the test bucket created."""
    with mock_aws():
        s3_client = boto3.client("s3", region_name=TEST_REGION)
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        yield s3_client


@pytest.fixture
def settings() -> Settings:
    return Settings(
        s3_bucket_name=TEST_BUCKET_NAME,
        aws_region=TEST_REGION,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def store(mocked_aws, settings) -> S3ObjectStore:
    return S3ObjectStore.from_settings(settings)


@pytest.fixture
def adapter(store) -> PathAdapter:
    return PathAdapter(store)
