from urllib.parse import parse_qs, urlsplit

import pytest
from botocore.exceptions import ClientError

from drive_api.adapters.object_store import GET, PUT, S3ObjectStore
from drive_api.exceptions import StoreConfigurationError
from drive_api.s3.read_objects import iter_s3_listing_pages
from tests.consts import TEST_BUCKET_NAME, TEST_FILE_CONTENT, TEST_FILE_CONTENT_TYPE
from tests.fakes import fail_s3_operation


def test_put_and_head(store: S3ObjectStore):
    store.put("docs/readme.txt", TEST_FILE_CONTENT, TEST_FILE_CONTENT_TYPE)

    info = store.head("docs/readme.txt")

    assert info.key == "docs/readme.txt"
    assert info.size == len(TEST_FILE_CONTENT)
    assert info.content_type == TEST_FILE_CONTENT_TYPE


def test_head_missing_key_raises_404(store: S3ObjectStore):
    with pytest.raises(ClientError) as exc_info:
        store.head("nope.txt")
    assert exc_info.value.response["Error"]["Code"] == "404"


def test_copy_keeps_content_type(store: S3ObjectStore, mocked_aws):
    store.put("a.txt", TEST_FILE_CONTENT, TEST_FILE_CONTENT_TYPE)

    store.copy("a.txt", "b/a.txt")

    copied = mocked_aws.get_object(Bucket=TEST_BUCKET_NAME, Key="b/a.txt")
    assert copied["Body"].read() == TEST_FILE_CONTENT
    assert copied["ContentType"] == TEST_FILE_CONTENT_TYPE
    # copy leaves the source in place
    assert store.head("a.txt").size == len(TEST_FILE_CONTENT)


def test_list_by_prefix_splits_prefixes_and_objects(store: S3ObjectStore):
    for key in ["top.txt", "docs/", "docs/a.txt", "docs/deep/b.txt", "pics/c.png"]:
        store.put(key, b"x")

    root = store.list_by_prefix("", "/")
    assert sorted(root.common_prefixes) == ["docs/", "pics/"]
    assert [obj.key for obj in root.objects] == ["top.txt"]

    docs = store.list_by_prefix("docs/", "/")
    assert list(docs.common_prefixes) == ["docs/deep/"]
    assert sorted(obj.key for obj in docs.objects) == ["docs/", "docs/a.txt"]


def test_listing_follows_continuation_tokens(store: S3ObjectStore, mocked_aws):
    keys = [f"file{i}.txt" for i in range(5)]
    for key in keys:
        store.put(key, b"x")

    pages = list(iter_s3_listing_pages(TEST_BUCKET_NAME, "", "/", mocked_aws, max_keys=2))

    assert len(pages) > 1
    assert sorted(item["Key"] for page in pages for item in page.get("Contents", [])) == keys


def test_delete_missing_key_is_not_an_error(store: S3ObjectStore):
    store.delete("never-existed.txt")


def test_presign_is_scoped_to_key_and_expiry(store: S3ObjectStore):
    download_url = store.presign("docs/report one.pdf", GET, 3600)
    upload_url = store.presign("docs/report one.pdf", PUT, 3600)

    parts = urlsplit(download_url)
    query = parse_qs(parts.query)
    assert parts.path.endswith("/docs/report%20one.pdf")
    assert query["X-Amz-Expires"] == ["3600"]
    assert "X-Amz-Signature" in query
    assert download_url != upload_url


def test_presign_rejects_unknown_method(store: S3ObjectStore):
    with pytest.raises(ValueError):
        store.presign("a.txt", "DELETE", 60)


def test_public_url(store: S3ObjectStore):
    assert store.public_url("docs/a b.txt") == (
        f"https://{TEST_BUCKET_NAME}.s3.us-east-1.amazonaws.com/docs/a%20b.txt"
    )


def test_public_url_with_custom_endpoint(mocked_aws):
    store = S3ObjectStore(mocked_aws, TEST_BUCKET_NAME, "us-east-1", endpoint_url="http://localhost:9000/")
    assert store.public_url("a.txt") == f"http://localhost:9000/{TEST_BUCKET_NAME}/a.txt"


def test_unconfigured_bucket_fails_fast(mocked_aws):
    store = S3ObjectStore(mocked_aws, None, "us-east-1")
    with pytest.raises(StoreConfigurationError):
        store.put("a.txt", b"x")
    with pytest.raises(StoreConfigurationError):
        store.list_by_prefix("", "/")
    with pytest.raises(StoreConfigurationError):
        store.presign("a.txt", GET, 60)


@pytest.mark.parametrize(
    "operation, call",
    [
        ("PutObject", lambda store: store.put("a.txt", b"x")),
        ("CopyObject", lambda store: store.copy("a.txt", "b.txt")),
        ("DeleteObject", lambda store: store.delete("a.txt")),
    ],
)
def test_throttled_calls_are_attempted_once(store: S3ObjectStore, operation, call):
    attempts = fail_s3_operation(store.s3_client, operation)

    with pytest.raises(ClientError) as exc_info:
        call(store)

    assert exc_info.value.response["Error"]["Code"] == "SlowDown"
    assert len(attempts) == 1
