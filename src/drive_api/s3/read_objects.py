"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from typing import TYPE_CHECKING, Iterator, List

from drive_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import HeadObjectOutputTypeDef, ListObjectsV2OutputTypeDef

DEFAULT_MAX_KEYS = 1000


def iter_s3_listing_pages(
    bucket_name: str,
    prefix: str,
    delimiter: str,
    s3_client: "S3Client",
    max_keys: int = DEFAULT_MAX_KEYS,
) -> Iterator["ListObjectsV2OutputTypeDef"]:
    """
    Yield every ``list_objects_v2`` page under a prefix, following continuation tokens.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Only keys starting with this string are listed.
    :param delimiter: Keys are rolled up into common prefixes at this character.
    :param s3_client: The boto3 S3 client to issue the calls with.
    :param max_keys: Page size requested from S3.
    """
    paginator = s3_client.get_paginator("list_objects_v2")
    yield from paginator.paginate(
        Bucket=bucket_name,
        Prefix=prefix,
        Delimiter=delimiter,
        PaginationConfig={"PageSize": max_keys},
    )


@log_execution_time
def fetch_s3_listing(
    bucket_name: str,
    prefix: str,
    delimiter: str,
    s3_client: "S3Client",
) -> "List[ListObjectsV2OutputTypeDef]":
    """Collect all listing pages under ``prefix`` into a list."""
    return list(iter_s3_listing_pages(bucket_name, prefix, delimiter, s3_client))


@log_execution_time
def fetch_s3_object_metadata(bucket_name: str, object_key: str, s3_client: "S3Client") -> "HeadObjectOutputTypeDef":
    """
    Fetch metadata of an object without downloading its body.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param s3_client: The boto3 S3 client to issue the call with.
    :return: The ``head_object`` response.
    """
    return s3_client.head_object(Bucket=bucket_name, Key=object_key)


def generate_presigned_url(
    bucket_name: str,
    object_key: str,
    client_method: str,
    expires_in: int,
    s3_client: "S3Client",
) -> str:
    """
    Sign a URL granting one operation on one key.

    No network call is made; the signature is computed locally.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The only key the URL is valid for.
    :param client_method: ``"get_object"`` or ``"put_object"``.
    :param expires_in: Seconds until the URL stops working.
    :param s3_client: The boto3 S3 client whose credentials sign the URL.
    """
    return s3_client.generate_presigned_url(
        ClientMethod=client_method,
        Params={"Bucket": bucket_name, "Key": object_key},
        ExpiresIn=expires_in,
    )
