"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import TYPE_CHECKING, Optional, Union

from drive_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@log_execution_time
def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: Union[bytes, str],
    s3_client: "S3Client",
    content_type: Optional[str] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param s3_client: The boto3 S3 client to issue the call with.
    :param content_type: The MIME type of the file, e.g. "text/plain" for a text file.
    """
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type or DEFAULT_CONTENT_TYPE,
    )


@log_execution_time
def copy_s3_object(
    bucket_name: str,
    source_key: str,
    object_key: str,
    s3_client: "S3Client",
) -> None:
    """
    Copy an object to a new key within the same bucket.

    Metadata and content type are carried over from the source.

    :param bucket_name: The name of the S3 bucket.
    :param source_key: Key of the object to copy.
    :param object_key: Key the copy is written to.
    :param s3_client: The boto3 S3 client to issue the call with.
    """
    s3_client.copy_object(
        Bucket=bucket_name,
        CopySource={"Bucket": bucket_name, "Key": source_key},
        Key=object_key,
        MetadataDirective="COPY",
    )
