"""Construction of the one boto3 S3 client the process uses."""
import logging
from typing import TYPE_CHECKING, Any, Dict

import boto3
from botocore.config import Config

from drive_api.config.settings import Settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> "S3Client":
    """
    Build an S3 client from explicit settings.

    Credentials left unset fall through to boto3's default credential chain.
    Presigned URLs are always SigV4 so they carry ``X-Amz-Expires``. botocore's
    automatic retries are off: every call is attempted once and a failure is
    returned to the caller as is.

    :param settings: Application settings holding region, endpoint and credentials.
    :return: A configured boto3 S3 client.
    """
    client_kwargs: Dict[str, Any] = {
        "region_name": settings.aws_region,
        "config": Config(signature_version="s3v4", retries={"total_max_attempts": 1}),
    }

    if settings.aws_access_key_id:
        client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
    if settings.aws_secret_access_key:
        client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    logger.info(
        f"Creating S3 client (region={settings.aws_region}, endpoint={settings.aws_endpoint_url or 'aws'})"
    )
    return boto3.client("s3", **client_kwargs)
