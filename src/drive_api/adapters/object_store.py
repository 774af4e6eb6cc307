"""
The object store port and its S3 implementation.

The store knows nothing about folders: it puts, copies, deletes, heads and
lists flat keys, and signs URLs. Folder semantics live in the path adapter.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Protocol, Tuple, Union
from urllib.parse import quote

from drive_api.config.settings import Settings
from drive_api.exceptions import StoreConfigurationError
from drive_api.s3.client import create_s3_client
from drive_api.s3.delete_objects import delete_s3_object
from drive_api.s3.read_objects import (
    fetch_s3_listing,
    fetch_s3_object_metadata,
    generate_presigned_url,
)
from drive_api.s3.write_objects import copy_s3_object, upload_s3_object

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

GET = "GET"
PUT = "PUT"

_CLIENT_METHODS = {GET: "get_object", PUT: "put_object"}


@dataclass(frozen=True)
class ObjectInfo:
    """One object as reported by a listing or a head call."""

    key: str
    size: int
    last_modified: datetime
    content_type: Optional[str] = None


@dataclass(frozen=True)
class ListingPage:
    """Everything directly under one prefix, as returned by a delimiter listing."""

    common_prefixes: Tuple[str, ...]
    objects: Tuple[ObjectInfo, ...]


class ObjectStore(Protocol):
    """Operations a flat, prefix-addressed object store offers."""

    def put(self, key: str, body: Union[bytes, str], content_type: Optional[str] = None) -> None:
        """Write ``body`` at ``key``, replacing any existing object."""
        ...

    def delete(self, key: str) -> None:
        """Delete one key. Missing keys are not an error."""
        ...

    def copy(self, source_key: str, dest_key: str) -> None:
        """Server-side copy of one object."""
        ...

    def head(self, key: str) -> ObjectInfo:
        """Metadata of one object; raises when the key does not exist."""
        ...

    def list_by_prefix(self, prefix: str, delimiter: str) -> ListingPage:
        """Common prefixes and objects directly under ``prefix``, across all pages."""
        ...

    def presign(self, key: str, method: str, expires_in: int) -> str:
        """A URL allowing ``method`` (GET or PUT) on ``key`` for ``expires_in`` seconds."""
        ...

    def public_url(self, key: str) -> str:
        """The deterministic, unsigned URL of ``key``."""
        ...


class S3ObjectStore:
    """
    :class:`ObjectStore` backed by one S3 bucket.

    Constructed once with an explicit client and bucket and passed to whoever
    needs it. With no bucket configured every call raises
    :class:`StoreConfigurationError`.
    """

    def __init__(
        self,
        s3_client: "S3Client",
        bucket_name: Optional[str],
        region: str,
        endpoint_url: Optional[str] = None,
    ) -> None:
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.region = region
        self.endpoint_url = endpoint_url

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        if not settings.bucket_configured:
            logger.error("S3_BUCKET_NAME is not set; every storage call will fail")
        return cls(
            s3_client=create_s3_client(settings),
            bucket_name=settings.s3_bucket_name,
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )

    def _bucket(self) -> str:
        if not self.bucket_name:
            raise StoreConfigurationError("S3 bucket name is not configured")
        return self.bucket_name

    def put(self, key: str, body: Union[bytes, str], content_type: Optional[str] = None) -> None:
        upload_s3_object(
            bucket_name=self._bucket(),
            object_key=key,
            file_content=body,
            s3_client=self.s3_client,
            content_type=content_type,
        )

    def delete(self, key: str) -> None:
        delete_s3_object(bucket_name=self._bucket(), object_key=key, s3_client=self.s3_client)

    def copy(self, source_key: str, dest_key: str) -> None:
        copy_s3_object(
            bucket_name=self._bucket(),
            source_key=source_key,
            object_key=dest_key,
            s3_client=self.s3_client,
        )

    def head(self, key: str) -> ObjectInfo:
        response = fetch_s3_object_metadata(
            bucket_name=self._bucket(), object_key=key, s3_client=self.s3_client
        )
        return ObjectInfo(
            key=key,
            size=response["ContentLength"],
            last_modified=response["LastModified"],
            content_type=response.get("ContentType"),
        )

    def list_by_prefix(self, prefix: str, delimiter: str) -> ListingPage:
        pages = fetch_s3_listing(
            bucket_name=self._bucket(),
            prefix=prefix,
            delimiter=delimiter,
            s3_client=self.s3_client,
        )
        common_prefixes: List[str] = []
        objects: List[ObjectInfo] = []
        for page in pages:
            common_prefixes.extend(item["Prefix"] for item in page.get("CommonPrefixes", []))
            objects.extend(
                ObjectInfo(
                    key=item["Key"],
                    size=item.get("Size", 0),
                    last_modified=item["LastModified"],
                )
                for item in page.get("Contents", [])
            )
        return ListingPage(common_prefixes=tuple(common_prefixes), objects=tuple(objects))

    def presign(self, key: str, method: str, expires_in: int) -> str:
        if method not in _CLIENT_METHODS:
            raise ValueError(f"Unsupported presign method: {method}")
        return generate_presigned_url(
            bucket_name=self._bucket(),
            object_key=key,
            client_method=_CLIENT_METHODS[method],
            expires_in=expires_in,
            s3_client=self.s3_client,
        )

    def public_url(self, key: str) -> str:
        bucket = self._bucket()
        quoted_key = quote(key, safe="/")
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{bucket}/{quoted_key}"
        return f"https://{bucket}.s3.{self.region}.amazonaws.com/{quoted_key}"
