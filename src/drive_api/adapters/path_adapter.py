"""
Folder and file operations mapped onto a flat object store.

Every public method is one stateless exchange with the store and returns a
:class:`~drive_api.results.Result`; store failures are never raised to the
caller. Rename and move are a copy followed by a delete. There is no atomic
rename, so a failed delete leaves the object at both keys and is reported as
``DUPLICATE_OBJECT``.
"""

import logging
from typing import Tuple, Union

from botocore.exceptions import BotoCoreError, ClientError

from drive_api.adapters.object_store import GET, PUT, ObjectStore
from drive_api.exceptions import DriveError
from drive_api.paths import (
    DELIMITER,
    FOLDER_CONTENT_TYPE,
    basename,
    folder_marker_key,
    folder_prefix,
    is_folder_marker,
    join_key,
    replace_basename,
    strip_delimiter,
    validate_folder_path,
    validate_key,
    validate_name,
    validate_object_key,
)
from drive_api.results import ErrorKind, Result, error_kind_for
from drive_api.s3.write_objects import DEFAULT_CONTENT_TYPE
from drive_api.schemas import (
    ListResult,
    PresignedUrl,
    StoredFile,
    StoredFolder,
    UploadedFile,
)

logger = logging.getLogger(__name__)

STORE_ERRORS = (DriveError, BotoCoreError, ClientError)

DEFAULT_PRESIGNED_URL_EXPIRY_SECONDS = 3600


class PathAdapter:
    """Hierarchical view of an :class:`ObjectStore`."""

    def __init__(
        self,
        store: ObjectStore,
        presigned_url_expiry_seconds: int = DEFAULT_PRESIGNED_URL_EXPIRY_SECONDS,
    ) -> None:
        self.store = store
        self.presigned_url_expiry_seconds = presigned_url_expiry_seconds

    def list(self, path: str = "") -> Result[ListResult]:
        """Immediate child folders and files of ``path`` (``""`` is the root)."""
        try:
            validate_folder_path(path)
            prefix = folder_prefix(path)
            page = self.store.list_by_prefix(prefix, DELIMITER)
        except STORE_ERRORS as e:
            return self._failure("list", e, (path,))

        folders = []
        for common_prefix in sorted(page.common_prefixes):
            folder_path = strip_delimiter(common_prefix)
            name = basename(folder_path)
            if name:
                folders.append(StoredFolder(path=folder_path, name=name))

        files = [
            StoredFile(
                key=obj.key,
                name=basename(obj.key),
                size=obj.size,
                content_type=obj.content_type,
                last_modified=obj.last_modified,
            )
            for obj in sorted(page.objects, key=lambda o: o.key)
            # the folder's own marker is not a file
            if obj.key != prefix and not is_folder_marker(obj.key)
        ]
        logger.info(f"Listed '{path}': {len(folders)} folder(s), {len(files)} file(s)")
        return Result.success(ListResult(folders=folders, files=files))

    def create_folder(self, path: str) -> Result[StoredFolder]:
        """Put a zero-byte marker at ``path + "/"`` so an empty folder shows up in listings."""
        try:
            marker_key = folder_marker_key(path)
            self.store.put(marker_key, b"", FOLDER_CONTENT_TYPE)
        except STORE_ERRORS as e:
            return self._failure("create_folder", e, (path,))

        logger.info(f"Created folder marker '{marker_key}'")
        return Result.success(StoredFolder(path=path, name=basename(path)))

    def upload(
        self,
        key: str,
        content: Union[bytes, str],
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Result[UploadedFile]:
        """Single put at ``key``; an existing object there is overwritten."""
        content_type = content_type or DEFAULT_CONTENT_TYPE
        try:
            validate_object_key(key)
            self.store.put(key, content, content_type)
            url = self.store.public_url(key)
        except STORE_ERRORS as e:
            return self._failure("upload", e, (key,))

        size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
        logger.info(f"Uploaded '{key}' ({size} bytes, {content_type})")
        return Result.success(
            UploadedFile(key=key, name=basename(key), size=size, content_type=content_type, url=url)
        )

    def rename(self, old_key: str, new_name: str) -> Result[str]:
        """Replace the last segment of ``old_key``; the folder stays the same."""
        try:
            validate_object_key(old_key)
            validate_name(new_name)
        except STORE_ERRORS as e:
            return self._failure("rename", e, (old_key,))
        return self._relocate("rename", old_key, replace_basename(old_key, new_name))

    def move(self, source_key: str, destination_key: str) -> Result[str]:
        """Copy ``source_key`` to ``destination_key``, then delete the source."""
        try:
            validate_object_key(source_key)
            validate_object_key(destination_key)
        except STORE_ERRORS as e:
            return self._failure("move", e, (source_key, destination_key))
        return self._relocate("move", source_key, destination_key)

    def move_to_folder(self, source_key: str, folder_path: str) -> Result[str]:
        """Move ``source_key`` into ``folder_path`` keeping its name."""
        try:
            validate_object_key(source_key)
            validate_folder_path(folder_path)
        except STORE_ERRORS as e:
            return self._failure("move", e, (source_key,))
        return self.move(source_key, join_key(folder_path, basename(source_key)))

    def delete(self, key: str) -> Result[str]:
        """Delete exactly one key. Deleting a folder marker leaves the folder's contents alone."""
        try:
            validate_key(key)
            self.store.delete(key)
        except STORE_ERRORS as e:
            return self._failure("delete", e, (key,))

        logger.info(f"Deleted '{key}'")
        return Result.success(key)

    def delete_folder(self, path: str) -> Result[str]:
        """Delete the marker of ``path``. Files under it, if any, keep the folder visible."""
        try:
            marker_key = folder_marker_key(path)
        except STORE_ERRORS as e:
            return self._failure("delete_folder", e, (path,))
        return self.delete(marker_key)

    def stat(self, key: str) -> Result[StoredFile]:
        try:
            validate_object_key(key)
            info = self.store.head(key)
        except STORE_ERRORS as e:
            return self._failure("stat", e, (key,))

        return Result.success(
            StoredFile(
                key=key,
                name=basename(key),
                size=info.size,
                content_type=info.content_type,
                last_modified=info.last_modified,
            )
        )

    def get_download_url(self, key: str) -> Result[PresignedUrl]:
        return self._presign(key, GET)

    def get_upload_url(self, key: str) -> Result[PresignedUrl]:
        return self._presign(key, PUT)

    def _presign(self, key: str, method: str) -> Result[PresignedUrl]:
        expires_in = self.presigned_url_expiry_seconds
        try:
            validate_object_key(key)
            url = self.store.presign(key, method, expires_in)
        except STORE_ERRORS as e:
            return self._failure(f"presign {method}", e, (key,))

        logger.info(f"Issued presigned {method} URL for '{key}' valid for {expires_in}s")
        return Result.success(PresignedUrl(key=key, method=method, url=url, expires_in=expires_in))

    def _relocate(self, operation: str, source_key: str, destination_key: str) -> Result[str]:
        """Copy then delete. Both keys exist between the two calls."""
        if source_key == destination_key:
            return Result.failure(
                ErrorKind.INVALID_PATH,
                f"Cannot {operation} '{source_key}' onto itself",
                keys=(source_key,),
            )

        try:
            self.store.copy(source_key, destination_key)
        except STORE_ERRORS as e:
            return self._failure(operation, e, (source_key, destination_key))

        try:
            self.store.delete(source_key)
        except STORE_ERRORS as e:
            logger.error(
                f"{operation}: copied '{source_key}' to '{destination_key}' but failed to delete the source: {e}"
            )
            return Result.failure(
                ErrorKind.DUPLICATE_OBJECT,
                f"Copied '{source_key}' to '{destination_key}' but could not delete '{source_key}'; "
                f"the object now exists at both keys",
                keys=(source_key, destination_key),
                detail=type(e).__name__,
            )

        logger.info(f"{operation}: '{source_key}' -> '{destination_key}'")
        return Result.success(destination_key)

    def _failure(self, operation: str, exc: Exception, keys: Tuple[str, ...]) -> Result:
        kind = error_kind_for(exc)
        if kind is ErrorKind.INVALID_PATH:
            logger.warning(f"{operation} rejected: {exc}")
        else:
            logger.error(f"{operation} failed ({kind.value}) for {list(keys)}: {exc}")
        return Result.failure(kind, f"{operation} failed: {exc}", keys=keys, detail=type(exc).__name__)
