"""
Key arithmetic for emulating folders on a flat key space.

A folder ``a/b`` is the prefix ``a/b/``; its optional marker object has the key
``a/b/``. The root folder is the empty string.
"""

from drive_api.exceptions import InvalidPathError

DELIMITER = "/"
FOLDER_CONTENT_TYPE = "application/x-directory"


def _check_utf8(value: str, what: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPathError(f"{what} must be valid UTF-8: {value!r}")


def _check_segments(value: str, what: str) -> None:
    if value.startswith(DELIMITER):
        raise InvalidPathError(f"{what} must not start with '{DELIMITER}': {value!r}")
    if value.endswith(DELIMITER):
        raise InvalidPathError(f"{what} must not end with '{DELIMITER}': {value!r}")
    if "" in value.split(DELIMITER):
        raise InvalidPathError(f"{what} must not contain empty segments: {value!r}")
    if "\x00" in value:
        raise InvalidPathError(f"{what} must not contain null bytes: {value!r}")
    _check_utf8(value, what)


def validate_folder_path(path: str, allow_root: bool = True) -> str:
    """Validate a folder path. ``""`` is the root and is allowed unless ``allow_root`` is False."""
    if path == "":
        if allow_root:
            return path
        raise InvalidPathError("Folder path must not be empty")
    _check_segments(path, "Folder path")
    return path


def validate_object_key(key: str) -> str:
    """Validate the key of a file object (never a folder marker)."""
    if not key:
        raise InvalidPathError("Object key must not be empty")
    _check_segments(key, "Object key")
    return key


def validate_key(key: str) -> str:
    """Validate either a file key or a folder marker key (one trailing ``/``)."""
    if is_folder_marker(key):
        validate_folder_path(key[:-1], allow_root=False)
        return key
    return validate_object_key(key)


def validate_name(name: str) -> str:
    """Validate a single path segment, e.g. the target of a rename."""
    if not name or not name.strip():
        raise InvalidPathError("Name must not be empty")
    if DELIMITER in name:
        raise InvalidPathError(f"Name must not contain '{DELIMITER}': {name!r}")
    if name in (".", ".."):
        raise InvalidPathError(f"Name must not be {name!r}")
    _check_utf8(name, "Name")
    return name


def folder_prefix(path: str) -> str:
    """Listing prefix for a folder: ``"a/b"`` -> ``"a/b/"``, root -> ``""``."""
    return f"{path}{DELIMITER}" if path else ""


def folder_marker_key(path: str) -> str:
    return f"{validate_folder_path(path, allow_root=False)}{DELIMITER}"


def strip_delimiter(prefix: str) -> str:
    """Common prefix ``"a/b/"`` -> folder path ``"a/b"``."""
    return prefix[:-1] if prefix.endswith(DELIMITER) else prefix


def basename(key: str) -> str:
    return key.rsplit(DELIMITER, 1)[-1]


def parent_path(key: str) -> str:
    """Folder holding ``key``; ``""`` for keys at the root."""
    if DELIMITER not in key:
        return ""
    return key.rsplit(DELIMITER, 1)[0]


def join_key(folder_path: str, name: str) -> str:
    """Key of ``name`` inside ``folder_path`` (``name`` alone at the root)."""
    return f"{folder_path}{DELIMITER}{name}" if folder_path else name


def replace_basename(key: str, new_name: str) -> str:
    """Swap the last segment of ``key`` for ``new_name``, keeping the folder fixed."""
    return join_key(parent_path(key), new_name)


def is_folder_marker(key: str) -> bool:
    return key.endswith(DELIMITER)
