"""Drive API exceptions."""


class DriveError(Exception):
    """Base exception for the drive API."""

    pass


class InvalidPathError(DriveError, ValueError):
    """A key, folder path or name breaks the key rules."""

    pass


class StoreConfigurationError(DriveError):
    """The object store is missing its bucket, region or credentials."""

    pass
