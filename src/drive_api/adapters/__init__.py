from drive_api.adapters.object_store import ListingPage, ObjectInfo, ObjectStore, S3ObjectStore
from drive_api.adapters.path_adapter import PathAdapter

__all__ = [
    "ListingPage",
    "ObjectInfo",
    "ObjectStore",
    "PathAdapter",
    "S3ObjectStore",
]
