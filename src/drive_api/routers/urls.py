from fastapi import APIRouter, Depends, Query

from drive_api.adapters.path_adapter import PathAdapter
from drive_api.dependencies import get_adapter
from drive_api.errors import invalid_path, value_or_raise
from drive_api.exceptions import InvalidPathError
from drive_api.paths import join_key, validate_name
from drive_api.schemas import PresignedUrlResponse, UploadUrlRequest

router = APIRouter()


@router.get("/urls/download", response_model=PresignedUrlResponse)
def get_download_url(
    key: str = Query(..., description="Key of the file to download"),
    adapter: PathAdapter = Depends(get_adapter),
) -> PresignedUrlResponse:
    """Presigned GET URL for exactly one key."""
    presigned = value_or_raise(adapter.get_download_url(key))
    return PresignedUrlResponse(message="Download URL generated", presigned=presigned)


@router.post("/urls/upload", response_model=PresignedUrlResponse)
def get_upload_url(
    body: UploadUrlRequest,
    adapter: PathAdapter = Depends(get_adapter),
) -> PresignedUrlResponse:
    """Presigned PUT URL so a browser can upload straight to the bucket."""
    try:
        validate_name(body.file_name)
    except InvalidPathError as e:
        raise invalid_path(str(e), body.file_name)

    presigned = value_or_raise(adapter.get_upload_url(join_key(body.folder_path, body.file_name)))
    return PresignedUrlResponse(message="Upload URL generated", presigned=presigned)
