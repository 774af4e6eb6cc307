from fastapi import APIRouter, Depends, Path, status

from drive_api.adapters.path_adapter import PathAdapter
from drive_api.dependencies import get_adapter
from drive_api.errors import invalid_path, value_or_raise
from drive_api.exceptions import InvalidPathError
from drive_api.paths import join_key, validate_name
from drive_api.schemas import (
    CreateFolderRequest,
    DeleteResponse,
    FolderResponse,
    ListFoldersResponse,
    ListQueryParams,
)

router = APIRouter()


@router.get("/folders", response_model=ListFoldersResponse)
def list_folders(
    query_params: ListQueryParams = Depends(),
    adapter: PathAdapter = Depends(get_adapter),
) -> ListFoldersResponse:
    """List only the child folders of a folder."""
    listing = value_or_raise(adapter.list(query_params.path))
    return ListFoldersResponse(
        message=f"{len(listing.folders)} folder(s)",
        path=query_params.path,
        folders=listing.folders,
    )


@router.post("/folders", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(
    body: CreateFolderRequest,
    adapter: PathAdapter = Depends(get_adapter),
) -> FolderResponse:
    """Create an (empty) folder by writing its marker object."""
    try:
        validate_name(body.name)
    except InvalidPathError as e:
        raise invalid_path(str(e), body.name)

    folder = value_or_raise(adapter.create_folder(join_key(body.parent_path, body.name)))
    return FolderResponse(message="Folder created successfully", folder=folder)


@router.delete("/folders/{path:path}", response_model=DeleteResponse)
def delete_folder(
    path: str = Path(..., description="The folder whose marker is deleted"),
    adapter: PathAdapter = Depends(get_adapter),
) -> DeleteResponse:
    """
    Delete the folder's marker object only.

    Files under the folder are not touched; while any remain the folder is
    still listed.
    """
    deleted_key = value_or_raise(adapter.delete_folder(path))
    return DeleteResponse(message="Folder marker deleted successfully", key=deleted_key)
