from typing import List

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    Path,
    Response,
    UploadFile,
    status
)
from fastapi.concurrency import run_in_threadpool

from drive_api.adapters.path_adapter import PathAdapter
from drive_api.dependencies import get_adapter
from drive_api.errors import StoreOperationError, invalid_path, value_or_raise
from drive_api.exceptions import InvalidPathError
from drive_api.paths import join_key, validate_name
from drive_api.results import ErrorKind
from drive_api.schemas import (
    DeleteResponse,
    FileOperationResponse,
    ListFilesResponse,
    ListQueryParams,
    MoveRequest,
    PutFileResponse,
    RenameRequest,
    UploadedFile,
    UploadFilesResponse,
)
from drive_api.s3.write_objects import DEFAULT_CONTENT_TYPE

router = APIRouter()


@router.get("/files", response_model=ListFilesResponse)
def list_files(
    query_params: ListQueryParams = Depends(),
    adapter: PathAdapter = Depends(get_adapter),
) -> ListFilesResponse:
    """
    List the folders and files directly under a folder.

    Args:
        query_params: `path` of the folder, empty for the root

    Returns:
        ListFilesResponse: child folders and files, each sorted by path
    """
    listing = value_or_raise(adapter.list(query_params.path))
    return ListFilesResponse(
        message=f"{len(listing.folders)} folder(s), {len(listing.files)} file(s)",
        path=query_params.path,
        folders=listing.folders,
        files=listing.files,
    )


@router.post("/files", response_model=UploadFilesResponse)
async def upload_files(
    files: List[UploadFile] = File(..., description="One or more files to upload"),
    folder_path: str = Form("", description="Destination folder; empty for the root"),
    adapter: PathAdapter = Depends(get_adapter),
) -> UploadFilesResponse:
    """
    Upload one or more files into a folder, keeping their names.

    An existing object with the same key is overwritten. Uploads run one after
    another; if one fails, the files before it stay uploaded.
    """
    uploaded: List[UploadedFile] = []
    for upload in files:
        try:
            validate_name(upload.filename or "")
        except InvalidPathError as e:
            raise invalid_path(str(e), upload.filename or "")

        content = await upload.read()
        result = await run_in_threadpool(
            adapter.upload,
            join_key(folder_path, upload.filename),
            content,
            upload.content_type or DEFAULT_CONTENT_TYPE,
        )
        uploaded.append(value_or_raise(result))

    return UploadFilesResponse(
        message=f"{len(uploaded)} file(s) uploaded successfully",
        files=uploaded,
    )


@router.post("/files/rename", response_model=FileOperationResponse)
def rename_file(
    body: RenameRequest,
    adapter: PathAdapter = Depends(get_adapter),
) -> FileOperationResponse:
    """Rename a file within its folder (copy to the new name, then delete the old key)."""
    new_key = value_or_raise(adapter.rename(body.key, body.new_name))
    return FileOperationResponse(message="File renamed successfully", old_key=body.key, new_key=new_key)


@router.post("/files/move", response_model=FileOperationResponse)
def move_file(
    body: MoveRequest,
    adapter: PathAdapter = Depends(get_adapter),
) -> FileOperationResponse:
    """Move a file to a full key, or into a folder keeping its name."""
    if body.destination_key is not None:
        result = adapter.move(body.source_key, body.destination_key)
    else:
        result = adapter.move_to_folder(body.source_key, body.destination_folder)
    new_key = value_or_raise(result)
    return FileOperationResponse(message="File moved successfully", old_key=body.source_key, new_key=new_key)


@router.put("/files/{key:path}", response_model=PutFileResponse)
async def put_file(
    response: Response,
    key: str = Path(..., description="The key to upload the file at"),
    file_content: UploadFile = File(...),
    adapter: PathAdapter = Depends(get_adapter),
) -> PutFileResponse:
    """
    Upload a single file at an exact key.

    Returns 201 when the key is new and 200 when an existing object was replaced.
    """
    existing = await run_in_threadpool(adapter.stat, key)
    if existing.ok:
        message = f"Existing file updated at path: /{key}"
        response.status_code = status.HTTP_200_OK
    elif existing.error.kind is ErrorKind.NOT_FOUND:
        message = f"New file uploaded at path: /{key}"
        response.status_code = status.HTTP_201_CREATED
    else:
        raise StoreOperationError(existing.error)

    content = await file_content.read()
    result = await run_in_threadpool(
        adapter.upload, key, content, file_content.content_type or DEFAULT_CONTENT_TYPE
    )
    return PutFileResponse(message=message, file=value_or_raise(result))


@router.head("/files/{key:path}")
def get_file_metadata(
    key: str = Path(..., description="The key of the file"),
    adapter: PathAdapter = Depends(get_adapter),
) -> Response:
    """Metadata of one file as `Content-Type`, `Content-Length` and `Last-Modified` headers."""
    stored = value_or_raise(adapter.stat(key))
    headers = {
        "Content-Type": stored.content_type or DEFAULT_CONTENT_TYPE,
        "Content-Length": str(stored.size),
        "Last-Modified": stored.last_modified.strftime("%a, %d %b %Y %H:%M:%S GMT"),
    }
    return Response(status_code=status.HTTP_200_OK, headers=headers)


@router.delete("/files/{key:path}", response_model=DeleteResponse)
def delete_file(
    key: str = Path(..., description="The key of the file to delete"),
    adapter: PathAdapter = Depends(get_adapter),
) -> DeleteResponse:
    """Delete one key. Deleting a key that does not exist also succeeds."""
    deleted_key = value_or_raise(adapter.delete(key))
    return DeleteResponse(message=f"File '{deleted_key}' deleted successfully", key=deleted_key)
