####################################
# --- Domain and request/response schemas --- #
####################################

from datetime import datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator
)
from typing_extensions import Self

DEFAULT_LIST_DIRECTORY = ""


class StoredFile(BaseModel):
    """One object holding user content."""
    key: str = Field(
        description="Full slash-delimited key of the object.",
        json_schema_extra={"example": "reports/2024/summary.pdf"},
    )
    name: str = Field(description="Last segment of the key.")
    size: int = Field(description="The size of the file in bytes.")
    content_type: Optional[str] = Field(
        None,
        description="MIME type; listings do not report it, stat does.",
    )
    last_modified: datetime = Field(description="The last modified date of the file.")


class StoredFolder(BaseModel):
    """A common prefix, shown as a folder."""
    path: str = Field(
        description="Prefix without its trailing slash.",
        json_schema_extra={"example": "reports/2024"},
    )
    name: str = Field(description="Last segment of the path.")


class ListResult(BaseModel):
    """Immediate children of one folder."""
    folders: List[StoredFolder] = Field(default_factory=list)
    files: List[StoredFile] = Field(default_factory=list)


class UploadedFile(BaseModel):
    """What an upload produced."""
    key: str
    name: str
    size: int
    content_type: str
    url: str = Field(description="Deterministic (unsigned) URL of the object.")


class PresignedUrl(BaseModel):
    """A signed URL scoped to one key and one method."""
    key: str
    method: str = Field(description="HTTP method the URL is valid for: GET or PUT.")
    url: str
    expires_in: int = Field(description="Seconds the URL stays valid after issue.")


##########################
# --- HTTP requests --- #
##########################

class ListQueryParams(BaseModel):
    """Query parameters for `GET /v1/files` and `GET /v1/folders`."""
    path: str = Field(
        DEFAULT_LIST_DIRECTORY,
        description="The folder to list; empty string is the root.",
    )


class RenameRequest(BaseModel):
    """Body of `POST /v1/files/rename`."""
    key: str = Field(description="Current key of the object.")
    new_name: str = Field(description="New last segment; must not contain '/'.")


class MoveRequest(BaseModel):
    """Body of `POST /v1/files/move`."""
    source_key: str
    destination_key: Optional[str] = Field(
        None,
        description="Full target key.",
    )
    destination_folder: Optional[str] = Field(
        None,
        description="Target folder; the file keeps its name. Empty string is the root.",
    )

    @model_validator(mode="after")
    def check_exactly_one_destination(self) -> Self:
        if (self.destination_key is None) == (self.destination_folder is None):
            raise ValueError("exactly one of destination_key and destination_folder is required")
        return self


class CreateFolderRequest(BaseModel):
    """Body of `POST /v1/folders`."""
    name: str = Field(description="Name of the new folder.")
    parent_path: str = Field(
        DEFAULT_LIST_DIRECTORY,
        description="Folder to create it in; empty string is the root.",
    )


class UploadUrlRequest(BaseModel):
    """Body of `POST /v1/urls/upload`."""
    file_name: str
    folder_path: str = DEFAULT_LIST_DIRECTORY


###########################
# --- HTTP responses --- #
###########################

class ApiResponse(BaseModel):
    """Envelope shared by every response."""
    success: bool = True
    message: str = ""


class ErrorResponse(ApiResponse):
    """Body returned with every non-2xx status."""
    success: bool = False
    error_kind: str
    keys: List[str] = Field(default_factory=list)
    detail: Optional[str] = Field(
        None,
        description="Name of the underlying store error, when there was one.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Copied to reports/b.pdf but could not delete reports/a.pdf",
                "error_kind": "duplicate_object",
                "keys": ["reports/a.pdf", "reports/b.pdf"],
                "detail": "ClientError",
            }
        }
    )


class ListFilesResponse(ApiResponse):
    """Response model for `GET /v1/files`."""
    path: str
    folders: List[StoredFolder]
    files: List[StoredFile]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "",
                "path": "reports",
                "folders": [{"path": "reports/2024", "name": "2024"}],
                "files": [
                    {
                        "key": "reports/summary.pdf",
                        "name": "summary.pdf",
                        "size": 512,
                        "content_type": None,
                        "last_modified": "2024-01-01T00:00:00Z",
                    }
                ],
            }
        }
    )


class ListFoldersResponse(ApiResponse):
    """Response model for `GET /v1/folders`."""
    path: str
    folders: List[StoredFolder]


class UploadFilesResponse(ApiResponse):
    """Response model for `POST /v1/files`."""
    files: List[UploadedFile]


class PutFileResponse(ApiResponse):
    """Response model for `PUT /v1/files/:key`."""
    file: UploadedFile


class FileOperationResponse(ApiResponse):
    """Response model for rename and move."""
    old_key: str
    new_key: str


class DeleteResponse(ApiResponse):
    """Response model for deletes."""
    key: str


class FolderResponse(ApiResponse):
    """Response model for `POST /v1/folders`."""
    folder: StoredFolder


class PresignedUrlResponse(ApiResponse):
    """Response model for the presigned URL endpoints."""
    presigned: PresignedUrl
