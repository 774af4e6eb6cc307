from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware

from drive_api.adapters.object_store import ObjectStore, S3ObjectStore
from drive_api.adapters.path_adapter import PathAdapter
from drive_api.config.settings import Settings
from drive_api.errors import (
    StoreOperationError,
    handle_broad_exceptions,
    handle_pydantic_validation_errors,
    handle_store_operation_errors,
)
from drive_api.routers.files import router as files_router
from drive_api.routers.folders import router as folders_router
from drive_api.routers.health import router as health_router
from drive_api.routers.urls import router as urls_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[ObjectStore] = None) -> FastAPI:
    """
    Create a FastAPI application.

    The object store is built once here from `settings` unless one is passed in,
    and the path adapter wrapping it lives on `app.state` for the process lifetime.
    """
    settings = settings or Settings()
    store = store or S3ObjectStore.from_settings(settings)

    app = FastAPI(
        title="Drive API",
        summary="Folders and files over an S3 bucket",
        version="v1",
        description=dedent(
            """\
        Folders are emulated on S3's flat key space: a folder is a key prefix,
        optionally backed by a zero-byte marker object ending in `/`.

        | Operation | S3 calls |
        | --- | --- |
        | list | `ListObjectsV2` with `Delimiter=/` |
        | create folder | `PutObject` of `path/` |
        | rename / move | `CopyObject` then `DeleteObject` (not atomic) |
        | presigned URL | local signature, no call |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.adapter = PathAdapter(store, presigned_url_expiry_seconds=settings.presigned_url_expiry_seconds)
    logger.info(f"Serving bucket '{settings.s3_bucket_name}' in region {settings.aws_region}")

    app.include_router(files_router, prefix="/v1", tags=["files"])
    app.include_router(folders_router, prefix="/v1", tags=["folders"])
    app.include_router(urls_router, prefix="/v1", tags=["urls"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=StoreOperationError,
        handler=handle_store_operation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    from drive_api.logging_config import setup_logging

    settings = Settings()
    setup_logging(settings.log_level)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)
