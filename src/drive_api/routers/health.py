from fastapi import APIRouter, Depends

from drive_api.config.settings import Settings
from drive_api.dependencies import get_app_settings

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Health check endpoint for monitoring API status.

    Reports `degraded` when no bucket is configured, since every storage call
    would fail.
    """
    bucket_ready = settings.bucket_configured
    return {
        "status": "ok" if bucket_ready else "degraded",
        "app_name": settings.app_name,
        "components": {
            "api": "ready",
            "storage": "ready" if bucket_ready else "error: S3_BUCKET_NAME is not set",
        },
        "ready": bucket_ready,
    }
