from fastapi import Request

from drive_api.adapters.path_adapter import PathAdapter
from drive_api.config.settings import Settings


def get_adapter(request: Request) -> PathAdapter:
    """Path adapter built once in `create_app`."""
    return request.app.state.adapter


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
