# cli.py
import logging
import sys

import click

from drive_api.adapters.object_store import S3ObjectStore
from drive_api.adapters.path_adapter import PathAdapter
from drive_api.config.settings import get_settings
from drive_api.logging_config import setup_logging
from drive_api.results import Result

logger = logging.getLogger(__name__)


def _build_adapter() -> PathAdapter:
    settings = get_settings()
    return PathAdapter(
        S3ObjectStore.from_settings(settings),
        presigned_url_expiry_seconds=settings.presigned_url_expiry_seconds,
    )


def _fail_on_error(result: Result) -> None:
    if not result.ok:
        click.echo(f"Error [{result.error.kind.value}]: {result.error.message}", err=True)
        sys.exit(1)


@click.group()
def cli():
    """Manage the Drive API and browse its bucket"""
    setup_logging(get_settings().log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    click.echo("Current Configuration:")
    for name, value in get_settings().describe().items():
        click.echo(f"  {name}: {value}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
def serve(host, port):
    """Run the HTTP API with uvicorn"""
    import uvicorn

    from drive_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


@cli.command(name="ls")
@click.argument("path", default="")
def list_path(path):
    """List folders and files directly under PATH (default: the root)"""
    result = _build_adapter().list(path)
    _fail_on_error(result)
    for folder in result.value.folders:
        click.echo(f"{folder.name}/")
    for stored in result.value.files:
        click.echo(f"{stored.name}\t{stored.size}\t{stored.last_modified.isoformat()}")


@cli.command()
@click.argument("path")
def mkdir(path):
    """Create the folder PATH by writing its marker object"""
    result = _build_adapter().create_folder(path)
    _fail_on_error(result)
    click.echo(f"Created {result.value.path}/")


if __name__ == "__main__":
    cli()
