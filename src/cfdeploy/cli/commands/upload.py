"""CLI command for uploading packaged source for one codebase."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
import httpx

from cfdeploy.cli.errors import handle_deployment_errors
from cfdeploy.config.settings import DeploySettings, load_settings
from cfdeploy.deploy.context import (
    CodebaseConfig,
    CodebaseSource,
    DeployContext,
    DeployPayload,
)
from cfdeploy.deploy.upload import deploy
from cfdeploy.gcp import (
    AllowAllChecker,
    CloudFunctionsClient,
    CloudFunctionsV2Client,
    StorageUploader,
)
from cfdeploy.lib.logging_config import get_logger, setup_logging
from cfdeploy.models.backend import load_backend
from cfdeploy.models.upload import UploadTask

logger = get_logger(__name__)


async def _run_upload(
    context: DeployContext, payload: DeployPayload, settings: DeploySettings
) -> list[UploadTask]:
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        return await deploy(
            context,
            {},
            payload,
            checker=AllowAllChecker(),
            gcf=CloudFunctionsClient(settings, client),
            gcfv2=CloudFunctionsV2Client(settings, client),
            storage=StorageUploader(settings, client),
        )


@click.command(name="upload")
@click.argument("backend_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--project", required=True, help="Project to deploy to")
@click.option("--codebase", default="default", show_default=True)
@click.option(
    "--source-dir",
    default="functions",
    show_default=True,
    help="Source folder the archives were packaged from",
)
@click.option(
    "--v1",
    "source_v1",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Archive for gen-1 endpoints",
)
@click.option(
    "--v2",
    "source_v2",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Archive for gen-2 endpoints",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress output")
def upload_command(
    backend_file: str,
    project: str,
    codebase: str,
    source_dir: str,
    source_v1: Path | None,
    source_v2: Path | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """Upload packaged source for the endpoints in BACKEND_FILE.

    Example:

        cfdeploy upload backend.yaml --project my-proj --v2 functions.zip
    """
    setup_logging(verbose=verbose, quiet=quiet)

    with handle_deployment_errors():
        settings = load_settings()
        backend = load_backend(Path(backend_file))
        source = CodebaseSource(
            functions_source_v1=source_v1, functions_source_v2=source_v2
        )
        context = DeployContext(
            project_id=project,
            config=CodebaseConfig(codebase=codebase, source=source_dir),
            sources={codebase: source},
        )

        tasks = asyncio.run(_run_upload(context, DeployPayload(backend), settings))

        if not tasks:
            if not quiet:
                click.echo("Nothing to upload.")
            return

        if not quiet:
            for region in source.storage.regions():
                storage = source.storage.get(region)
                if storage is not None:
                    click.echo(f"  {region}: gs://{storage.bucket}/{storage.object}")
