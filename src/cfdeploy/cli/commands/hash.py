"""CLI command for printing endpoint fingerprints."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from cfdeploy.cli.errors import handle_deployment_errors
from cfdeploy.deploy.cache.hash import compute_endpoint_hashes
from cfdeploy.lib.logging_config import get_logger, setup_logging
from cfdeploy.models.backend import load_backend

logger = get_logger(__name__)


@click.command(name="hash")
@click.argument("backend_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--source",
    "source_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Packaged source archive to include in the fingerprint",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose debug logging")
def hash_command(backend_file: str, source_path: str | None, verbose: bool) -> None:
    """Print the deploy fingerprint of every endpoint in BACKEND_FILE.

    BACKEND_FILE is a JSON or YAML document describing the desired backend.

    Example:

        cfdeploy hash backend.yaml --source functions.zip
    """
    setup_logging(verbose=verbose, quiet=not verbose)

    with handle_deployment_errors():
        backend = load_backend(Path(backend_file))
        hashes = asyncio.run(compute_endpoint_hashes(backend, source_path))

        for (region, endpoint_id), digest in hashes.items():
            click.echo(f"{region}\t{endpoint_id}\t{digest}")
