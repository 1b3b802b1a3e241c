"""Console notices for deploy stages.

Notices are printed once for the user. They are mirrored to the logger at
DEBUG so ``--verbose`` runs keep them in context without repeating them on
a normal run.
"""

import click

from cfdeploy.lib.logging_config import get_logger

logger = get_logger(__name__)


def log_success(message: str) -> None:
    """Print a success notice."""
    logger.debug("success: %s", click.unstyle(message))
    click.echo(message)


def log_warning(message: str) -> None:
    """Print a warning notice to stderr."""
    logger.debug("warning: %s", click.unstyle(message))
    click.echo(message, err=True)
