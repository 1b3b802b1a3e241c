"""Logging setup shared by the cfdeploy CLI and library modules."""

import logging
import sys

ROOT_LOGGER_NAME = "cfdeploy"

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the cfdeploy namespace.

    Module names already inside the package (``cfdeploy.deploy.upload``) are
    used as-is; anything else is nested under ``cfdeploy``.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the cfdeploy root logger.

    Args:
        verbose: Emit DEBUG records, including HTTP client internals.
        quiet: Only emit WARNING and above. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Re-running setup (e.g. several CLI invocations in one test process)
    # must not stack handlers.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(handler)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.DEBUG if verbose else logging.WARNING)
