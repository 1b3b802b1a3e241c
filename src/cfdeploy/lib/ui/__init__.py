"""Terminal output helpers for deploy notices."""

from cfdeploy.lib.ui.colors import ANSIColors, colorize
from cfdeploy.lib.ui.notify import log_success, log_warning
from cfdeploy.lib.ui.terminal import is_tty

__all__ = [
    "ANSIColors",
    "colorize",
    "is_tty",
    "log_success",
    "log_warning",
]
