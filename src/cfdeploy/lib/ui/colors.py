"""ANSI color utilities for deploy notices.

Provides color constants and a helper that degrades to plain text when
output is not a terminal.
"""

from cfdeploy.lib.ui.terminal import is_tty


class ANSIColors:
    """ANSI escape codes used by deploy notices.

    Attributes:
        GREEN: Bright green (success labels).
        YELLOW: Bright yellow (warning labels).
        BOLD: Bold weight (folder names, stage labels).
        RESET: Restore default terminal rendering.
    """

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colorize(text: str, *codes: str, force_tty: bool | None = None) -> str:
    """Wrap text in one or more ANSI codes if writing to a TTY.

    Args:
        text: Text to colorize.
        *codes: ANSI codes to apply, e.g. ``ANSIColors.GREEN, ANSIColors.BOLD``.
        force_tty: Override TTY detection (for testing). None uses auto-detection.

    Returns:
        Colorized text in TTY mode, plain text otherwise.
    """
    use_colors = force_tty if force_tty is not None else is_tty()
    if not use_colors or not codes:
        return text
    return f"{''.join(codes)}{text}{ANSIColors.RESET}"
