"""ANSI colouring for compact error diagnostics.

Colours are applied only when stdout is a TTY, unless overridden by the
``FORCE_COLOR`` / ``NO_COLOR`` environment variables. Messages stored on
exceptions stay plain; only ``format_compact()`` output is coloured.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
}

Style = Literal["reset", "bold", "dim", "green", "yellow", "cyan", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Decide once per process whether diagnostics get colours.

    Respects:
        - FORCE_COLOR (wins over everything)
        - NO_COLOR (https://no-color.org/)
        - sys.stdout.isatty()
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()


def supports_color() -> bool:
    """Return True if diagnostics are coloured in this process."""
    return _USE_COLORS


def colorize(text: str, *styles: Style) -> str:
    """Wrap text in the given ANSI styles when colours are enabled.

    Example:
        >>> colorize("main@rT", "cyan")
        '\\033[36mmain@rT\\033[0m'  # with colours
        'main@rT'                  # without
    """
    if not _USE_COLORS or not styles:
        return text
    prefix = "".join(_CODES.get(style, "") for style in styles)
    if not prefix:
        return text
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_ESCAPE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def frame(location: str, provider_id: str | None) -> str:
    """Render a call frame as ``location@provider`` (location cyan, id yellow)."""
    return f"{colorize(location, 'cyan')}@{colorize(str(provider_id), 'yellow')}"


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """Prefix a message with its coloured error code, if any.

    Example:
        >>> format_error_header("T-RUN-001", "Resource 'x' not found.")
        'T-RUN-001: Resource ...'
    """
    if code:
        return f"{error_code(code)}: {message}"
    return message
