"""Rich console output utilities for xdl-web.

This module provides formatted console output with Rich,
supporting colored success/error/warning messages, terminal
clearing between compiles, and respecting the NO_COLOR
environment variable.
"""

from __future__ import annotations

import os
import sys
from typing import Any

from rich.console import Console

# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None

# Escape sequences used to wipe the terminal and its scrollback
_CLEAR_WINDOWS = "\x1b[2J\x1b[3J\x1b[H"
_CLEAR_POSIX = "\x1b[2J\x1b[0f"


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Args:
        message: The message to display.
        **kwargs: Additional arguments passed to console.print().
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Args:
        message: The error message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> error("Cannot import bundler factory 'app.bundler:create'")
        ✗ Cannot import bundler factory 'app.bundler:create'
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message.

    Unlike success/error/warning, no marker is prepended, so Rich markup
    in the message is rendered as-is.

    Args:
        message: The message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> info("Compiling...")
        Compiling...
    """
    console.print(message, **kwargs)


def blank_line() -> None:
    """Print an empty line."""
    console.print("")


def clear_console() -> None:
    """Clear the terminal and its scrollback.

    Does nothing when the console is not attached to a terminal, so
    piped and captured output is never polluted with escape codes.
    """
    if not console.is_terminal:
        return
    sequence = _CLEAR_WINDOWS if sys.platform == "win32" else _CLEAR_POSIX
    console.file.write(sequence)
    console.file.flush()


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print JSON data with syntax highlighting.

    Args:
        data: Dictionary to print as JSON.
        **kwargs: Additional arguments passed to console.print_json().
    """
    import json

    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
