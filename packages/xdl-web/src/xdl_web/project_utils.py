"""Project-scoped logging facility.

Every message is written to the terminal and mirrored as a structured
``project_log`` event bound to the project root and a source tag, so
tooling attached to the log stream (devtools, CI collectors) sees the
same messages as the developer, minus the terminal styling.

Messages are Rich markup. Callers interpolating untrusted text such as
compiler diagnostics must escape it with ``rich.markup.escape``.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

from xdl_web import output
from xdl_web.observability import get_logger

Message = str | Sequence[str]

# Separator used when a list of diagnostics is logged as one message
MESSAGE_SEPARATOR = "\n\n"


def _join(message: Message) -> str:
    if isinstance(message, str):
        return message
    return MESSAGE_SEPARATOR.join(message)


def _emit(level: str, project_root: str, tag: str, message: Message) -> None:
    text = _join(message)
    output.info(text)

    log = get_logger().bind(project_root=str(project_root), tag=tag)
    plain = Text.from_markup(text).plain
    getattr(log, level)("project_log", level=level, message=plain)


def log_debug(project_root: str, tag: str, message: Message) -> None:
    """Log a debug message for a project."""
    _emit("debug", project_root, tag, message)


def log_info(project_root: str, tag: str, message: Message) -> None:
    """Log an informational message for a project.

    Args:
        project_root: Root directory of the project the message belongs to.
        tag: Source of the message (e.g. ``"webpack"``).
        message: Rich-markup text, or a list of texts joined by a blank line.
    """
    _emit("info", project_root, tag, message)


def log_warning(project_root: str, tag: str, message: Message) -> None:
    """Log a warning message for a project."""
    _emit("warning", project_root, tag, message)


def log_error(project_root: str, tag: str, message: Message) -> None:
    """Log an error message for a project.

    Args:
        project_root: Root directory of the project the message belongs to.
        tag: Source of the message.
        message: Rich-markup text, or a list of texts joined by a blank line.
    """
    _emit("error", project_root, tag, message)
