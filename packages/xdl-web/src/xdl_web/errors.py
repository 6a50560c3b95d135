"""Error handling for xdl-web.

This module defines:
- XdlWebError: Base exception, with technical details logged via structlog
- BundlerLoadError: Raised when a bundler factory cannot be imported
- ConfigError: Raised when a bundler config file cannot be loaded
- CLIError: Click exception with exit code support and Rich formatting

User-facing messages are safe to display. Technical details are only
written to the structured log.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from xdl_web.observability import get_logger
from xdl_web.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

logger = get_logger(__name__)

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (bad config, failed bundler construction)
EXIT_SYSTEM_ERROR = 2  # System error (missing file, permissions)


class XdlWebError(Exception):
    """Base exception for xdl-web.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details, logged but never shown.

    Example:
        >>> raise XdlWebError(
        ...     "Bundler factory not found",
        ...     internal_details="module 'app.bundler' has no attribute 'create'",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "xdl_web_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class BundlerLoadError(XdlWebError):
    """Raised when a bundler factory import string cannot be resolved.

    Raised when:
    - The import string is not of the form ``module:attribute``
    - The module cannot be imported
    - The attribute is missing or not callable
    """


class ConfigError(XdlWebError):
    """Raised when a bundler configuration file is unreadable or malformed."""


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - port: Input should be less than or equal to 65535"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}")

    return "\n".join(lines)


def handle_yaml_error(err: Exception, file_path: str) -> NoReturn:
    """Handle YAML parsing errors with line number information.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        line = mark.line + 1
        col = mark.column + 1
        error_msg = f"YAML syntax error at line {line}, column {col}: {err.problem}"  # type: ignore[attr-defined]

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_validation_error(err: PydanticValidationError, source: str) -> NoReturn:
    """Handle Pydantic validation errors with user-friendly messages.

    Args:
        err: Pydantic ValidationError instance.
        source: Where the invalid values came from (file or environment).

    Raises:
        CLIError: Always raises with formatted error message.
    """
    formatted = format_pydantic_error(err)
    raise CLIError(f"Invalid configuration in {source}:\n{formatted}")


def handle_file_not_found(file_path: str) -> NoReturn:
    """Handle file not found errors.

    Raises:
        CLIError: Always raises with exit code EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"File not found: {file_path}\n\nUse --config to specify a bundler config path.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def exit_with_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Exit the CLI with an error message.

    Note:
        This function never returns - it always calls sys.exit().
    """
    error(message)
    sys.exit(exit_code)
