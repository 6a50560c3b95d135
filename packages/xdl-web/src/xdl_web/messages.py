"""Diagnostic formatting for compiler errors and warnings.

Raw bundler diagnostics are verbose: loader headers, internal stack
frames, duplicated blank lines. This module rewrites them into short,
focused messages before they reach the terminal.

Example:
    >>> messages = format_webpack_messages({
    ...     "errors": ["./src/App.js\\nLine 3:5:  Parsing error: Unexpected token"],
    ...     "warnings": [],
    ... })
    >>> messages.errors
    ['./src/App.js\\nSyntax error: Unexpected token (3:5)']
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

FRIENDLY_SYNTAX_ERROR_LABEL = "Syntax error:"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_LOADER_HEADER_RE = re.compile(r"Module [A-Za-z ]+\(from")
_PARSING_ERROR_RE = re.compile(r"Line (\d+):(?:(\d+):)?\s*Parsing error: (.+)$")
_SMOOSH_SYNTAX_RE = re.compile(r"SyntaxError\s+\((\d+):(\d+)\)\s*(.+?)\n")
_EXPORT_NOT_FOUND_RE = re.compile(
    r"^.*export '(.+?)' was not found in '(.+?)'.*$", re.MULTILINE
)
_DEFAULT_EXPORT_NOT_FOUND_RE = re.compile(
    r"^.*export 'default' \(imported as '(.+?)'\) was not found in '(.+?)'.*$",
    re.MULTILINE,
)
_ALIASED_EXPORT_NOT_FOUND_RE = re.compile(
    r"^.*export '(.+?)' \(imported as '(.+?)'\) was not found in '(.+?)'.*$",
    re.MULTILINE,
)
_FILE_POSITION_RE = re.compile(r"^(.*) \d+:\d+-\d+$")
_SASS_RE = re.compile(r"Cannot find module.+sass")
_INTERNAL_FRAME_RE = re.compile(r"^\s*at\s((?!webpack:).)*:\d+:\d+[\s)]*(\n|$)", re.MULTILINE)
_ANONYMOUS_FRAME_RE = re.compile(r"^\s*at\s<anonymous>(\n|$)", re.MULTILINE)


class FormattedMessages(BaseModel):
    """Errors and warnings of one compile, ready for display.

    Attributes:
        errors: Formatted error messages.
        warnings: Formatted warning messages.
    """

    model_config = ConfigDict(extra="forbid")

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_successful(self) -> bool:
        """True when the compile produced neither errors nor warnings."""
        return not self.errors and not self.warnings


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_RE.sub("", text)


def is_likely_a_syntax_error(message: str) -> bool:
    """Return True if a formatted message describes a syntax error."""
    return FRIENDLY_SYNTAX_ERROR_LABEL in message


def _to_text(message: str | Mapping[str, Any]) -> str:
    if isinstance(message, str):
        return message
    text = str(message.get("message") or "")
    module_name = message.get("moduleName")
    if module_name:
        return f"{strip_ansi(str(module_name))}\n{text}"
    return text


def _rewrite_parsing_error(line: str) -> str:
    match = _PARSING_ERROR_RE.search(line)
    if match is None:
        return line
    error_line, error_column, error_message = match.groups()
    position = error_line if error_column is None else f"{error_line}:{error_column}"
    return f"{FRIENDLY_SYNTAX_ERROR_LABEL} {error_message} ({position})"


def _sass_hint(use_yarn: bool) -> str:
    install = "yarn add sass" if use_yarn else "npm install sass"
    return (
        "To import Sass files, you first need to install sass.\n"
        f"Run `{install}` inside your workspace."
    )


def format_message(message: str | Mapping[str, Any], *, use_yarn: bool = False) -> str:
    """Clean up a single compiler diagnostic.

    Args:
        message: Diagnostic text, or a mapping with ``message`` and an
            optional ``moduleName``.
        use_yarn: Phrase install hints with yarn instead of npm.

    Returns:
        The formatted diagnostic.
    """
    lines = _to_text(message).split("\n")

    # Strip loader headers added by the bundler
    lines = [line for line in lines if not _LOADER_HEADER_RE.search(line)]
    lines = [_rewrite_parsing_error(line) for line in lines]
    text = "\n".join(lines)

    # Smoosh syntax errors (commonly found in CSS)
    text = _SMOOSH_SYNTAX_RE.sub(rf"{FRIENDLY_SYNTAX_ERROR_LABEL} \3 (\1:\2)\n", text)

    # Default and aliased forms are more specific, so rewrite them before the
    # generic form swallows their lines
    text = _DEFAULT_EXPORT_NOT_FOUND_RE.sub(
        r"Attempted import error: '\2' does not contain a default export (imported as '\1').",
        text,
    )
    text = _ALIASED_EXPORT_NOT_FOUND_RE.sub(
        r"Attempted import error: '\1' is not exported from '\3' (imported as '\2').",
        text,
    )
    text = _EXPORT_NOT_FOUND_RE.sub(
        r"Attempted import error: '\1' is not exported from '\2'.",
        text,
    )

    lines = text.split("\n")

    if len(lines) > 2 and lines[1].strip() == "":
        del lines[1]

    lines[0] = _FILE_POSITION_RE.sub(r"\1", lines[0])

    if len(lines) > 1 and lines[1].startswith("Module not found: "):
        lines = [
            lines[0],
            lines[1]
            .replace("Error: ", "")
            .replace("Module not found: Cannot find file:", "Cannot find file:"),
        ]

    if len(lines) > 1 and _SASS_RE.search(lines[1]):
        lines[1] = _sass_hint(use_yarn)

    text = "\n".join(lines)

    # Internal stacks are noise, except frames from user code mapped by the bundler
    text = _INTERNAL_FRAME_RE.sub("", text)
    text = _ANONYMOUS_FRAME_RE.sub("", text)

    lines = text.split("\n")
    lines = [
        line
        for index, line in enumerate(lines)
        if index == 0 or line.strip() != "" or line.strip() != lines[index - 1].strip()
    ]

    return "\n".join(lines).strip()


def format_webpack_messages(
    stats_json: Mapping[str, Any], *, use_yarn: bool = False
) -> FormattedMessages:
    """Format the errors and warnings of a compile.

    When any error looks like a syntax error, only syntax errors are kept:
    the rest are usually consequences of the same problem.

    Args:
        stats_json: Mapping with ``errors`` and ``warnings`` lists.
        use_yarn: Phrase install hints with yarn instead of npm.

    Returns:
        FormattedMessages with cleaned errors and warnings.
    """
    errors = [format_message(m, use_yarn=use_yarn) for m in stats_json.get("errors") or []]
    warnings = [format_message(m, use_yarn=use_yarn) for m in stats_json.get("warnings") or []]

    if any(is_likely_a_syntax_error(e) for e in errors):
        errors = [e for e in errors if is_likely_a_syntax_error(e)]

    return FormattedMessages(errors=errors, warnings=warnings)
