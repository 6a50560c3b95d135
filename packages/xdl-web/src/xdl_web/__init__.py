"""xdl-web: compiler event reporting for the web development server.

This package wires a bundler's compiler hooks to the project log and
the terminal:
- Focused build status (compiling, success, warnings, first error)
- Local and LAN connection instructions
- Structured logging via structlog
- Rich terminal output

Example:
    >>> from xdl_web import create_webpack_compiler, prepare_urls
    >>> compiler = create_webpack_compiler(
    ...     project_root=".",
    ...     app_name="my-app",
    ...     config={},
    ...     urls=prepare_urls("http", "localhost", 19006),
    ...     non_interactive=True,
    ...     use_yarn=False,
    ...     webpack=create_bundler,
    ... )
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Adapter
    "create_webpack_compiler",
    "print_instructions",
    "print_preview_notice",
    # Hooks
    "SyncHook",
    "CompilerHooks",
    # Diagnostics
    "format_webpack_messages",
    "FormattedMessages",
    # URLs
    "prepare_urls",
    "Urls",
]


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    if name in ("create_webpack_compiler", "print_instructions", "print_preview_notice"):
        from xdl_web import compiler

        return getattr(compiler, name)
    if name in ("SyncHook", "CompilerHooks"):
        from xdl_web import hooks

        return getattr(hooks, name)
    if name in ("format_webpack_messages", "FormattedMessages"):
        from xdl_web import messages

        return getattr(messages, name)
    if name in ("prepare_urls", "Urls"):
        from xdl_web import urls

        return getattr(urls, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
