"""Compiler event log adapter.

Wires the lifecycle hooks of a bundler's compiler to the project log and
the terminal. The bundler does all of the compiling; this module only
turns its diagnostics into focused, readable build status:

- ``invalid``: a watched file changed, print ``Compiling...``
- ``done``: print the first error, or all warnings, or the success
  banner with the connection instructions

Usage:
    >>> compiler = create_webpack_compiler(
    ...     project_root="/path/to/app",
    ...     app_name="my-app",
    ...     config={"mode": "development"},
    ...     urls=prepare_urls("http", "0.0.0.0", 19006),
    ...     non_interactive=False,
    ...     use_yarn=False,
    ...     webpack=create_bundler,
    ... )
    >>> compiler.watch()
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from rich.markup import escape

from xdl_web import output, project_utils
from xdl_web.hooks import BundlerFactory, Compiler, Stats
from xdl_web.messages import format_webpack_messages
from xdl_web.observability import get_logger
from xdl_web.urls import Urls

CONSOLE_TAG = "webpack"

PREVIEW_NOTICE = (
    "Web support in Expo is experimental and subject to breaking changes. "
    "Do not use this in production yet."
)

DEFAULT_BUILD_COMMAND = "expo build:web"


def log(project_root: str, message: str, show_in_devtools: bool = True) -> None:
    """Log a message to the project log, or only to the terminal.

    Args:
        project_root: Project the message belongs to.
        message: Rich-markup text.
        show_in_devtools: If False, the message is printed to the terminal
            without reaching the project log.
    """
    if show_in_devtools:
        project_utils.log_info(project_root, CONSOLE_TAG, message)
    else:
        output.info(message)


def log_warning(project_root: str, message: str | Sequence[str]) -> None:
    """Log a warning to the project log under the webpack tag."""
    project_utils.log_warning(project_root, CONSOLE_TAG, message)


def log_error(project_root: str, message: str | Sequence[str]) -> None:
    """Log an error to the project log under the webpack tag."""
    project_utils.log_error(project_root, CONSOLE_TAG, message)


class DevSocket:
    """Forwards full diagnostic lists to tools attached to the log stream.

    The terminal only ever shows the first error, but clients such as an
    in-browser overlay need all of them, so these go to the structured
    log only.
    """

    def __init__(self, project_root: str) -> None:
        self._log = get_logger().bind(project_root=str(project_root), tag=CONSOLE_TAG)

    def warnings(self, warnings: Sequence[str]) -> None:
        self._log.warning("dev_socket_warnings", warnings=list(warnings))

    def errors(self, errors: Sequence[str]) -> None:
        self._log.error("dev_socket_errors", errors=list(errors))


def print_instructions(
    project_root: str,
    app_name: str,
    urls: Urls,
    show_in_devtools: bool,
    build_command: str = DEFAULT_BUILD_COMMAND,
) -> None:
    """Print where the app can be opened and how to build for production.

    Args:
        project_root: Project the messages belong to.
        app_name: Name of the app shown to the developer.
        urls: Local and, if available, LAN URLs.
        show_in_devtools: If False, print to the terminal only.
        build_command: Command suggested for a production build.
    """

    def _log(message: str) -> None:
        log(project_root, message, show_in_devtools)

    output.blank_line()
    _log(f"You can now view [bold]{escape(app_name)}[/bold] in the browser.")
    output.blank_line()
    if urls.lan_url_for_terminal:
        _log(f"  [bold]Local:[/bold]            {urls.local_url_for_terminal}")
        _log(f"  [bold]On Your Network:[/bold]  {urls.lan_url_for_terminal}")
        output.blank_line()
    else:
        _log(f"  {urls.local_url_for_terminal}")

    _log(
        "Note that the development build is not optimized. "
        f"To create a production build, use [bold]{escape(build_command)}[/bold]."
    )
    output.blank_line()


def print_preview_notice(project_root: str, show_in_devtools: bool) -> None:
    """Print the experimental web support notice."""
    output.blank_line()
    log(project_root, f"[underline yellow]{PREVIEW_NOTICE}[/underline yellow]", show_in_devtools)


class CompileReporter:
    """Reports compiler lifecycle events to the terminal and the project log.

    Attributes:
        is_first_compile: True until the first ``done`` event was handled.
            Never reset.
    """

    def __init__(
        self,
        *,
        project_root: str,
        app_name: str,
        urls: Urls,
        non_interactive: bool,
        use_yarn: bool = False,
        on_finished: Callable[[], Any] | None = None,
        build_command: str = DEFAULT_BUILD_COMMAND,
    ) -> None:
        self.project_root = str(project_root)
        self.app_name = app_name
        self.urls = urls
        self.non_interactive = non_interactive
        self.use_yarn = use_yarn
        self.on_finished = on_finished
        self.build_command = build_command
        self.is_first_compile = True
        self._dev_socket = DevSocket(self.project_root)
        self._log = get_logger().bind(project_root=self.project_root)

    def attach(self, compiler: Compiler) -> None:
        """Tap the compiler's ``invalid`` and ``done`` hooks."""
        compiler.hooks.invalid.tap("invalid", self.on_invalid)
        compiler.hooks.done.tap("done", self.on_done)

    def on_invalid(self, *_: Any) -> None:
        """Handle a bundle invalidation: a file changed and a rebuild started."""
        self._log.debug("compile_invalidated")
        if not self.non_interactive:
            output.clear_console()
        output.blank_line()
        log(self.project_root, "Compiling...")

    def on_done(self, stats: Stats) -> None:
        """Handle a finished compile, with or without diagnostics."""
        if not self.non_interactive:
            output.clear_console()

        # Only the diagnostics are needed, serializing the rest of the stats is slow
        stats_data = stats.to_json(all=False, warnings=True, errors=True)
        messages = format_webpack_messages(stats_data, use_yarn=self.use_yarn)

        self._log.debug(
            "compile_done",
            errors=len(messages.errors),
            warnings=len(messages.warnings),
            first_compile=self.is_first_compile,
        )

        if messages.errors:
            self._dev_socket.errors(messages.errors)
        elif messages.warnings:
            self._dev_socket.warnings(messages.warnings)

        is_successful = messages.is_successful
        if is_successful:
            log(self.project_root, "[bold cyan]Compiled successfully![/bold cyan]")
            print_preview_notice(self.project_root, self.is_first_compile)
        if is_successful and (not self.non_interactive or self.is_first_compile):
            print_instructions(
                self.project_root,
                self.app_name,
                self.urls,
                self.is_first_compile,
                self.build_command,
            )
        if not self.is_first_compile:
            output.info("Press [bold]?[/bold] to show a list of all available commands.")
            output.blank_line()

        if self.on_finished is not None:
            self.on_finished()
        self.is_first_compile = False

        if messages.errors:
            # Further errors are usually caused by the first one
            log_error(self.project_root, "[red]Failed to compile.[/red]\n")
            log_error(self.project_root, escape(messages.errors[0]))
            return

        if messages.warnings:
            log_warning(self.project_root, "[yellow]Compiled with warnings.[/yellow]\n")
            log_warning(self.project_root, [escape(w) for w in messages.warnings])


def create_webpack_compiler(
    *,
    project_root: str,
    app_name: str,
    config: Any,
    urls: Urls,
    non_interactive: bool,
    use_yarn: bool,
    webpack: BundlerFactory,
    on_finished: Callable[[], Any] | None = None,
    build_command: str = DEFAULT_BUILD_COMMAND,
) -> Compiler:
    """Create a compiler with its lifecycle events reported to the terminal.

    Args:
        project_root: Project the messages belong to.
        app_name: Name of the app shown in the instructions.
        config: Configuration passed unchanged to the bundler factory.
        urls: URLs shown in the instructions.
        non_interactive: If True, never clear the terminal and only print the
            instructions after the first successful compile.
        use_yarn: Phrase install hints with yarn instead of npm.
        webpack: Bundler factory building a compiler from config.
        on_finished: Called after every compile, before diagnostics are printed.
        build_command: Command suggested for a production build.

    Returns:
        The compiler built by the factory, unchanged.

    Raises:
        SystemExit: With code 1 if the bundler factory raises.
    """
    try:
        compiler = webpack(config)
    except Exception as err:
        output.blank_line()
        log_error(project_root, "Failed to compile")
        output.blank_line()
        log_error(project_root, escape(str(err) or repr(err)))
        raise SystemExit(1) from err

    reporter = CompileReporter(
        project_root=project_root,
        app_name=app_name,
        urls=urls,
        non_interactive=non_interactive,
        use_yarn=use_yarn,
        on_finished=on_finished,
        build_command=build_command,
    )
    reporter.attach(compiler)
    get_logger().info("compiler_created", project_root=str(project_root), app_name=app_name)

    return compiler
