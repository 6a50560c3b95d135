"""xdl-web start command - Build and watch with focused build reporting."""

from __future__ import annotations

from typing import Any

import click

from xdl_web.output import info, warning


@click.command()
@click.option(
    "-b",
    "--bundler",
    "bundler",
    required=True,
    help="Bundler factory as module:callable, e.g. app.bundler:create",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML file passed to the bundler factory",
)
@click.option("--host", default=None, help="Host to bind to [default: 0.0.0.0]")
@click.option("-p", "--port", type=int, default=None, help="Port to listen on [default: 19006]")
@click.option("--app-name", default=None, help="App name shown in the instructions")
@click.option(
    "--non-interactive",
    is_flag=True,
    default=False,
    help="Never clear the terminal and print instructions only once",
)
@click.option("--use-yarn", is_flag=True, default=False, help="Phrase install hints with yarn")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the structured log to this file",
)
def start(
    bundler: str,
    config_path: str | None,
    host: str | None,
    port: int | None,
    app_name: str | None,
    non_interactive: bool,
    use_yarn: bool,
    log_file: str | None,
) -> None:
    """Start the bundler in watch mode.

    Builds the compiler with the given factory, reports every build to
    the terminal, and watches for changes until interrupted.

    Examples:

        xdl-web start --bundler app.bundler:create

        xdl-web start -b app.bundler:create --config bundler.yaml --port 3000
    """
    # Import here to avoid heavy imports at CLI startup
    import yaml
    from pydantic import ValidationError as PydanticValidationError

    from xdl_web.compiler import create_webpack_compiler
    from xdl_web.config import DevServerSettings, load_bundler_config
    from xdl_web.errors import (
        CLIError,
        XdlWebError,
        handle_file_not_found,
        handle_validation_error,
        handle_yaml_error,
    )
    from xdl_web.loader import load_bundler_factory
    from xdl_web.observability import configure_logging
    from xdl_web.urls import prepare_urls

    overrides: dict[str, Any] = {
        "host": host,
        "port": port,
        "app_name": app_name,
        "non_interactive": non_interactive or None,
        "use_yarn": use_yarn or None,
        "log_file": log_file,
    }
    try:
        settings = DevServerSettings(**{k: v for k, v in overrides.items() if v is not None})
    except PydanticValidationError as e:
        handle_validation_error(e, "settings")

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.json_logs,
        log_file=settings.log_file,
    )

    try:
        factory = load_bundler_factory(bundler)
        config = load_bundler_config(config_path)
    except FileNotFoundError:
        handle_file_not_found(str(config_path))
    except yaml.YAMLError as e:
        handle_yaml_error(e, str(config_path))
    except XdlWebError as e:
        raise CLIError(e.user_message) from None

    urls = prepare_urls(settings.protocol, settings.host, settings.port, settings.pathname)

    compiler = create_webpack_compiler(
        project_root=str(settings.project_root),
        app_name=settings.app_name,
        config=config,
        urls=urls,
        non_interactive=settings.non_interactive,
        use_yarn=settings.use_yarn,
        webpack=factory,
        build_command=settings.build_command,
    )

    watch = getattr(compiler, "watch", None)
    if not callable(watch):
        warning("Compiler does not support watch mode, nothing left to do.")
        return

    try:
        watch()
    except KeyboardInterrupt:
        info("Stopped watching.")
