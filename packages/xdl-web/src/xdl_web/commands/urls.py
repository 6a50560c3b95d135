"""xdl-web urls command - Show where the development server can be reached."""

from __future__ import annotations

import click

from xdl_web.output import info, print_json


@click.command()
@click.option("--host", default=None, help="Host the server binds to [default: 0.0.0.0]")
@click.option("-p", "--port", type=int, default=None, help="Server port [default: 19006]")
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print machine-readable JSON",
)
def urls(host: str | None, port: int | None, as_json: bool) -> None:
    """Show the local and LAN URLs of the development server.

    Examples:

        xdl-web urls

        xdl-web urls --port 3000 --json
    """
    from pydantic import ValidationError as PydanticValidationError

    from xdl_web.config import DevServerSettings
    from xdl_web.errors import handle_validation_error
    from xdl_web.urls import prepare_urls

    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    try:
        settings = DevServerSettings(**overrides)
    except PydanticValidationError as e:
        handle_validation_error(e, "settings")

    prepared = prepare_urls(settings.protocol, settings.host, settings.port, settings.pathname)

    if as_json:
        print_json(
            {
                "local": prepared.local_url_for_browser,
                "lan_address": prepared.lan_url_for_config,
            }
        )
        return

    if prepared.lan_url_for_terminal:
        info(f"  [bold]Local:[/bold]            {prepared.local_url_for_terminal}")
        info(f"  [bold]On Your Network:[/bold]  {prepared.lan_url_for_terminal}")
    else:
        info(f"  {prepared.local_url_for_terminal}")
