"""Configuration for the xdl-web development server.

This module provides:
- DevServerSettings: Server and output settings, loaded from XDL_WEB_* env vars
- load_bundler_config: Reads the YAML config handed to the bundler factory
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xdl_web.compiler import DEFAULT_BUILD_COMMAND
from xdl_web.errors import ConfigError

DEFAULT_PORT = 19006


class DevServerSettings(BaseSettings):
    """Settings for the development server.

    Can be loaded from environment variables with the XDL_WEB_ prefix.
    A set ``CI`` environment variable forces non-interactive mode.

    Example:
        >>> settings = DevServerSettings(port=3000, non_interactive=True)
        >>> settings.port
        3000
    """

    model_config = SettingsConfigDict(
        env_prefix="XDL_WEB_",
        env_file=".env",
        extra="ignore",
    )

    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Project root the log messages are attributed to",
    )
    protocol: Literal["http", "https"] = Field(default="http", description="URL scheme")
    host: str = Field(default="0.0.0.0", min_length=1, description="Host to bind to")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Port to listen on")
    pathname: str = Field(default="/", description="Public path the app is served under")
    app_name: str = Field(default="app", min_length=1, description="Name shown in instructions")
    non_interactive: bool = Field(
        default=False,
        description="Never clear the terminal and print instructions only once",
    )
    use_yarn: bool = Field(default=False, description="Phrase install hints with yarn")
    build_command: str = Field(
        default=DEFAULT_BUILD_COMMAND,
        min_length=1,
        description="Command suggested for production builds",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Minimum level of the structured log stream",
    )
    json_logs: bool = Field(default=False, description="Render structured logs as JSON")
    log_file: Path | None = Field(
        default=None,
        description="File the structured log is written to, discarded when unset",
    )

    @model_validator(mode="after")
    def ci_forces_non_interactive(self) -> DevServerSettings:
        """Disable interactive output on CI."""
        if os.environ.get("CI", "").lower() not in ("", "0", "false"):
            self.non_interactive = True
        return self


def load_bundler_config(path: Path | str | None) -> dict[str, Any]:
    """Load the configuration mapping passed to the bundler factory.

    Args:
        path: YAML file to read, or None for an empty configuration.

    Returns:
        The parsed mapping.

    Raises:
        FileNotFoundError: If path does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ConfigError: If the document is not a mapping.
    """
    if path is None:
        return {}

    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Bundler config must be a mapping, got {type(data).__name__}",
            internal_details=f"path={path}",
        )
    return data
