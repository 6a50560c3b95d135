"""Shared test fixtures for xdl-web tests.

Provides CliRunner fixtures, a fake bundler compiler, console capture
and structured log capture.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner
from structlog.testing import capture_logs

from xdl_web import observability, output
from xdl_web.hooks import CompilerHooks
from xdl_web.urls import Urls

PROJECT_ROOT = "/projects/my-app"


class FakeStats:
    """Stats object returning fixed diagnostics."""

    def __init__(
        self,
        errors: list[Any] | None = None,
        warnings: list[Any] | None = None,
    ) -> None:
        self.errors = errors or []
        self.warnings = warnings or []
        self.to_json_calls: list[dict[str, bool]] = []

    def to_json(
        self, *, all: bool = False, warnings: bool = True, errors: bool = True
    ) -> Mapping[str, Any]:
        self.to_json_calls.append({"all": all, "warnings": warnings, "errors": errors})
        return {"errors": list(self.errors), "warnings": list(self.warnings)}


class FakeCompiler:
    """Compiler exposing the hooks the adapter taps."""

    def __init__(self, config: Any = None) -> None:
        self.config = config
        self.hooks = CompilerHooks()

    def invalidate(self) -> None:
        self.hooks.invalid.call()

    def finish(self, errors: list[Any] | None = None, warnings: list[Any] | None = None) -> None:
        self.hooks.done.call(FakeStats(errors=errors, warnings=warnings))


@pytest.fixture(autouse=True)
def log_events() -> Generator[list[dict[str, Any]], None, None]:
    """Capture structlog events and restore logging state afterwards.

    Tests that call configure_logging replace the capture with the real
    pipeline until the test ends.

    Yields:
        List of captured event dictionaries.
    """
    package_logger = logging.getLogger(observability.LOGGER_NAME)
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate

    structlog.reset_defaults()
    observability._logger = None
    with capture_logs() as events:
        yield events
    structlog.reset_defaults()
    observability._logger = None

    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in package_logger.handlers:
            package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate


@pytest.fixture
def plain_console() -> Generator[None, None, None]:
    """Swap the module console for a colorless one writing to stdout."""
    original_console = output.console
    output.console = output.create_console(no_color=True)
    try:
        yield
    finally:
        output.console = original_console


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def local_urls() -> Urls:
    """URLs of a server reachable only from this machine."""
    return Urls(
        local_url_for_terminal="http://localhost:[bold]19006[/bold]/",
        local_url_for_browser="http://localhost:19006/",
    )


@pytest.fixture
def lan_urls() -> Urls:
    """URLs of a server also reachable from the LAN."""
    return Urls(
        local_url_for_terminal="http://localhost:[bold]19006[/bold]/",
        local_url_for_browser="http://localhost:19006/",
        lan_url_for_terminal="http://192.168.1.20:[bold]19006[/bold]/",
        lan_url_for_config="192.168.1.20",
    )


@pytest.fixture
def bundler_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable bundler module and return its import string.

    The module's compiler fires one successful build when watched.

    Returns:
        Import string of the factory.
    """
    module = tmp_path / "sample_bundler.py"
    module.write_text(
        """
from xdl_web.hooks import CompilerHooks


class Stats:
    def __init__(self, errors, warnings):
        self._json = {"errors": errors, "warnings": warnings}

    def to_json(self, *, all=False, warnings=True, errors=True):
        return self._json


class Compiler:
    def __init__(self, config):
        self.config = config
        self.hooks = CompilerHooks()

    def watch(self):
        self.hooks.done.call(Stats(self.config.get("errors", []), []))


class OneShotCompiler:
    def __init__(self, config):
        self.hooks = CompilerHooks()


def create_one_shot(config):
    return OneShotCompiler(config)


def create(config):
    if config.get("explode"):
        raise RuntimeError("Invalid configuration object")
    return Compiler(config)


not_callable = 42
"""
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    return "sample_bundler:create"
