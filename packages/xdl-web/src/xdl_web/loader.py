"""Bundler factory loading from ``module:attribute`` import strings."""

from __future__ import annotations

import importlib

from xdl_web.errors import BundlerLoadError
from xdl_web.hooks import BundlerFactory


def load_bundler_factory(import_string: str) -> BundlerFactory:
    """Import a bundler factory.

    Args:
        import_string: Location of the factory, e.g. ``"app.bundler:create"``.

    Returns:
        The factory callable.

    Raises:
        BundlerLoadError: If the string is malformed, the module cannot be
            imported, or the attribute is missing or not callable.

    Example:
        >>> factory = load_bundler_factory("app.bundler:create")
        >>> compiler = factory({"mode": "development"})
    """
    module_name, sep, attr_name = import_string.partition(":")
    if not sep or not module_name or not attr_name:
        raise BundlerLoadError(
            f"Invalid bundler '{import_string}', expected 'module:factory'"
        )

    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise BundlerLoadError(
            f"Cannot import bundler module '{module_name}'",
            internal_details=str(e),
        ) from e

    factory = mod
    for part in attr_name.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError as e:
            raise BundlerLoadError(
                f"Bundler factory '{attr_name}' not found in '{module_name}'",
                internal_details=str(e),
            ) from e

    if not callable(factory):
        raise BundlerLoadError(f"Bundler factory '{import_string}' is not callable")
    return factory  # type: ignore[return-value]
