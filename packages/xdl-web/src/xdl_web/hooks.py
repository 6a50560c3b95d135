"""Compiler hook protocols.

The adapter only needs a small slice of a bundler's compiler interface:
two lifecycle hooks it can tap, and a stats object that can describe the
diagnostics of a finished compile. Bundlers written in Python can use
``SyncHook`` and ``CompilerHooks`` directly to provide that slice.

Example:
    >>> hooks = CompilerHooks()
    >>> hooks.done.tap("report", lambda stats: print(stats))
    >>> hooks.done.call("stats")
    stats
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

Tap = Callable[..., Any]


@dataclass(frozen=True)
class TapInfo:
    """A registered hook callback.

    Attributes:
        name: Name the callback was registered under.
        fn: The callback itself.
    """

    name: str
    fn: Tap


class SyncHook:
    """Synchronous hook that calls its taps in registration order.

    Attributes:
        args: Names of the arguments every call must supply.
    """

    def __init__(self, args: tuple[str, ...] = ()) -> None:
        self.args = args
        self._taps: list[TapInfo] = []

    @property
    def taps(self) -> tuple[TapInfo, ...]:
        """Registered callbacks, oldest first."""
        return tuple(self._taps)

    def tap(self, name: str, fn: Tap) -> None:
        """Register a callback.

        Args:
            name: Name identifying the caller, used for diagnostics only.
            fn: Callback invoked with the hook arguments.

        Raises:
            ValueError: If name is empty.
        """
        if not name:
            raise ValueError("Tap name must not be empty")
        self._taps.append(TapInfo(name=name, fn=fn))

    def call(self, *args: Any) -> None:
        """Invoke every callback with the given arguments.

        Exceptions raised by a callback propagate and stop the remaining
        callbacks from running.

        Raises:
            TypeError: If the number of arguments does not match the hook.
        """
        if len(args) != len(self.args):
            msg = f"Hook expects {len(self.args)} argument(s) {self.args}, got {len(args)}"
            raise TypeError(msg)
        for tap in list(self._taps):
            tap.fn(*args)


@dataclass
class CompilerHooks:
    """Lifecycle hooks the adapter subscribes to.

    Attributes:
        invalid: Fires when a watched file changed and a rebuild started.
            "invalid" is short for "bundle invalidated", it does not imply errors.
        done: Fires with the stats object when a compile finished, whether
            or not it produced warnings or errors.
    """

    invalid: SyncHook = field(default_factory=SyncHook)
    done: SyncHook = field(default_factory=lambda: SyncHook(("stats",)))


@runtime_checkable
class Stats(Protocol):
    """Result of one compile cycle."""

    def to_json(
        self, *, all: bool = False, warnings: bool = True, errors: bool = True
    ) -> Mapping[str, Any]:
        """Describe the compile, with at least ``errors`` and ``warnings`` lists."""
        ...


@runtime_checkable
class Compiler(Protocol):
    """Compiler handle produced by a bundler factory."""

    hooks: CompilerHooks


BundlerFactory = Callable[[Any], Compiler]
