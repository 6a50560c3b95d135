"""CLI command modules.

Commands are loaded lazily by ``xdl_web.main.LazyGroup``.
"""

from __future__ import annotations

__all__: list[str] = []
