"""Backend discovery and lookup.

Discovery: entry points in the ``cssderive.backends`` group (pip-installed
plugins) via pluggy, plus directly registered plugin instances.
"""

from __future__ import annotations

import logging

import pluggy

from cssderive.backends.base import Backend
from cssderive.plugins.hookspecs import CssDeriveHookSpec

PROJECT_NAME = "cssderive"
ENTRY_POINT_GROUP = "cssderive.backends"

logger = logging.getLogger(__name__)


class UnknownBackendError(LookupError):
    """No backend is registered under the requested name."""


class PluginManager:
    """Manages plugin loading and backend lookup."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(CssDeriveHookSpec)
        self._backends: dict[str, Backend] | None = None

    def load_entrypoints(self) -> int:
        """Load pip-installed plugins; returns how many were loaded."""
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._backends = None
        return count

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. the built-ins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        self._backends = None
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    @property
    def backends(self) -> dict[str, Backend]:
        """Backends by name, collected lazily from every plugin."""
        if self._backends is None:
            collected: dict[str, Backend] = {}
            # pluggy calls the most recently registered plugin first.
            for provided in reversed(self._pm.hook.cssderive_backends()):
                for backend in provided:
                    if backend.name in collected:
                        logger.warning("Ignoring duplicate backend %r", backend.name)
                        continue
                    collected[backend.name] = backend
            self._backends = collected
        return self._backends

    def get_backend(self, name: str) -> Backend:
        try:
            return self.backends[name]
        except KeyError:
            known = ", ".join(sorted(self.backends)) or "none"
            msg = f"Unknown backend {name!r} (available: {known})"
            raise UnknownBackendError(msg) from None


def create_plugin_manager(
    *,
    runtime_module: str | None = None,
    header: bool = True,
    entrypoints: bool = True,
) -> PluginManager:
    """Plugin manager with the built-ins registered first."""
    from cssderive.plugins.builtins import BuiltinBackendsPlugin

    manager = PluginManager()
    manager.register_plugin(
        BuiltinBackendsPlugin(runtime_module=runtime_module, header=header),
        name="builtins",
    )
    if entrypoints:
        manager.load_entrypoints()
    return manager
