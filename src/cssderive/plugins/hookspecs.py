"""Pluggy hook specifications for cssderive backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from cssderive.backends.base import Backend

hookspec = pluggy.HookspecMarker("cssderive")


class CssDeriveHookSpec:
    """Hook specifications for the cssderive plugin system."""

    @hookspec
    def cssderive_backends(self) -> list[Backend]:
        """Return backend instances this plugin provides.

        Called once per discovery; results from all plugins are merged.
        A later registration under an existing name is ignored.
        """
