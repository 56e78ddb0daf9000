"""Plugin system: backend registration via pluggy."""

from __future__ import annotations

import pluggy

hookimpl = pluggy.HookimplMarker("cssderive")

__all__ = ["hookimpl"]
