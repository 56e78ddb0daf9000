"""Backends: lower a RenderProcedure into something that renders.

Built-ins: ``closure`` (directly executable callable) and ``source``
(Python module text). More can be registered through the
``cssderive.backends`` entry-point group (see :mod:`cssderive.plugins`).
"""

from __future__ import annotations

from cssderive.backends.base import Backend
from cssderive.backends.closure import ClosureBackend, CompiledRenderer
from cssderive.backends.source import GeneratedSource, SourceBackend

__all__ = [
    "Backend",
    "ClosureBackend",
    "CompiledRenderer",
    "GeneratedSource",
    "SourceBackend",
]
