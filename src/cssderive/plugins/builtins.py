"""Built-in backends, registered as a plugin like any third-party one."""

from __future__ import annotations

from cssderive.backends import ClosureBackend, SourceBackend
from cssderive.backends.base import Backend
from cssderive.plugins import hookimpl


class BuiltinBackendsPlugin:
    """Provides the ``closure`` and ``source`` backends."""

    def __init__(self, *, runtime_module: str | None = None, header: bool = True) -> None:
        self._source_kwargs: dict[str, object] = {"header": header}
        if runtime_module is not None:
            self._source_kwargs["runtime_module"] = runtime_module

    @hookimpl
    def cssderive_backends(self) -> list[Backend]:
        return [ClosureBackend(), SourceBackend(**self._source_kwargs)]
