"""Backend protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cssderive.generator.ir import RenderProcedure


@runtime_checkable
class Backend(Protocol):
    """Lowers a :class:`RenderProcedure` into a concrete artefact."""

    name: str

    def lower(self, procedure: RenderProcedure) -> Any: ...
