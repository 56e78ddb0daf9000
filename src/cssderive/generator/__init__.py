"""Generator: compiles a TypeSchema into a backend-neutral RenderProcedure."""

from __future__ import annotations

from cssderive.generator.bounds import BoundCollector, BoundSet
from cssderive.generator.driver import generate
from cssderive.generator.ir import RenderProcedure

__all__ = ["BoundCollector", "BoundSet", "RenderProcedure", "generate"]
