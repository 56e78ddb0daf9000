"""Source backend: lowers the IR into Python module text.

The generated module defines ``<snake_name>_to_css(value, dest)`` (and
``<snake_name>_debug(value)`` when ``derive_debug`` is set). Enum arms
dispatch on the value's class name, like the closure backend's
:class:`~cssderive.backends.closure.AttributeAdapter`, so the module needs
no import of the user's classes.

Output is a pure function of the procedure: the same schema always
yields byte-identical text.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from cssderive.domain.identifiers import to_snake_case
from cssderive.generator.ir import (
    Concat,
    EachItem,
    EachItemOr,
    FieldRef,
    Fragment,
    Item,
    RenderProcedure,
    Sequence,
    SequenceItem,
    WriteStr,
    WriteValue,
)

DEFAULT_RUNTIME_MODULE = "cssderive.runtime"


@dataclass(frozen=True)
class GeneratedSource:
    """Python source for one type's rendering procedure."""

    type_name: str
    function_name: str
    debug_function_name: str | None
    text: str


class _Emitter:
    """Indented line buffer."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._depth = 0
        self._counter = 0

    def line(self, text: str = "") -> None:
        self.lines.append(f"{'    ' * self._depth}{text}" if text else "")

    @contextmanager
    def indented(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def fresh(self, stem: str) -> str:
        name = f"{stem}_{self._counter}"
        self._counter += 1
        return name

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


def _access(ref: FieldRef) -> str:
    if ref.name is not None:
        return f"value.{ref.name}"
    return f"value[{ref.index}]"


def _walk_items(procedure: RenderProcedure) -> Iterator[Fragment | SequenceItem]:
    stack: list[Fragment | SequenceItem] = [arm.body for arm in procedure.arms]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, Concat):
            stack.extend(node.parts)
        elif isinstance(node, Sequence):
            stack.extend(node.items)


class SourceBackend:
    """Lower to a :class:`GeneratedSource`."""

    name = "source"

    def __init__(self, *, runtime_module: str = DEFAULT_RUNTIME_MODULE, header: bool = True) -> None:
        self.runtime_module = runtime_module
        self.header = header

    def lower(self, procedure: RenderProcedure) -> GeneratedSource:
        function_name = f"{to_snake_case(procedure.type_name)}_to_css"
        debug_name = f"{to_snake_case(procedure.type_name)}_debug" if procedure.derive_debug else None

        out = _Emitter()
        self._emit_prelude(out, procedure)
        self._emit_procedure(out, procedure, function_name)
        if debug_name is not None:
            out.line()
            out.line()
            out.line(f"def {debug_name}(value: Any) -> str:")
            with out.indented():
                out.line("buf = StringIO()")
                out.line(f"{function_name}(value, CssWriter(buf))")
                out.line("return buf.getvalue()")

        return GeneratedSource(
            type_name=procedure.type_name,
            function_name=function_name,
            debug_function_name=debug_name,
            text=out.text(),
        )

    # ------------------------------------------------------------------
    # Module prelude
    # ------------------------------------------------------------------

    def _emit_prelude(self, out: _Emitter, procedure: RenderProcedure) -> None:
        nodes = list(_walk_items(procedure))
        uses_sequence = any(isinstance(node, Sequence) for node in nodes)
        uses_fallback = any(isinstance(node, EachItemOr) for node in nodes)

        if self.header:
            out.line(f'"""Generated by cssderive for {procedure.type_name}. Do not edit."""')
            out.line()
        out.line("from __future__ import annotations")
        out.line()
        if procedure.derive_debug:
            out.line("from io import StringIO")
        out.line("from typing import Any")
        out.line()

        runtime_names = ["CssWriter"]
        if uses_sequence:
            runtime_names.append("SequenceWriter")
        if uses_fallback:
            runtime_names.append("Verbatim")
        out.line(f"from {self.runtime_module} import {', '.join(runtime_names)}")

        out.line()
        out.line("# Types rendered directly; values of these types must implement to_css.")
        out.line(f"BOUND_PREDICATES = {procedure.bounds.predicates!r}")
        if uses_fallback:
            out.line()
            out.line("_MISSING = object()")
        out.line()
        out.line()

    # ------------------------------------------------------------------
    # Procedure body
    # ------------------------------------------------------------------

    def _emit_procedure(self, out: _Emitter, procedure: RenderProcedure, name: str) -> None:
        out.line(f"def {name}(value: Any, dest: CssWriter) -> None:")
        with out.indented():
            out.line(f'"""Render a {procedure.type_name} value into *dest*."""')
            if not procedure.is_enum and len(procedure.arms) == 1:
                self._emit_fragment(out, procedure.arms[0].body)
                return
            if not procedure.arms:
                out.line(f'msg = f"{{type(value).__name__!r}} is not a variant of {procedure.type_name}"')
                out.line("raise TypeError(msg)")
                return
            out.line("match type(value).__name__:")
            with out.indented():
                for arm in procedure.arms:
                    out.line(f"case {arm.variant!r}:")
                    with out.indented():
                        self._emit_fragment(out, arm.body)
                out.line("case _:")
                with out.indented():
                    out.line(
                        f'msg = f"{{type(value).__name__!r}} is not a variant of {procedure.type_name}"'
                    )
                    out.line("raise TypeError(msg)")

    def _emit_fragment(self, out: _Emitter, node: Fragment) -> None:
        match node:
            case WriteStr(text=text):
                out.line(f"dest.write_str({text!r})")
            case WriteValue(field=ref):
                out.line(f"dest.write_item({_access(ref)})")
            case Concat(parts=parts):
                for part in parts:
                    self._emit_fragment(out, part)
            case Sequence(separator=separator, items=items):
                writer = out.fresh("writer")
                out.line(f"{writer} = SequenceWriter(dest, {separator!r})")
                for item in items:
                    self._emit_item(out, writer, item)
            case _:
                msg = f"Unknown fragment {node!r}"
                raise TypeError(msg)

    def _emit_item(self, out: _Emitter, writer: str, node: SequenceItem) -> None:
        match node:
            case Item(field=ref):
                out.line(f"{writer}.item({_access(ref)})")
            case EachItem(field=ref):
                element = out.fresh("item")
                out.line(f"for {element} in {_access(ref)}:")
                with out.indented():
                    out.line(f"{writer}.item({element})")
            case EachItemOr(field=ref, fallback=fallback):
                it = out.fresh("items")
                first = out.fresh("first")
                element = out.fresh("item")
                out.line(f"{it} = iter({_access(ref)})")
                out.line(f"{first} = next({it}, _MISSING)")
                out.line(f"if {first} is _MISSING:")
                with out.indented():
                    out.line(f"{writer}.item(Verbatim({fallback!r}))")
                out.line("else:")
                with out.indented():
                    out.line(f"{writer}.item({first})")
                    out.line(f"for {element} in {it}:")
                    with out.indented():
                        out.line(f"{writer}.item({element})")
            case _:
                msg = f"Unknown sequence item {node!r}"
                raise TypeError(msg)
