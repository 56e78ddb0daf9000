"""Closure backend: lowers the IR into plain Python callables.

Each fragment becomes a function ``(value, dest) -> None`` (sequence
items take the :class:`SequenceWriter` instead of the sink). Exceptions
raised by the sink propagate unchanged; a failing fragment stops every
fragment after it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from io import StringIO
from typing import Any, Protocol

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
from cssderive.runtime import CssWriter, SequenceWriter, Verbatim

FragmentFn = Callable[[Any, CssWriter], None]
ItemFn = Callable[[Any, SequenceWriter], None]

_MISSING = object()


# ---------------------------------------------------------------------------
# Value adapters
# ---------------------------------------------------------------------------


class ValueAdapter(Protocol):
    """How the compiled renderer inspects a value."""

    def variant_of(self, value: Any) -> str: ...

    def field(self, value: Any, ref: FieldRef) -> Any: ...


class AttributeAdapter:
    """Values are objects: variant = class name, fields = attributes.

    Positional fields are reached by indexing (tuples, NamedTuples).
    """

    def variant_of(self, value: Any) -> str:
        return type(value).__name__

    def field(self, value: Any, ref: FieldRef) -> Any:
        if ref.name is not None:
            return getattr(value, ref.name)
        return value[ref.index]


class MappingAdapter:
    """Values are mappings: ``{"variant": "Px", "fields": [3]}``.

    ``fields`` is a list (positional) or a mapping (named). Structs may
    omit ``variant``.
    """

    def variant_of(self, value: Any) -> str:
        return str(value.get("variant", ""))

    def field(self, value: Any, ref: FieldRef) -> Any:
        fields = value.get("fields", {})
        if isinstance(fields, Mapping):
            return fields[ref.label]
        return fields[ref.index]


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------


def _peek(iterable: Any) -> tuple[Any, Iterator[Any]]:
    it = iter(iterable)
    return next(it, _MISSING), it


class _Lowering:
    def __init__(self, adapter: ValueAdapter) -> None:
        self.adapter = adapter

    def fragment(self, node: Fragment) -> FragmentFn:
        match node:
            case WriteStr(text=text):
                return lambda value, dest: dest.write_str(text)
            case WriteValue(field=ref):
                return lambda value, dest: dest.write_item(self.adapter.field(value, ref))
            case Concat(parts=parts):
                return self._concat(tuple(self.fragment(part) for part in parts))
            case Sequence():
                return self._sequence(node)
        msg = f"Unknown fragment {node!r}"
        raise TypeError(msg)

    def _concat(self, parts: tuple[FragmentFn, ...]) -> FragmentFn:
        def run(value: Any, dest: CssWriter) -> None:
            for part in parts:
                part(value, dest)

        return run

    def _sequence(self, node: Sequence) -> FragmentFn:
        separator = node.separator
        items = tuple(self.item(item) for item in node.items)

        def run(value: Any, dest: CssWriter) -> None:
            writer = SequenceWriter(dest, separator)
            for item in items:
                item(value, writer)

        return run

    def item(self, node: SequenceItem) -> ItemFn:
        field = self.adapter.field
        match node:
            case Item(field=ref):
                return lambda value, writer: writer.item(field(value, ref))
            case EachItem(field=ref):

                def each(value: Any, writer: SequenceWriter) -> None:
                    for element in field(value, ref):
                        writer.item(element)

                return each
            case EachItemOr(field=ref, fallback=fallback):
                verbatim = Verbatim(fallback)

                def each_or(value: Any, writer: SequenceWriter) -> None:
                    first, rest = _peek(field(value, ref))
                    if first is _MISSING:
                        writer.item(verbatim)
                        return
                    writer.item(first)
                    for element in rest:
                        writer.item(element)

                return each_or
        msg = f"Unknown sequence item {node!r}"
        raise TypeError(msg)


# ---------------------------------------------------------------------------
# Compiled renderer
# ---------------------------------------------------------------------------


class CompiledRenderer:
    """Executable rendering procedure for one type.

    ``renderer(value, dest)`` renders into a :class:`CssWriter`;
    ``renderer.to_string(value)`` renders into a fresh string. When the
    schema sets ``derive_debug``, ``renderer.debug`` is the debug-text
    entry point, otherwise ``None``.
    """

    def __init__(self, procedure: RenderProcedure, adapter: ValueAdapter | None = None) -> None:
        self.procedure = procedure
        self.adapter = adapter or AttributeAdapter()
        lowering = _Lowering(self.adapter)
        self._arms: dict[str, FragmentFn] = {
            arm.variant: lowering.fragment(arm.body) for arm in procedure.arms
        }
        self.debug: Callable[[Any], str] | None = self._debug if procedure.derive_debug else None

    def __call__(self, value: Any, dest: CssWriter) -> None:
        self._dispatch(value)(value, dest)

    def _dispatch(self, value: Any) -> FragmentFn:
        if not self.procedure.is_enum and len(self._arms) == 1:
            return next(iter(self._arms.values()))
        variant = self.adapter.variant_of(value)
        try:
            return self._arms[variant]
        except KeyError:
            msg = f"{variant!r} is not a variant of {self.procedure.type_name}"
            raise TypeError(msg) from None

    def to_string(self, value: Any) -> str:
        buf = StringIO()
        self(value, CssWriter(buf))
        return buf.getvalue()

    def _debug(self, value: Any) -> str:
        return self.to_string(value)


class ClosureBackend:
    """Lower to a :class:`CompiledRenderer`."""

    name = "closure"

    def __init__(self, adapter: ValueAdapter | None = None) -> None:
        self.adapter = adapter

    def lower(self, procedure: RenderProcedure) -> CompiledRenderer:
        return CompiledRenderer(procedure, self.adapter)
