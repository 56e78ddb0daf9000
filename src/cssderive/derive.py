"""Python front-end: derive CSS rendering for dataclasses.

Field directives ride on ``typing.Annotated`` metadata, variant
directives on a class decorator, type directives on the derive call::

    @derive_css(function="translate", comma=True)
    @dataclass(frozen=True)
    class Translate:
        x: Length
        y: Length

    @css(keyword="auto")
    @dataclass(frozen=True)
    class Auto:
        pass

    @dataclass(frozen=True)
    class Layers(Generic[T]):
        items: Annotated[list[T], css(iterable=True, if_empty="none")]

    Size = derive_css_union("Size", Auto, Layers)

Every variant class gets a ``to_css(self, dest)`` method (and a
CSS-text ``__repr__`` with ``derive_debug=True``).
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable, Sequence
from typing import Annotated, Any, Literal, TypeVar, get_args, get_origin

from cssderive.backends.closure import ClosureBackend, CompiledRenderer
from cssderive.domain.schema import (
    FieldDirectives,
    SchemaField,
    TypeDirectives,
    TypeSchema,
    Variant,
    VariantDirectives,
)
from cssderive.generator import generate
from cssderive.runtime import CssWriter

_VARIANT_ATTR = "__css_directives__"


class css:  # noqa: N801 - reads as an annotation
    """Directive marker.

    As ``Annotated`` metadata it carries field directives; as a class
    decorator it attaches variant directives to the class.
    """

    def __init__(self, **directives: Any) -> None:
        self.directives = directives

    def __call__[C: type](self, cls: C) -> C:
        setattr(cls, _VARIANT_ATTR, dict(self.directives))
        return cls

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.directives.items())
        return f"css({args})"


def _type_expr(tp: Any) -> str:
    """Readable type expression, used for bound inference."""
    if isinstance(tp, TypeVar):
        return tp.__name__
    origin = get_origin(tp)
    if origin is not None:
        name = getattr(origin, "__name__", None) or str(origin).removeprefix("typing.")
        args = ", ".join(_type_expr(arg) for arg in get_args(tp))
        return f"{name}[{args}]" if args else name
    if isinstance(tp, type):
        return tp.__name__
    if isinstance(tp, str):
        return tp
    return str(tp).removeprefix("typing.")


def _collect_typevars(tp: Any, found: list[str]) -> None:
    if isinstance(tp, TypeVar):
        if tp.__name__ not in found:
            found.append(tp.__name__)
        return
    for arg in get_args(tp):
        _collect_typevars(arg, found)


def _field_directives(hint: Any) -> tuple[Any, FieldDirectives]:
    if get_origin(hint) is Annotated:
        inner, *metadata = get_args(hint)
        merged: dict[str, Any] = {}
        for meta in metadata:
            if isinstance(meta, css):
                merged.update(meta.directives)
        return inner, FieldDirectives.model_validate(merged)
    return hint, FieldDirectives()


def variant_from_class(cls: type, type_params: list[str]) -> Variant:
    """Build a :class:`Variant` from a dataclass.

    TypeVars found in the field annotations are appended to
    *type_params* in order of first appearance.
    """
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} must be a dataclass"
        raise TypeError(msg)
    hints = typing.get_type_hints(cls, include_extras=True)
    fields = []
    for dc_field in dataclasses.fields(cls):
        inner, directives = _field_directives(hints.get(dc_field.name, Any))
        _collect_typevars(inner, type_params)
        fields.append(SchemaField(name=dc_field.name, type=_type_expr(inner), css=directives))
    directives = VariantDirectives.model_validate(getattr(cls, _VARIANT_ATTR, {}))
    return Variant(name=cls.__name__, fields=fields, css=directives)


def schema_from_classes(
    name: str,
    classes: Sequence[type],
    *,
    type_params: list[str] | None = None,
    kind: Literal["struct", "enum"] | None = None,
    **type_directives: Any,
) -> TypeSchema:
    """Build a :class:`TypeSchema` from variant dataclasses.

    Args:
        name: Type name.
        classes: One dataclass per variant, in declaration order.
        type_params: Explicit type parameters. Defaults to the TypeVars
            found in the field annotations.
        kind: Force ``"struct"`` or ``"enum"``; inferred when omitted.
        **type_directives: Type-level directives.
    """
    discovered: list[str] = []
    variants = [variant_from_class(cls, discovered) for cls in classes]
    return TypeSchema(
        name=name,
        type_params=type_params if type_params is not None else discovered,
        kind=kind,
        variants=variants,
        css=TypeDirectives.model_validate(type_directives),
    )


def _install(classes: Sequence[type], renderer: CompiledRenderer) -> None:
    def to_css(self: Any, dest: CssWriter) -> None:
        renderer(self, dest)

    for cls in classes:
        cls.to_css = to_css  # type: ignore[attr-defined]
        cls.__css_renderer__ = renderer  # type: ignore[attr-defined]
        if renderer.debug is not None:
            debug = renderer.debug
            cls.__repr__ = lambda self, _debug=debug: _debug(self)  # type: ignore[method-assign]


def derive_css_union(name: str, *classes: type, **type_directives: Any) -> CompiledRenderer:
    """Derive rendering for a sum type whose variants are *classes*.

    Raises:
        SchemaError: If the directives are illegal together.
    """
    schema = schema_from_classes(name, classes, kind="enum", **type_directives)
    renderer = ClosureBackend().lower(generate(schema))
    _install(classes, renderer)
    return renderer


def derive_css[C: type](**type_directives: Any) -> Callable[[C], C]:
    """Class decorator deriving rendering for a single dataclass (struct)."""

    def decorate(cls: C) -> C:
        schema = schema_from_classes(cls.__name__, [cls], kind="struct", **type_directives)
        _install([cls], ClosureBackend().lower(generate(schema)))
        return cls

    return decorate
