"""Variant rendering: the central composition step.

A variant's output is built in two layers: a base fragment (keyword,
bare identifier, single direct value, or a sequence over the active
fields), then an optional wrapper (``dimension`` suffix or ``function``
call). The wrappers are mutually exclusive; validation guarantees it.
"""

from __future__ import annotations

from cssderive.domain.schema import FieldDirectives, Variant, VariantDirectives
from cssderive.generator.bounds import BoundCollector
from cssderive.generator.fields import render_field
from cssderive.generator.ir import Concat, FieldRef, Fragment, Sequence, WriteStr, WriteValue


def field_refs(variant: Variant) -> list[tuple[FieldRef, FieldDirectives]]:
    """Every binding of *variant* with its directives, in declaration order."""
    return [
        (FieldRef(index=index, name=field.name, type_expr=field.type), field.css)
        for index, field in variant.bindings()
    ]


def active_fields(variant: Variant) -> list[tuple[FieldRef, FieldDirectives]]:
    return [(ref, attrs) for ref, attrs in field_refs(variant) if not attrs.skip]


def sequence_fragment(
    fields: list[tuple[FieldRef, FieldDirectives]],
    separator: str,
    bounds: BoundCollector,
) -> Sequence:
    """Sequence-writer path: one item (or item run) per field, in order."""
    items = []
    for ref, attrs in fields:
        item = render_field(ref, attrs, bounds)
        if item is not None:
            items.append(item)
    return Sequence(separator=separator, items=tuple(items))


def base_fragment(
    variant: Variant,
    attrs: VariantDirectives,
    bounds: BoundCollector,
) -> Fragment:
    active = active_fields(variant)
    if attrs.keyword is not None:
        return WriteStr(attrs.keyword)
    if not active:
        return WriteStr(variant.identifier)
    if len(active) == 1 and not active[0][1].iterable:
        # Same output as a one-item sequence, minus the writer.
        ref, field_attrs = active[0]
        if not field_attrs.ignore_bound:
            bounds.require_bound(ref.type_expr)
        return WriteValue(ref)
    return sequence_fragment(active, attrs.separator, bounds)


def render_variant(
    variant: Variant,
    bounds: BoundCollector,
    *,
    attrs: VariantDirectives | None = None,
) -> Fragment:
    """Compile *variant* into one fragment.

    Args:
        variant: The variant to compile.
        bounds: Collector shared across the whole generation pass.
        attrs: Effective directives, when they differ from
            ``variant.css`` (structs inherit type-level ones).
    """
    attrs = attrs or variant.css
    base = base_fragment(variant, attrs, bounds)
    identifier = variant.identifier

    if attrs.dimension:
        return Concat((base, WriteStr(identifier)))
    if attrs.function is not None:
        name = attrs.function.resolve(identifier)
        return Concat((WriteStr(f"{name}("), base, WriteStr(")")))
    return base
