"""Field strategies: one field's directives compiled into a sequence item.

:func:`strategy_for` is a pure function of the field directives; the
chosen strategy registers bound requirements and yields the item.
"""

from __future__ import annotations

from dataclasses import dataclass

from cssderive.domain.schema import FieldDirectives
from cssderive.generator.bounds import BoundCollector
from cssderive.generator.ir import EachItem, EachItemOr, FieldRef, Item, SequenceItem


class SkipField:
    """Absent from output and from bound inference."""

    def render(self, field: FieldRef, bounds: BoundCollector) -> SequenceItem | None:
        return None


@dataclass(frozen=True)
class DirectField:
    """The value itself is one item; its type needs the bound."""

    ignore_bound: bool = False

    def render(self, field: FieldRef, bounds: BoundCollector) -> SequenceItem | None:
        if not self.ignore_bound:
            bounds.require_bound(field.type_expr)
        return Item(field)


class IterableField:
    """Each element is one item; an empty collection writes nothing."""

    def render(self, field: FieldRef, bounds: BoundCollector) -> SequenceItem | None:
        return EachItem(field)


@dataclass(frozen=True)
class IterableWithFallback:
    """Each element is one item; an empty collection writes *fallback*."""

    fallback: str

    def render(self, field: FieldRef, bounds: BoundCollector) -> SequenceItem | None:
        return EachItemOr(field, self.fallback)


FieldStrategy = SkipField | DirectField | IterableField | IterableWithFallback


def strategy_for(attrs: FieldDirectives) -> FieldStrategy:
    if attrs.skip:
        return SkipField()
    if attrs.iterable:
        if attrs.if_empty is not None:
            return IterableWithFallback(attrs.if_empty)
        return IterableField()
    return DirectField(ignore_bound=attrs.ignore_bound)


def render_field(
    field: FieldRef,
    attrs: FieldDirectives,
    bounds: BoundCollector,
) -> SequenceItem | None:
    """Compile one field; ``None`` means the field contributes nothing."""
    return strategy_for(attrs).render(field, bounds)
