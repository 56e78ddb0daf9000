"""Intermediate representation of a generated rendering procedure.

The generator decides *what* is written; a backend decides how the
procedure is expressed (a Python closure, Python source text, ...).
Nodes are immutable and never escape one generation pass except inside
the final :class:`RenderProcedure`.
"""

from __future__ import annotations

from dataclasses import dataclass

from cssderive.generator.bounds import BoundSet


@dataclass(frozen=True)
class FieldRef:
    """How to reach one field of a variant value."""

    index: int
    name: str | None = None
    type_expr: str = "Any"

    @property
    def label(self) -> str:
        return self.name if self.name is not None else str(self.index)


# --- Fragments written straight to the sink ---


@dataclass(frozen=True)
class WriteStr:
    """Write literal text."""

    text: str


@dataclass(frozen=True)
class WriteValue:
    """Render one field value directly, with no sequence writer."""

    field: FieldRef


@dataclass(frozen=True)
class Concat:
    """Run parts in order; a failing part stops the rest."""

    parts: tuple[Fragment, ...]


# --- Items fed to a sequence writer ---


@dataclass(frozen=True)
class Item:
    """The field value as one sequence item."""

    field: FieldRef


@dataclass(frozen=True)
class EachItem:
    """Every element of the field as successive items."""

    field: FieldRef


@dataclass(frozen=True)
class EachItemOr:
    """Every element of the field, or the verbatim fallback when empty."""

    field: FieldRef
    fallback: str


SequenceItem = Item | EachItem | EachItemOr


@dataclass(frozen=True)
class Sequence:
    """A sequence writer over the variant's active fields."""

    separator: str
    items: tuple[SequenceItem, ...]


Fragment = WriteStr | WriteValue | Concat | Sequence


@dataclass(frozen=True)
class Arm:
    """Dispatch arm: values of *variant* render through *body*."""

    variant: str
    fields: tuple[FieldRef, ...]
    body: Fragment


@dataclass(frozen=True)
class RenderProcedure:
    """The complete, exhaustive rendering procedure for one type."""

    type_name: str
    is_enum: bool
    type_params: tuple[str, ...]
    bounds: BoundSet
    arms: tuple[Arm, ...]
    derive_debug: bool = False
