"""Bound inference for the generated procedure's type parameters.

A type parameter needs the rendering capability only when a value whose
type mentions it is rendered directly. Iterated, skipped and
``ignore_bound`` fields never contribute.

INVARIANT: one collector per generation call; nothing is process-wide.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

_IDENT = re.compile(r"[A-Za-z_]\w*")


@dataclass(frozen=True)
class BoundSet:
    """Final generic constraints for one generated procedure.

    Attributes:
        predicates: Type expressions that must be renderable, in the
            order they were first required.
        parameters: Type parameters referenced by any predicate, in
            declaration order.
    """

    predicates: tuple[str, ...] = ()
    parameters: tuple[str, ...] = ()


class BoundCollector:
    """Accumulates bound requirements during one generation pass."""

    def __init__(self, type_params: Sequence[str]) -> None:
        self._type_params = tuple(type_params)
        self._predicates: list[str] = []

    def referenced_params(self, type_expr: str) -> set[str]:
        """Type parameters mentioned (as whole words) in *type_expr*."""
        return set(_IDENT.findall(type_expr)).intersection(self._type_params)

    def require_bound(self, type_expr: str) -> None:
        """Record that values of *type_expr* are rendered directly.

        Concrete types (no type parameter mentioned) need no bound.
        Repeated calls with the same expression are no-ops.
        """
        type_expr = type_expr.strip()
        if not self.referenced_params(type_expr):
            return
        if type_expr not in self._predicates:
            self._predicates.append(type_expr)

    def finish(self) -> BoundSet:
        referenced: set[str] = set()
        for predicate in self._predicates:
            referenced |= self.referenced_params(predicate)
        return BoundSet(
            predicates=tuple(self._predicates),
            parameters=tuple(p for p in self._type_params if p in referenced),
        )
