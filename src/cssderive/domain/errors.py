"""Schema errors raised at generation time.

INVARIANT: an illegal directive combination always halts generation for
the offending type. It is never downgraded to a default.
"""

from __future__ import annotations

from enum import StrEnum


class SchemaRule(StrEnum):
    """The directive combination rules a schema can violate."""

    FUNCTION_ON_ENUM = "function-on-enum"
    COMMA_ON_ENUM = "comma-on-enum"
    DIMENSION_CONFLICT = "dimension-conflict"
    DIMENSION_ARITY = "dimension-arity"
    KEYWORD_WITH_FIELDS = "keyword-with-fields"
    IF_EMPTY_WITHOUT_ITERABLE = "if-empty-without-iterable"
    DUPLICATE_VARIANT = "duplicate-variant"


class SchemaError(ValueError):
    """An illegal directive combination, located by type/variant/field."""

    def __init__(
        self,
        message: str,
        *,
        rule: SchemaRule,
        type_name: str,
        variant: str | None = None,
        field: str | None = None,
    ) -> None:
        self.rule = rule
        self.type_name = type_name
        self.variant = variant
        self.field = field
        super().__init__(f"{self.location}: {message} [{rule}]")

    @property
    def location(self) -> str:
        """Dotted path to the offending item, e.g. ``Shadow::Px.0``."""
        path = self.type_name
        if self.variant is not None:
            path += f"::{self.variant}"
        if self.field is not None:
            path += f".{self.field}"
        return path

    def to_detail(self) -> dict[str, str]:
        """Structured detail for service-layer error payloads."""
        detail = {"rule": str(self.rule), "type": self.type_name}
        if self.variant is not None:
            detail["variant"] = self.variant
        if self.field is not None:
            detail["field"] = self.field
        return detail
