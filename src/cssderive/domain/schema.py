"""Schema models: the parsed description of a type and its css directives.

Three directive bundles mirror the three granularities a front-end can
annotate: the whole type, one variant, one field. Every directive has a
code-baked default, so an absent key is never an error. Unknown keys are
rejected (``extra="forbid"``).

Schemas are loaded from JSON, TOML or YAML files via :func:`load_schema`,
or built in Python (see :mod:`cssderive.derive`).
"""

from __future__ import annotations

import json
import keyword
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from ruamel.yaml import YAML

from cssderive.domain.identifiers import to_css_identifier

SCHEMA_SUFFIXES = (".json", ".toml", ".yaml", ".yml")


def _python_name(value: str) -> str:
    if not value.isidentifier() or keyword.iskeyword(value):
        msg = f"{value!r} is not a valid Python name"
        raise ValueError(msg)
    return value


# Names end up verbatim in generated source (function names, attribute
# access), so they must be plain identifiers.
PythonName = Annotated[str, AfterValidator(_python_name)]


class Override(BaseModel):
    """A directive that is either switched on bare or given an explicit value.

    ``function = true`` keeps the canonical identifier as the function
    name, ``function = "calc"`` overrides it.
    """

    model_config = ConfigDict(frozen=True)

    explicit: str | None = None

    def resolve(self, default: str) -> str:
        """Return the explicit value, or *default* when switched on bare."""
        return default if self.explicit is None else self.explicit


def _coerce_override(value: Any) -> Any:
    if value is None or value is False:
        return None
    if value is True:
        return Override()
    if isinstance(value, str):
        return Override(explicit=value)
    return value


OverrideDirective = Annotated[Override | None, BeforeValidator(_coerce_override)]


class TypeDirectives(BaseModel):
    """Type-level directives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    derive_debug: bool = False
    # Also variant directives when the type is a struct.
    function: OverrideDirective = None
    comma: bool = False


class VariantDirectives(BaseModel):
    """Variant-level directives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    function: OverrideDirective = None
    comma: bool = False
    dimension: bool = False
    keyword: str | None = None
    aliases: str | None = None

    @property
    def alias_list(self) -> list[str]:
        """Alternative spellings, from the comma-separated ``aliases``."""
        if not self.aliases:
            return []
        return [alias.strip() for alias in self.aliases.split(",") if alias.strip()]

    @property
    def separator(self) -> str:
        return ", " if self.comma else " "


class FieldDirectives(BaseModel):
    """Field-level directives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    skip: bool = False
    iterable: bool = False
    if_empty: str | None = None
    ignore_bound: bool = False


class SchemaField(BaseModel):
    """One bound value inside a variant.

    ``type`` is only consulted for bound inference, never for dispatch.
    A field without ``name`` is positional.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: PythonName | None = None
    type: str = "Any"
    css: FieldDirectives = Field(default_factory=FieldDirectives)


class Variant(BaseModel):
    """One alternative of the type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: PythonName
    fields: list[SchemaField] = Field(default_factory=list)
    css: VariantDirectives = Field(default_factory=VariantDirectives)

    @property
    def identifier(self) -> str:
        """Canonical CSS spelling of the variant name."""
        return to_css_identifier(self.name)

    def bindings(self) -> Iterator[tuple[int, SchemaField]]:
        """Yield ``(index, field)`` in declaration order."""
        yield from enumerate(self.fields)


class TypeSchema(BaseModel):
    """The type under generation.

    Attributes:
        name: Type name, used in diagnostics and generated names.
        type_params: Generic parameters of the type, in declaration order.
        kind: ``"struct"`` or ``"enum"``. Inferred when omitted: a type
            with exactly one variant is a struct.
        variants: Alternatives, in declaration order.
        css: Type-level directives.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: PythonName
    type_params: list[PythonName] = Field(default_factory=list)
    kind: Literal["struct", "enum"] | None = None
    variants: list[Variant] = Field(default_factory=list)
    css: TypeDirectives = Field(default_factory=TypeDirectives)

    @model_validator(mode="after")
    def _struct_has_one_variant(self) -> TypeSchema:
        if self.kind == "struct" and len(self.variants) != 1:
            msg = f"struct {self.name!r} must have exactly one variant, found {len(self.variants)}"
            raise ValueError(msg)
        return self

    @property
    def is_enum(self) -> bool:
        if self.kind is not None:
            return self.kind == "enum"
        return len(self.variants) != 1

    def variant_directives(self, variant: Variant) -> VariantDirectives:
        """Effective directives of *variant*.

        A struct is its own single variant, so type-level ``function`` and
        ``comma`` apply to it.
        """
        attrs = variant.css
        if self.is_enum:
            return attrs
        update: dict[str, Any] = {}
        if self.css.function is not None and attrs.function is None:
            update["function"] = self.css.function
        if self.css.comma:
            update["comma"] = True
        return attrs.model_copy(update=update) if update else attrs


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _read_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(raw)
    elif suffix == ".toml":
        data = tomllib.loads(raw)
    elif suffix in (".yaml", ".yml"):
        data = YAML(typ="safe").load(raw)
    else:
        msg = f"Unsupported schema format {suffix!r}; expected one of {', '.join(SCHEMA_SUFFIXES)}"
        raise ValueError(msg)
    if not isinstance(data, dict):
        msg = f"Schema file {path} must contain a mapping at the top level"
        raise ValueError(msg)
    return data


def load_schema(path: Path) -> TypeSchema:
    """Load and validate a schema file (JSON, TOML or YAML).

    Raises:
        ValueError: On unsupported format, malformed content, or a shape
            that does not match :class:`TypeSchema` (pydantic's
            ``ValidationError`` is a ``ValueError``).
    """
    return TypeSchema.model_validate(_read_mapping(path))
