"""Eager schema validation, run before any fragment is built."""

from __future__ import annotations

from cssderive.domain.errors import SchemaError, SchemaRule
from cssderive.domain.schema import TypeSchema, Variant, VariantDirectives


def validate_schema(schema: TypeSchema) -> None:
    """Check every directive combination in *schema*.

    Raises:
        SchemaError: On the first violated rule, located by variant/field.
    """
    if schema.is_enum:
        if schema.css.function is not None:
            raise SchemaError(
                "function is not allowed on enums",
                rule=SchemaRule.FUNCTION_ON_ENUM,
                type_name=schema.name,
            )
        if schema.css.comma:
            raise SchemaError(
                "comma is not allowed on enums",
                rule=SchemaRule.COMMA_ON_ENUM,
                type_name=schema.name,
            )

    seen: set[str] = set()
    for variant in schema.variants:
        if variant.name in seen:
            raise SchemaError(
                "variant is declared more than once",
                rule=SchemaRule.DUPLICATE_VARIANT,
                type_name=schema.name,
                variant=variant.name,
            )
        seen.add(variant.name)
        validate_variant(schema.name, variant, schema.variant_directives(variant))


def validate_variant(type_name: str, variant: Variant, attrs: VariantDirectives) -> None:
    if attrs.dimension:
        if attrs.function is not None or attrs.keyword is not None:
            raise SchemaError(
                "dimension cannot be combined with function or keyword",
                rule=SchemaRule.DIMENSION_CONFLICT,
                type_name=type_name,
                variant=variant.name,
            )
        # Raw binding count: skipped fields still count here.
        if len(variant.fields) != 1:
            raise SchemaError(
                f"dimension requires exactly one field, found {len(variant.fields)}",
                rule=SchemaRule.DIMENSION_ARITY,
                type_name=type_name,
                variant=variant.name,
            )
        if variant.fields[0].css.skip:
            raise SchemaError(
                "dimension requires its field to be rendered, found skip",
                rule=SchemaRule.DIMENSION_ARITY,
                type_name=type_name,
                variant=variant.name,
                field=variant.fields[0].name or "0",
            )
    if attrs.keyword is not None and variant.fields:
        raise SchemaError(
            f"keyword requires zero fields, found {len(variant.fields)}",
            rule=SchemaRule.KEYWORD_WITH_FIELDS,
            type_name=type_name,
            variant=variant.name,
        )
    for index, field in variant.bindings():
        if field.css.if_empty is not None and not field.css.iterable:
            raise SchemaError(
                "if_empty requires iterable",
                rule=SchemaRule.IF_EMPTY_WITHOUT_ITERABLE,
                type_name=type_name,
                variant=variant.name,
                field=field.name if field.name is not None else str(index),
            )
