"""Generator driver: one schema in, one RenderProcedure out."""

from __future__ import annotations

import logging

from cssderive.domain.schema import TypeSchema
from cssderive.generator.bounds import BoundCollector
from cssderive.generator.ir import Arm, RenderProcedure
from cssderive.generator.validation import validate_schema
from cssderive.generator.variants import field_refs, render_variant

logger = logging.getLogger(__name__)


def generate(schema: TypeSchema) -> RenderProcedure:
    """Compile *schema* into its rendering procedure.

    Validation runs first and covers the whole schema, so no partial
    procedure is ever produced.

    Raises:
        SchemaError: If any directive combination is illegal.
    """
    validate_schema(schema)
    bounds = BoundCollector(schema.type_params)

    arms = []
    for variant in schema.variants:
        body = render_variant(variant, bounds, attrs=schema.variant_directives(variant))
        fields = tuple(ref for ref, _attrs in field_refs(variant))
        arms.append(Arm(variant=variant.name, fields=fields, body=body))

    bound_set = bounds.finish()
    logger.debug(
        "Generated %s: %d arm(s), bounds=%s",
        schema.name,
        len(arms),
        list(bound_set.predicates),
    )
    return RenderProcedure(
        type_name=schema.name,
        is_enum=schema.is_enum,
        type_params=tuple(schema.type_params),
        bounds=bound_set,
        arms=tuple(arms),
        derive_debug=schema.css.derive_debug,
    )
