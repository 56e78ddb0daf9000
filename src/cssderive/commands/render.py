"""render — render one value through a schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from cssderive.commands._base import CssCommand

if TYPE_CHECKING:
    from cssderive.commands._context import AppContext


@click.command(
    cls=CssCommand,
    examples="""\
  cssderive render length.yaml '{"variant": "Px", "fields": [3]}'
  cssderive render shadow.yaml '{"fields": {"x": 1, "y": 2, "blur": 3}}'""",
)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("value")
@click.pass_obj
def render(app: AppContext, schema: Path, value: str) -> None:
    """Render VALUE (JSON: {"variant": ..., "fields": ...}) with SCHEMA."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="VALUE") from exc
    if not isinstance(parsed, dict):
        raise click.BadParameter("must be a JSON object", param_hint="VALUE")
    app.emit(app.service.render(schema, parsed))
