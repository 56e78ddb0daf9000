"""generate — emit the rendering procedure for a schema."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cssderive.commands._base import CssCommand

if TYPE_CHECKING:
    from cssderive.commands._context import AppContext


@click.command(
    cls=CssCommand,
    examples="""\
  cssderive generate shadow.yaml > shadow_css.py
  cssderive generate shadow.yaml --output src/styles/shadow_css.py
  cssderive generate shadow.yaml --backend source""",
)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--backend",
    default=None,
    help="Backend name (default: [generator] backend from cssderive.toml).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the generated module here instead of stdout.",
)
@click.pass_obj
def generate(app: AppContext, schema: Path, backend: str | None, output: Path | None) -> None:
    """Generate the rendering procedure for SCHEMA."""
    app.emit(app.service.generate(schema, backend=backend, output=output))
