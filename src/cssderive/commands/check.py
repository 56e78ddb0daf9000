"""check — validate a schema file."""

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
  cssderive check shadow.yaml
  cssderive --json check transform.toml""",
)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def check(app: AppContext, schema: Path) -> None:
    """Validate SCHEMA and summarize its variants and bounds."""
    app.emit(app.service.check(schema))
