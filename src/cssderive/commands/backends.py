"""backends — list registered backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cssderive.commands._base import CssCommand

if TYPE_CHECKING:
    from cssderive.commands._context import AppContext


@click.command(cls=CssCommand, examples="  cssderive backends\n  cssderive --json backends")
@click.pass_obj
def backends(app: AppContext) -> None:
    """List the backends available to generate."""
    app.emit(app.service.backends())
