"""Subcommand modules for cssderive.

Provides register_commands() which uses deferred imports to keep
``cssderive --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from cssderive.commands.backends import backends
    from cssderive.commands.check import check
    from cssderive.commands.generate import generate
    from cssderive.commands.render import render

    cli.add_command(check)
    cli.add_command(generate)
    cli.add_command(render)
    cli.add_command(backends)
