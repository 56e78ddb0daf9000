"""Rich Console factory and theme for cssderive output.

Consoles render into a StringIO buffer so formatters keep a
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes by itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CSSDERIVE_THEME = Theme(
    {
        "css.ok": "bold green",
        "css.error": "bold red",
        "css.op": "bold cyan",
        "css.key": "dim",
        "css.type": "bold",
        "css.ident": "magenta",
        "css.bound": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CSSDERIVE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
