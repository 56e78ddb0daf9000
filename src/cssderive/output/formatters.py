"""Human and JSON formatting of ServiceResult.

Human output is op-specific (Rich tables for ``check`` and
``backends``). Generated source and rendered CSS are emitted raw so they
can be piped or redirected untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cssderive.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from cssderive.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output mode, derived from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format *result* for display according to *settings*."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        return _format_error(result, verbose=settings.verbose)
    raw = _RAW_FIELDS.get(result.op)
    if raw is not None and raw in result.data:
        return str(result.data[raw]).rstrip("\n")
    if settings.quiet:
        return f"OK: {result.op}"

    console = create_console()
    renderer = _OP_RENDERERS.get(result.op, _render_generic)
    renderer(result, console)
    return get_output(console).rstrip("\n")


def _format_error(result: ServiceResult, *, verbose: bool) -> str:
    msg = result.error.message if result.error else "Unknown error"
    lines = [f"ERROR: {result.op} - {msg}"]
    if verbose and result.error and result.error.detail:
        lines.extend(f"  {key}: {value}" for key, value in result.error.detail.items())
    return "\n".join(lines)


# ── Op renderers ──────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="css.ok"), Text(f"  {result.op}", style="css.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="css.key"), Text(str(value)), sep="")


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_check(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    data = result.data
    console.print(
        Text("  type: ", style="css.key"),
        Text(f"{data.get('type')} ({data.get('kind')})", style="css.type"),
        sep="",
    )
    bounds = data.get("bounds") or []
    _field(console, "bounds", ", ".join(bounds) if bounds else "none")

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Variant")
    table.add_column("Identifier", style="css.ident")
    table.add_column("Fields", justify="right")
    table.add_column("Aliases")
    for variant in data.get("variants", []):
        table.add_row(
            str(variant["name"]),
            str(variant["identifier"]),
            str(variant["fields"]),
            ", ".join(variant.get("aliases", [])),
        )
    console.print(table)


def _render_backends(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Backend")
    table.add_column("Class")
    for item in result.data.get("items", []):
        table.add_row(item["name"], item["class"])
    console.print(table)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "check": _render_check,
    "backends": _render_backends,
}

# Ops whose payload is printed verbatim in human mode.
_RAW_FIELDS: dict[str, str] = {
    "generate": "source",
    "render": "css",
}
