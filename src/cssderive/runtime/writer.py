"""Text sinks for rendering CSS values.

A :class:`CssWriter` wraps anything with a ``write(str)`` method. Sink
failures are plain exceptions and propagate unchanged: there is no
partial-state recovery and no retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import Any, Protocol, runtime_checkable


class SupportsWrite(Protocol):
    def write(self, text: str, /) -> Any: ...


@runtime_checkable
class ToCss(Protocol):
    """The rendering capability: a value that writes itself as CSS."""

    def to_css(self, dest: CssWriter) -> None: ...


@dataclass(frozen=True)
class Verbatim:
    """Literal text written exactly as given (no quoting, no escaping)."""

    text: str

    def to_css(self, dest: CssWriter) -> None:
        dest.write_str(self.text)


def render_value(value: Any, dest: CssWriter) -> None:
    """Render one value into *dest*.

    Values implementing :class:`ToCss` render themselves. ``str``, ``int``
    and ``float`` are written through ``str()``; number formatting is the
    value type's concern, not this module's.

    Raises:
        TypeError: If *value* has no CSS rendering.
    """
    if isinstance(value, ToCss):
        value.to_css(dest)
    elif isinstance(value, bool):
        msg = "bool has no CSS rendering"
        raise TypeError(msg)
    elif isinstance(value, (str, int, float)):
        dest.write_str(str(value))
    else:
        msg = f"{type(value).__name__} does not implement to_css"
        raise TypeError(msg)


class CssWriter:
    """Destination sink for one top-level render call.

    ``prefix`` is text owed before the next non-empty write: ``None``
    when nothing is pending, otherwise a separator (possibly ``""``).
    Empty writes never flush it, so an item that renders nothing leaves
    no trace.
    """

    def __init__(self, inner: SupportsWrite) -> None:
        self.inner = inner
        self.prefix: str | None = ""

    def write_str(self, text: str) -> None:
        if not text:
            return
        prefix, self.prefix = self.prefix, None
        if prefix:
            self.inner.write(prefix)
        self.inner.write(text)

    def write_item(self, value: Any) -> None:
        render_value(value, self)


class SequenceWriter:
    """Writes successive items with a separator between non-empty ones.

    The separator is only ever a pending prefix on *dest*: it reaches the
    sink together with the next item that actually writes text.
    """

    def __init__(self, dest: CssWriter, separator: str) -> None:
        self.dest = dest
        self.separator = separator
        if dest.prefix is None:
            dest.prefix = ""

    def item(self, value: Any) -> None:
        before = self.dest.prefix
        if before is None:
            self.dest.prefix = self.separator
        self.dest.write_item(value)
        if before is None and self.dest.prefix is not None:
            # Nothing written; the separator is not owed yet.
            self.dest.prefix = None


def to_css_string(value: Any) -> str:
    """Render *value* into a fresh string."""
    buf = StringIO()
    render_value(value, CssWriter(buf))
    return buf.getvalue()
