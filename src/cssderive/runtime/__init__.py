"""Render-time collaborators used by generated procedures.

Generated source imports from this module, so its public names are part
of the generated-code contract.
"""

from __future__ import annotations

from cssderive.runtime.writer import (
    CssWriter,
    SequenceWriter,
    SupportsWrite,
    ToCss,
    Verbatim,
    render_value,
    to_css_string,
)

__all__ = [
    "CssWriter",
    "SequenceWriter",
    "SupportsWrite",
    "ToCss",
    "Verbatim",
    "render_value",
    "to_css_string",
]
