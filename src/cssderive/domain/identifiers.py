"""Canonical CSS spelling of structural names.

``BorderBox`` -> ``border-box``, ``None_`` -> ``none``, ``MozBox`` ->
``-moz-box``. Pure and total: every input maps to exactly one output and
characters keep their order.
"""

from __future__ import annotations

import re

VENDOR_PREFIXES = frozenset({"Moz", "Webkit", "Servo"})


def split_camel_segments(name: str) -> list[str]:
    """Split *name* before every uppercase character.

    Consecutive uppercase characters each start their own segment, so
    ``RGBA`` yields ``["R", "G", "B", "A"]``. Digits stay attached to the
    preceding segment.
    """
    segments: list[str] = []
    for ch in name:
        if ch.isupper() or not segments:
            segments.append(ch)
        else:
            segments[-1] += ch
    return segments


def to_css_identifier(name: str) -> str:
    """Convert a CamelCase structural name into its CSS identifier."""
    segments = split_camel_segments(name.rstrip("_"))
    if not segments:
        return ""
    prefix = "-" if segments[0] in VENDOR_PREFIXES else ""
    return prefix + "-".join(segment.lower() for segment in segments)


def to_snake_case(name: str) -> str:
    """Python-style snake_case for generated function names."""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])", "_", name).lower()
