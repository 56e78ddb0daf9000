"""cssderive: schema-driven generator of CSS value serializers."""

from __future__ import annotations

__version__ = "0.1.0"
