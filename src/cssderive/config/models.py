"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cssderive.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratorConfig(BaseModel):
    """[generator] section."""

    model_config = {"frozen": True}

    backend: str = "source"
    runtime_module: str = "cssderive.runtime"
    header: bool = True
    load_plugins: bool = True
