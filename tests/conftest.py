"""Shared pytest fixtures and test helpers for cssderive tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cssderive.backends.closure import ClosureBackend, CompiledRenderer
from cssderive.config.settings import CssDeriveSettings
from cssderive.domain.schema import TypeSchema
from cssderive.generator import generate
from cssderive.runtime import CssWriter
from cssderive.services.schema import SchemaService


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    for key in ("CSSDERIVE_CONFIG", "CSSDERIVE_QUIET", "CSSDERIVE_VERBOSE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ours = logging.getLogger("cssderive")
    our_level = ours.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ours.setLevel(our_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> CssDeriveSettings:
    """Settings rooted at an empty temp directory, entry points disabled."""
    return CssDeriveSettings.from_cli(
        project_root=tmp_path,
        generator={"load_plugins": False},
    )


@pytest.fixture
def service(settings: CssDeriveSettings) -> SchemaService:
    return SchemaService(settings)


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write a schema mapping to ``tmp_path`` as JSON and return its path."""

    def _write(data: dict[str, Any], name: str = "schema.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class FailingSink:
    """Text sink that raises after *limit* successful writes."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.written: list[str] = []

    def write(self, text: str) -> int:
        if len(self.written) >= self.limit:
            msg = "sink is full"
            raise OSError(msg)
        self.written.append(text)
        return len(text)

    @property
    def text(self) -> str:
        return "".join(self.written)


def compile_schema(data: dict[str, Any]) -> CompiledRenderer:
    """Validate, generate and lower a schema mapping with the closure backend."""
    return ClosureBackend().lower(generate(TypeSchema.model_validate(data)))


def render(data: dict[str, Any], value: Any) -> str:
    """Render *value* through the schema mapping *data*."""
    buf = StringIO()
    compile_schema(data)(value, CssWriter(buf))
    return buf.getvalue()
