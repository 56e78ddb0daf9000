"""SchemaService: check, generate and render from schema files.

Schema and load problems come back as failed results; they are never
raised past this layer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ruamel.yaml.error import YAMLError

from cssderive.backends.closure import ClosureBackend, MappingAdapter
from cssderive.backends.source import GeneratedSource
from cssderive.config.logging import schema_context
from cssderive.domain.errors import SchemaError
from cssderive.domain.schema import TypeSchema, load_schema
from cssderive.generator import RenderProcedure, generate
from cssderive.plugins.manager import PluginManager, UnknownBackendError, create_plugin_manager
from cssderive.services.result import ServiceResult

if TYPE_CHECKING:
    from cssderive.config.settings import CssDeriveSettings

logger = logging.getLogger(__name__)

LOAD_ERROR = "LOAD_ERROR"
SCHEMA_ERROR = "SCHEMA_ERROR"
BACKEND_ERROR = "BACKEND_ERROR"
RENDER_ERROR = "RENDER_ERROR"


class _Failed(Exception):
    def __init__(self, code: str, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.detail = detail or {}


def _summary(schema: TypeSchema, procedure: RenderProcedure) -> dict[str, Any]:
    return {
        "type": schema.name,
        "kind": "enum" if procedure.is_enum else "struct",
        "variants": [
            {
                "name": variant.name,
                "identifier": variant.identifier,
                "fields": len(variant.fields),
                "aliases": variant.css.alias_list,
            }
            for variant in schema.variants
        ],
        "bounds": list(procedure.bounds.predicates),
        "bounded_params": list(procedure.bounds.parameters),
        "derive_debug": procedure.derive_debug,
    }


class SchemaService:
    """Operations over one schema file at a time."""

    def __init__(
        self,
        settings: CssDeriveSettings,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins

    @property
    def plugins(self) -> PluginManager:
        if self._plugins is None:
            config = self._settings.generator
            self._plugins = create_plugin_manager(
                runtime_module=config.runtime_module,
                header=config.header,
                entrypoints=config.load_plugins,
            )
        return self._plugins

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, path: Path) -> TypeSchema:
        try:
            return load_schema(path)
        except (OSError, ValueError, YAMLError) as exc:
            raise _Failed(LOAD_ERROR, f"Cannot load schema {path}: {exc}") from exc

    def _generate(self, path: Path) -> tuple[TypeSchema, RenderProcedure]:
        schema = self._load(path)
        try:
            return schema, generate(schema)
        except SchemaError as exc:
            raise _Failed(SCHEMA_ERROR, str(exc), exc.to_detail()) from exc

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def check(self, path: Path) -> ServiceResult:
        """Validate *path* and summarize the procedure it would produce."""
        with schema_context(schema=str(path), op="check"):
            try:
                schema, procedure = self._generate(path)
            except _Failed as exc:
                logger.debug("check failed: %s", exc)
                return ServiceResult.failure("check", exc.code, str(exc), exc.detail)
            return ServiceResult.success("check", **_summary(schema, procedure))

    def generate(
        self,
        path: Path,
        *,
        backend: str | None = None,
        output: Path | None = None,
    ) -> ServiceResult:
        """Generate source for *path* with a text-producing backend.

        Writes to *output* when given; otherwise the text is returned in
        ``data["source"]``.
        """
        name = backend or self._settings.generator.backend
        with schema_context(schema=str(path), op="generate", backend=name):
            try:
                schema, procedure = self._generate(path)
                try:
                    lowering = self.plugins.get_backend(name)
                except UnknownBackendError as exc:
                    raise _Failed(BACKEND_ERROR, str(exc)) from exc
                artefact = lowering.lower(procedure)
                if not isinstance(artefact, GeneratedSource):
                    msg = f"Backend {name!r} does not produce source text"
                    raise _Failed(BACKEND_ERROR, msg)
            except _Failed as exc:
                logger.debug("generate failed: %s", exc)
                return ServiceResult.failure("generate", exc.code, str(exc), exc.detail)

            data: dict[str, Any] = {
                "type": schema.name,
                "backend": name,
                "function": artefact.function_name,
                "debug_function": artefact.debug_function_name,
            }
            if output is not None:
                output.parent.mkdir(parents=True, exist_ok=True)
                output.write_text(artefact.text, encoding="utf-8")
                data["path"] = str(output)
                logger.debug("wrote %s", output)
            else:
                data["source"] = artefact.text
            return ServiceResult.success("generate", **data)

    def render(self, path: Path, value: Any) -> ServiceResult:
        """Render a mapping-shaped *value* (see :class:`MappingAdapter`)."""
        with schema_context(schema=str(path), op="render"):
            try:
                schema, procedure = self._generate(path)
            except _Failed as exc:
                return ServiceResult.failure("render", exc.code, str(exc), exc.detail)
            renderer = ClosureBackend(MappingAdapter()).lower(procedure)
            try:
                css_text = renderer.to_string(value)
            except (TypeError, KeyError, IndexError, AttributeError) as exc:
                msg = f"Cannot render value as {schema.name}: {exc}"
                return ServiceResult.failure("render", RENDER_ERROR, msg)
            data: dict[str, Any] = {"type": schema.name, "css": css_text}
            if renderer.debug is not None:
                data["debug"] = renderer.debug(value)
            return ServiceResult.success("render", **data)

    def backends(self) -> ServiceResult:
        """List registered backends."""
        return ServiceResult.success(
            "backends",
            items=[
                {"name": name, "class": type(backend).__name__}
                for name, backend in sorted(self.plugins.backends.items())
            ],
            plugins=self.plugins.list_plugin_names(),
        )
