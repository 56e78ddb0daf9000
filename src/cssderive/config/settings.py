"""Settings for one cssderive invocation.

Sources, strongest first: CLI flags, ``CSSDERIVE_*`` environment
variables (``CSSDERIVE_GENERATOR__BACKEND=closure``), the discovered
config file (see :mod:`cssderive.config.discovery`), code defaults.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from cssderive.config.discovery import config_section, find_config
from cssderive.config.models import GeneratorConfig


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse *path* and return its cssderive section.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc
    return config_section(path, data)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the project's config file."""

    def __init__(self, settings_cls: type[BaseSettings], config_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._values = read_config_file(config_path) if config_path and config_path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, field_name in self._values

    def __call__(self) -> dict[str, Any]:
        return self._values


# pydantic-settings builds sources inside __init__, so the discovered path
# travels there per thread.
_pending = threading.local()


class CssDeriveSettings(BaseSettings):
    """Resolved settings, stored on the click context by the root group.

    Attributes:
        project_root: Directory of the config file, or the CWD.
        config_path: The config file in use, or None.
        generator: The ``[generator]`` section.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CSSDERIVE_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_pending, "config_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> CssDeriveSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored rather
        than falling back to discovery.
        """
        if config_path:
            explicit = Path(config_path)
            found = explicit if explicit.is_file() else None
        else:
            found = find_config(project_root)

        if project_root is None:
            project_root = found.parent if found else Path.cwd()

        _pending.config_path = found
        try:
            return cls(project_root=project_root, config_path=found, **cli_flags)
        finally:
            _pending.config_path = None
