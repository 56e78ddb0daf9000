"""Tests for CssDeriveSettings."""

from pathlib import Path

import click
import pytest

from cssderive.config.settings import CssDeriveSettings


class TestCssDeriveSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.generator.backend == "source"
        assert settings.generator.runtime_module == "cssderive.runtime"
        assert settings.generator.header is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "cssderive.toml"
        toml.write_text('[generator]\nbackend = "closure"\nruntime_module = "app.css"\n')
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.generator.backend == "closure"
        assert settings.generator.runtime_module == "app.css"
        assert settings.generator.header is True  # default preserved
        assert settings.config_path == toml

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "cssderive.toml").write_text("")
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.generator.backend == "source"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text("[generator]\nheader = false\n")
        settings = CssDeriveSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.generator.header is False
        assert settings.config_path == custom

    def test_missing_explicit_config_is_ignored(self, tmp_path: Path) -> None:
        settings = CssDeriveSettings.from_cli(config_path=str(tmp_path / "nope.toml"), project_root=tmp_path)
        assert settings.config_path is None

    def test_root_defaults_to_config_dir(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cssderive.toml").write_text("")
        child = tmp_path / "src"
        child.mkdir()
        monkeypatch.chdir(child)
        settings = CssDeriveSettings.from_cli()
        assert settings.project_root.resolve() == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "cssderive.toml").write_text("[generator\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            CssDeriveSettings.from_cli(project_root=tmp_path)


class TestPyproject:
    def test_reads_tool_table(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "app"\n\n[tool.cssderive.generator]\nruntime_module = "app.css"\n')
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.config_path == pyproject
        assert settings.generator.runtime_module == "app.css"
        assert settings.generator.backend == "source"

    def test_explicit_pyproject(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "elsewhere" / "pyproject.toml"
        pyproject.parent.mkdir()
        pyproject.write_text("[tool.cssderive.generator]\nheader = false\n")
        settings = CssDeriveSettings.from_cli(config_path=str(pyproject), project_root=tmp_path)
        assert settings.generator.header is False


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "cssderive.toml").write_text('[generator]\nbackend = "closure"\n')
        monkeypatch.setenv("CSSDERIVE_GENERATOR__BACKEND", "rust")
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.generator.backend == "rust"

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSDERIVE_QUIET", "true")
        settings = CssDeriveSettings.from_cli(project_root=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_env_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CSSDERIVE_VERBOSE", "1")
        settings = CssDeriveSettings.from_cli(project_root=tmp_path)
        assert settings.verbose is True
