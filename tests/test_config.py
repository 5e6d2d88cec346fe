"""Tests for opnorm.config -- XDG paths, config files, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from opnorm.config import (
    get_config_dir,
    get_data_dir,
    load_project_config,
    load_user_config,
    resolve_config,
)
from opnorm.exceptions import ConfigError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("opnorm.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "custom"))

        result = get_config_dir()
        assert result == tmp_path / "custom" / "opnorm"
        assert result.is_dir()

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("opnorm.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_data_dir() == tmp_path / ".local" / "share" / "opnorm"

    def test_fallback_on_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("opnorm.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".opnorm"
        assert get_data_dir() == tmp_path / ".opnorm" / "data"


# ---------------------------------------------------------------------------
# Config files
# ---------------------------------------------------------------------------


class TestConfigFiles:
    def test_missing_files_return_none(self, isolated_config: Path) -> None:
        assert load_user_config() is None
        assert load_project_config() is None

    def test_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "opnorm.json", {"kebab_file_naming": False})
        assert load_project_config() == {"kebab_file_naming": False}

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / "opnorm.json").write_text("{broken", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_non_object_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "config" / "opnorm" / "config.json", [1, 2])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_user_config()


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------


class TestResolveConfig:
    def test_defaults(self, isolated_config: Path) -> None:
        config = resolve_config()
        assert config.kebab_file_naming is True
        assert config.model_package == "model"
        assert config.envelope_types == ["Datahistory", "GridApiResponse"]
        assert config.catalog_file is None

    def test_project_overrides_user(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "opnorm" / "config.json",
            {"model_package": "models", "kebab_file_naming": False},
        )
        _write_json(isolated_config / "opnorm.json", {"kebab_file_naming": True})
        config = resolve_config()
        assert config.model_package == "models"
        assert config.kebab_file_naming is True

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "opnorm.json", {"kebab_file_naming": True})
        monkeypatch.setenv("OPNORM_KEBAB_FILE_NAMING", "no")
        monkeypatch.setenv("OPNORM_MODEL_PACKAGE", "dto")
        monkeypatch.setenv("OPNORM_CATALOG", "catalog.yaml")
        config = resolve_config()
        assert config.kebab_file_naming is False
        assert config.model_package == "dto"
        assert config.catalog_file == "catalog.yaml"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OPNORM_KEBAB_FILE_NAMING", "false")
        monkeypatch.setenv("OPNORM_CATALOG", "env.yaml")
        config = resolve_config(cli_kebab=True, cli_catalog="cli.yaml", cli_format="json")
        assert config.kebab_file_naming is True
        assert config.catalog_file == "cli.yaml"
        assert config.output_format == "json"

    def test_bad_env_boolean(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OPNORM_KEBAB_FILE_NAMING", "sometimes")
        with pytest.raises(ConfigError, match="must be a boolean"):
            resolve_config()

    def test_invalid_value_type(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "opnorm.json", {"envelope_types": "Datahistory"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_output_format_from_project(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "opnorm.json", {"output_format": "plain"})
        assert resolve_config().output_format == "plain"

    def test_unknown_output_format(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "opnorm.json", {"output_format": "xml"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
