"""Configuration management with XDG paths and precedence resolution.

This module handles all persistent configuration for opnorm:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.opnorm/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- a single JSON file holding
  :class:`~opnorm.models.NormalizerConfig` fields.
* **Project config** -- ``./opnorm.json`` next to the API description,
  typically pinning naming conventions for one client.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and user config into the
  effective :class:`~opnorm.models.NormalizerConfig`.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from opnorm.exceptions import ConfigError
from opnorm.models import NormalizerConfig

logger = logging.getLogger(__name__)

_APP_NAME = "opnorm"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "opnorm.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/opnorm/`` (default ``~/.config/opnorm/``).
    On macOS/Windows: ``~/.opnorm/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/opnorm/`` (default ``~/.local/share/opnorm/``).
    On macOS/Windows: ``~/.opnorm/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Config files ---


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} at {path}: expected a JSON object")
    return data


def load_user_config() -> Optional[dict[str, Any]]:
    """Load ``<config_dir>/config.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    return _read_json_object(get_config_dir() / _CONFIG_FILENAME, "user config")


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./opnorm.json``, or ``None`` if it does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    return _read_json_object(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project config")


def _env_bool(name: str) -> Optional[bool]:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Environment variable {name} must be a boolean, got {value!r}")


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    kebab = _env_bool("OPNORM_KEBAB_FILE_NAMING")
    if kebab is not None:
        overrides["kebab_file_naming"] = kebab
    model_package = os.environ.get("OPNORM_MODEL_PACKAGE")
    if model_package:
        overrides["model_package"] = model_package
    catalog = os.environ.get("OPNORM_CATALOG")
    if catalog:
        overrides["catalog_file"] = catalog
    return overrides


# --- Precedence resolution ---


def resolve_config(
    cli_kebab: Optional[bool] = None,
    cli_catalog: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> NormalizerConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_kebab``, ``cli_catalog``, ``cli_format``)
        2. Environment variables (``OPNORM_KEBAB_FILE_NAMING``,
           ``OPNORM_MODEL_PACKAGE``, ``OPNORM_CATALOG``)
        3. Project config (``./opnorm.json``)
        4. User config (``~/.config/opnorm/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer is invalid.
    """
    merged: dict[str, Any] = {}
    for layer in (load_user_config(), load_project_config(), _env_overrides()):
        if layer:
            merged.update(layer)

    if cli_kebab is not None:
        merged["kebab_file_naming"] = cli_kebab
    if cli_catalog is not None:
        merged["catalog_file"] = cli_catalog
    if cli_format is not None:
        merged["output_format"] = cli_format

    try:
        config = NormalizerConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    logger.debug("Resolved configuration: %s", config.model_dump())
    return config
