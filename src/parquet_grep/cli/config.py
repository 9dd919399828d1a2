#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the parquet-grep CLI.

This module finds configuration files, loads them from TOML, YAML, JSON or
the ``[tool.parquet-grep]`` table of ``pyproject.toml``, and applies them to
``GrepOptions``. Command-line flags are applied afterwards and win.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from parquet_grep.constants import CONFIG_SECTION
from parquet_grep.exceptions import ConfigurationError
from parquet_grep.options.grep import GrepOptions

logger = logging.getLogger(__name__)

DOTFILE_NAMES = [".parquet-grep.toml", ".parquet-grep.yaml", ".parquet-grep.yml", ".parquet-grep.json"]
CONFIG_FILENAMES = DOTFILE_NAMES + ["pyproject.toml"]


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.parquet-grep]`` table from a pyproject.toml file.

    Returns an empty dict when the table is absent.

    Raises
    ------
    ConfigurationError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get(CONFIG_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{CONFIG_SECTION}] section in {pyproject_path} must be a table, got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    In each directory the dotfiles are checked first (``.parquet-grep.toml``,
    ``.yaml``, ``.yml``, ``.json``), then ``pyproject.toml`` if it has a
    ``[tool.parquet-grep]`` table. The first hit wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in DOTFILE_NAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError:
                # A broken pyproject.toml elsewhere in the tree is not ours to report
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the parent chain, then in the home directory."""
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = home or Path.home()
    for filename in DOTFILE_NAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _load_mapping(config_path: Path, loader: Any, kind: str) -> Dict[str, Any]:
    try:
        if kind == "TOML":
            with open(config_path, "rb") as f:
                config = loader(f)
        else:
            with open(config_path, "r", encoding="utf-8") as f:
                config = loader(f)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid {kind} in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {kind} config {config_path}: {e}", str(config_path), e) from e

    if config is None and kind == "YAML":
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"{kind} config file must contain a mapping at the top level, got {type(config).__name__}",
            str(config_path),
        )
    return config


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed, or has an unsupported extension

    Examples
    --------
    >>> config = load_config_file(".parquet-grep.toml")
    >>> config.get("limit")
    10

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_mapping(config_path, tomllib.load, "TOML")
    if ext in (".yaml", ".yml"):
        return _load_mapping(config_path, yaml.safe_load, "YAML")
    if ext == ".json":
        return _load_mapping(config_path, json.load, "JSON")
    raise ConfigurationError(
        f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml", str(config_path)
    )


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. Environment variable config path (``PARQUET_GREP_CONFIG``)
    3. Auto-discovered config file (parent directories, then home)

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    ConfigurationError
        If a config file is specified or discovered but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file(start_dir)
    if discovered_path:
        logger.debug(f"Using configuration from {discovered_path}")
        return load_config_file(discovered_path)

    return {}


def _normalize_keys(config: Dict[str, Any]) -> Dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in config.items()}


def apply_config(config: Dict[str, Any], base: Optional[GrepOptions] = None) -> GrepOptions:
    """Apply a loaded configuration mapping to ``GrepOptions``.

    Keys may use dashes or underscores. A nested ``remote`` table configures
    ``RemoteOptions``. Unknown keys are ignored with a warning.

    Raises
    ------
    ConfigurationError
        If a value is rejected by option validation

    """
    base = base or GrepOptions()
    values = _normalize_keys(config)

    remote_values = values.pop("remote", None)
    accepted, unknown = base.split_known(values)
    for key in unknown:
        logger.warning(f"Ignoring unknown configuration key: {key}")

    try:
        if remote_values is not None:
            if not isinstance(remote_values, dict):
                raise ConfigurationError("remote configuration must be a table")
            remote_accepted, remote_unknown = base.remote.split_known(_normalize_keys(remote_values))
            for key in remote_unknown:
                logger.warning(f"Ignoring unknown configuration key: remote.{key}")
            accepted["remote"] = base.remote.create_updated(**remote_accepted)
        return base.create_updated(**accepted)
    except ConfigurationError:
        raise
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}", original_error=e) from e


def load_options(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> GrepOptions:
    """Discover, load and apply configuration, returning the resulting options."""
    config = load_config_with_priority(explicit_path, env_var_path, start_dir)
    return apply_config(config) if config else GrepOptions()


__all__ = [
    "CONFIG_FILENAMES",
    "apply_config",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "load_options",
]
