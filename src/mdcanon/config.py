#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdcanon CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, validating their keys, and turning the
result into options objects.

Configuration files hold a flat table of option fields, for example::

    # .mdcanon.toml
    emphasis_marker = "*"
    unordered_list_marker = "+"
    parse_footnotes = false

"""

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

from mdcanon.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from mdcanon.exceptions import ConfigError
from mdcanon.options.markdown import MarkdownFormatOptions, MarkdownParserOptions

logger = logging.getLogger(__name__)

# code_formatter is a callable and cannot come from a file
FORMAT_CONFIG_KEYS = frozenset(name for name in MarkdownFormatOptions.field_names() if name != "code_formatter")
PARSER_CONFIG_KEYS = frozenset(MarkdownParserOptions.field_names())


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdcanon]`` section from a pyproject.toml file.

    Returns
    -------
    dict
        The section, or an empty dict when the file has none

    Raises
    ------
    ConfigError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {e}", str(pyproject_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading {pyproject_path}: {e}", str(pyproject_path), e) from e

    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(section).__name__}",
            str(pyproject_path),
        )
    return section


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Each directory from ``start_dir`` up to the filesystem root is checked
    for ``.mdcanon.toml``, ``.mdcanon.yaml``, ``.mdcanon.yml``,
    ``.mdcanon.json`` and then a ``pyproject.toml`` with a ``[tool.mdcanon]``
    table. The first hit wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        Path to the first config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigError as e:
                # A broken pyproject.toml belongs to someone else's tooling
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent directory search of :func:`find_config_in_parents` runs
    first; the user's home directory is the fallback.

    Returns
    -------
    Path or None
        Path to the discovered config file

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

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
    ConfigError
        If the file is missing, unreadable, malformed or of an unknown format

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file does not exist: {config_path}", str(config_path))
    if not config_path.is_file():
        raise ConfigError(f"Configuration path is not a file: {config_path}", str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_toml_config(config_path)
    if ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    if ext == ".json":
        return _load_json_config(config_path)
    raise ConfigError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", str(config_path))


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading TOML config {config_path}: {e}", str(config_path), e) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading JSON config {config_path}: {e}", str(config_path), e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"JSON config file must contain an object, got {type(config).__name__}", str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {config_path}: {e}", str(config_path), e) from e
    except OSError as e:
        raise ConfigError(f"Error reading YAML config {config_path}: {e}", str(config_path), e) from e

    # An empty YAML document loads as None
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", str(config_path)
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries; ``override`` wins on conflicts.

    Examples
    --------
    >>> merge_configs({"emphasis_marker": "_"}, {"emphasis_marker": "*"})
    {'emphasis_marker': '*'}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def validate_config(config: Dict[str, Any], config_path: Optional[str] = None) -> None:
    """Reject unknown keys and wrongly typed values.

    Raises
    ------
    ConfigError
        Naming the first offending key

    """
    for key, value in config.items():
        if key in PARSER_CONFIG_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(
                    f"Config key '{key}' must be true or false, got {value!r}", config_path
                )
        elif key in FORMAT_CONFIG_KEYS:
            if not isinstance(value, str):
                raise ConfigError(f"Config key '{key}' must be a string, got {value!r}", config_path)
        else:
            raise ConfigError(f"Unknown config key '{key}'", config_path)


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    discover: bool = True,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. ``MDCANON_CONFIG`` environment variable
    3. Auto-discovered config file, unless ``discover`` is False

    Parameters
    ----------
    explicit_path : str, optional
        Config file path from the command line
    env_var_path : str, optional
        Config file path from the environment
    discover : bool, default True
        Whether to search for a config file when no path is given

    Returns
    -------
    dict
        Validated configuration (empty when no file applies)

    Raises
    ------
    ConfigError
        If the chosen file cannot be loaded or holds invalid keys

    """
    path: Optional[Path | str] = explicit_path or env_var_path
    if not path and discover:
        path = discover_config_file()
    if not path:
        return {}

    logger.debug(f"Loading configuration from {path}")
    config = load_config_file(path)
    validate_config(config, str(path))
    return config


def options_from_config(config: Dict[str, Any]) -> tuple[MarkdownFormatOptions, MarkdownParserOptions]:
    """Build options objects from a validated configuration dictionary.

    Raises
    ------
    ConfigError
        If a value is rejected by the options' own validation

    """
    format_kwargs = {k: v for k, v in config.items() if k in FORMAT_CONFIG_KEYS}
    parser_kwargs = {k: v for k, v in config.items() if k in PARSER_CONFIG_KEYS}
    try:
        return MarkdownFormatOptions(**format_kwargs), MarkdownParserOptions(**parser_kwargs)
    except ValueError as e:
        raise ConfigError(f"Invalid option value: {e}", original_error=e) from e
