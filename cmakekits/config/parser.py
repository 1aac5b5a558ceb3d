"""YAML configuration parser for cmakekits.

This module provides parsing and validation for cmakekits.yaml configuration
files. A file has three sections:

    settings:      module-wide settings (cmake executable, build dir layout, ...)
    build_types:   named build type profiles
    build_kits:    named build kits
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from cmakekits.config.registry import ConfigRegistry
from cmakekits.core.exceptions import ConfigError

DEFAULT_CONFIG_FILE = "cmakekits.yaml"
DEFAULT_BUILD_DIR = "{cwd}/build/{build_kit}/{build_type}"
BUILD_DIR_PLACEHOLDERS = ("cwd", "home", "build_kit", "build_type")


@dataclass
class ModuleSettings:
    """Module-wide settings shared by every task."""

    cmd: str = "cmake"
    build_dir: str = DEFAULT_BUILD_DIR
    source_dir: Optional[str] = None
    dap_name: str = "lldb"
    clangd_cmdline: List[str] = field(
        default_factory=lambda: ["clangd", "--background-index", "--clang-tidy"]
    )


def format_build_dir(template: str, **values: str) -> str:
    """
    Substitute the placeholders of a build directory template.

    Raises:
        ConfigError: If the template has an unknown placeholder or is not a
            valid format string
    """
    try:
        return template.format(**values)
    except KeyError as e:
        supported = ", ".join(BUILD_DIR_PLACEHOLDERS)
        raise ConfigError(
            f'settings.build_dir: unknown placeholder {{{e.args[0]}}} in "{template}" '
            f"(supported: {supported})"
        )
    except (AttributeError, IndexError, ValueError) as e:
        raise ConfigError(f'settings.build_dir: invalid template "{template}": {e}')


@dataclass
class CMakeKitsConfig:
    """Complete cmakekits configuration."""

    registry: ConfigRegistry
    settings: ModuleSettings = field(default_factory=ModuleSettings)
    source: Optional[Path] = None


def parse_config(config_path: Path) -> CMakeKitsConfig:
    """
    Parse cmakekits.yaml configuration file.

    Args:
        config_path: Path to cmakekits.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    config = parse_config_data(data)
    config.source = config_path
    return config


def parse_config_data(data: Mapping[str, Any]) -> CMakeKitsConfig:
    """Parse and validate already-loaded configuration data."""
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    unknown = sorted(
        str(k) for k in data if k not in ("settings", "build_types", "build_kits")
    )
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")

    registry = ConfigRegistry.from_mapping(data)
    if not registry.build_types:
        raise ConfigError("At least one build type must be defined")
    if not registry.build_kits:
        raise ConfigError("At least one build kit must be defined")

    return CMakeKitsConfig(
        registry=registry,
        settings=_parse_settings(data.get("settings") or {}),
    )


def _parse_settings(data: Mapping[str, Any]) -> ModuleSettings:
    """Parse the settings section."""
    if not isinstance(data, Mapping):
        raise ConfigError("settings must be a mapping")

    defaults = ModuleSettings()
    allowed = set(defaults.__dataclass_fields__)
    unknown = sorted(str(k) for k in data if k not in allowed)
    if unknown:
        raise ConfigError(f"settings contains unknown keys: {', '.join(unknown)}")

    clangd_cmdline = data.get("clangd_cmdline", defaults.clangd_cmdline)
    if not isinstance(clangd_cmdline, list) or not clangd_cmdline:
        raise ConfigError("settings.clangd_cmdline must be a non-empty list")

    build_dir = str(data.get("build_dir", defaults.build_dir))
    format_build_dir(build_dir, **{name: name for name in BUILD_DIR_PLACEHOLDERS})

    source_dir = data.get("source_dir")

    return ModuleSettings(
        cmd=str(data.get("cmd", defaults.cmd)),
        build_dir=build_dir,
        source_dir=str(source_dir) if source_dir is not None else None,
        dap_name=str(data.get("dap_name", defaults.dap_name)),
        clangd_cmdline=[str(arg) for arg in clangd_cmdline],
    )
