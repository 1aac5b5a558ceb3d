"""Configuration module for cmakekits.

This module provides the build type / build kit registry, YAML parsing of
cmakekits.yaml and the resolver that merges a selection into CMake arguments.
"""

from cmakekits.config.registry import (
    DEFAULT_GENERATOR,
    BuildTypeProfile,
    BuildKit,
    ConfigRegistry,
)
from cmakekits.config.parser import (
    DEFAULT_CONFIG_FILE,
    ModuleSettings,
    CMakeKitsConfig,
    parse_config,
    parse_config_data,
)
from cmakekits.config.resolver import (
    EffectiveInvocationSpec,
    expand_build_dir,
    merge_cache_defines,
    resolve,
)

__all__ = [
    "DEFAULT_GENERATOR",
    "BuildTypeProfile",
    "BuildKit",
    "ConfigRegistry",
    "DEFAULT_CONFIG_FILE",
    "ModuleSettings",
    "CMakeKitsConfig",
    "parse_config",
    "parse_config_data",
    "EffectiveInvocationSpec",
    "expand_build_dir",
    "merge_cache_defines",
    "resolve",
]
