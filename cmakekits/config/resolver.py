"""Resolution of a (build type, build kit) selection into CMake arguments.

The resolver is the only place that knows how the two configuration axes
combine. Given the same registry, selection and working directory it
always produces the same argument list in the same order:

    -G <generator> -B <build dir> -DCMAKE_EXPORT_COMPILE_COMMANDS=ON
    [-DCMAKE_BUILD_TYPE=<type>] [-S <source dir>]
    [-DCMAKE_TOOLCHAIN_FILE=<file>] [-DCMAKE_C_COMPILER=<cc> -DCMAKE_CXX_COMPILER=<cxx>]
    [-D<key>=<value> ...]   (build type defines, then build kit defines)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from cmakekits.config.parser import ModuleSettings, format_build_dir
from cmakekits.config.registry import (
    COMPILER_LANGUAGES,
    BuildKit,
    BuildTypeProfile,
    ConfigRegistry,
    readonly_mapping,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveInvocationSpec:
    """Everything the task functions need to know about one selection.

    Attributes:
        build_type_name: Selected build type registry key
        build_kit_name: Selected build kit registry key
        build_type: The profile's ``CMAKE_BUILD_TYPE`` tag
        generator: CMake generator of the kit
        build_dir: Absolute build directory
        arguments: Configure arguments, in order
        environment: Build type environment overlaid by kit environment
        type_environment: Build type environment only
        kit_environment: Build kit environment only
        cache_defines: Merged cache defines (kit wins on collision)
        compilers: Compiler executables of the kit, if any
    """

    build_type_name: str
    build_kit_name: str
    build_type: str
    generator: str
    build_dir: Path
    arguments: Tuple[str, ...]
    environment: Mapping[str, str] = field(default_factory=dict)
    type_environment: Mapping[str, str] = field(default_factory=dict)
    kit_environment: Mapping[str, str] = field(default_factory=dict)
    cache_defines: Mapping[str, str] = field(default_factory=dict)
    compilers: Optional[Mapping[str, str]] = None

    def __post_init__(self):
        for attr in (
            "environment",
            "type_environment",
            "kit_environment",
            "cache_defines",
        ):
            object.__setattr__(self, attr, readonly_mapping(getattr(self, attr)))
        if self.compilers is not None:
            object.__setattr__(self, "compilers", readonly_mapping(self.compilers))


def expand_build_dir(
    template: str,
    build_kit: str,
    build_type: str,
    cwd: Optional[Path] = None,
) -> Path:
    """
    Expand a build directory template into an absolute path.

    Supported placeholders: ``{cwd}``, ``{home}``, ``{build_kit}``,
    ``{build_type}``. Relative results are taken relative to ``cwd``.

    Args:
        template: Template string, e.g. ``"{cwd}/build/{build_kit}/{build_type}"``
        build_kit: Selected build kit name
        build_type: Selected build type name
        cwd: Working directory (default: current directory)

    Returns:
        Absolute build directory path

    Raises:
        ConfigError: If the template cannot be expanded
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    expanded = Path(
        format_build_dir(
            template,
            cwd=str(cwd),
            home=str(Path.home()),
            build_kit=build_kit,
            build_type=build_type,
        )
    )
    if not expanded.is_absolute():
        expanded = cwd / expanded
    return expanded.resolve()


def merge_cache_defines(
    build_type: BuildTypeProfile, build_kit: BuildKit
) -> Dict[str, str]:
    """Merge cache defines; build type keys first, kit values win on collision."""
    merged = dict(build_type.cmake_usr_args)
    merged.update(build_kit.cmake_usr_args)
    return merged


def resolve(
    registry: ConfigRegistry,
    build_type_name: str,
    build_kit_name: str,
    settings: Optional[ModuleSettings] = None,
    cwd: Optional[Path] = None,
) -> EffectiveInvocationSpec:
    """
    Resolve a build type and build kit into an effective invocation spec.

    Args:
        registry: Loaded configuration registry
        build_type_name: Selected build type
        build_kit_name: Selected build kit
        settings: Module settings (build dir template, source dir)
        cwd: Working directory used to expand the build dir template

    Returns:
        EffectiveInvocationSpec for the selection

    Raises:
        UnknownSelectionError: If either name is not registered
    """
    settings = settings or ModuleSettings()
    build_type = registry.build_type(build_type_name)
    build_kit = registry.build_kit(build_kit_name)

    build_dir = expand_build_dir(
        settings.build_dir, build_kit_name, build_type_name, cwd=cwd
    )

    args = [
        "-G",
        build_kit.generator,
        "-B",
        str(build_dir),
        "-DCMAKE_EXPORT_COMPILE_COMMANDS=ON",
    ]
    if build_kit.build_type_aware:
        args.append(f"-DCMAKE_BUILD_TYPE={build_type.build_type}")
    if settings.source_dir:
        args.extend(["-S", settings.source_dir])
    if build_kit.toolchain_file:
        args.append(f"-DCMAKE_TOOLCHAIN_FILE={build_kit.toolchain_file}")
    if build_kit.compilers:
        for language in COMPILER_LANGUAGES:
            args.append(f"-DCMAKE_{language}_COMPILER={build_kit.compilers[language]}")

    cache_defines = merge_cache_defines(build_type, build_kit)
    for key, value in cache_defines.items():
        args.append(f"-D{key}={value}")

    environment = dict(build_type.environment_variables)
    environment.update(build_kit.environment_variables)

    logger.debug(
        f"Resolved {build_type_name}/{build_kit_name}: cmake {' '.join(args)}"
    )

    return EffectiveInvocationSpec(
        build_type_name=build_type_name,
        build_kit_name=build_kit_name,
        build_type=build_type.build_type,
        generator=build_kit.generator,
        build_dir=build_dir,
        arguments=tuple(args),
        environment=environment,
        type_environment=dict(build_type.environment_variables),
        kit_environment=dict(build_kit.environment_variables),
        cache_defines=cache_defines,
        compilers=dict(build_kit.compilers) if build_kit.compilers else None,
    )
