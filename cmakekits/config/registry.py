"""Build type and build kit registry.

The registry holds the two configuration axes a CMake invocation is
composed from:

- build types: named profiles carrying the ``CMAKE_BUILD_TYPE`` tag plus
  extra cache defines and environment variables
- build kits: named compiler/generator setups (generator, compilers,
  toolchain file, cache defines, environment variables)

Both are loaded once per session and are read-only afterwards.

Example:
    >>> registry = ConfigRegistry.from_mapping({
    ...     "build_types": {"Debug": {"build_type": "Debug"}},
    ...     "build_kits": {"gcc": {"compilers": {"C": "gcc", "CXX": "g++"}}},
    ... })
    >>> registry.build_kit("gcc").generator
    'Ninja'
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from cmakekits.core.exceptions import ConfigError, UnknownSelectionError

DEFAULT_GENERATOR = "Ninja"

# Languages a kit must name a compiler for
COMPILER_LANGUAGES = ("C", "CXX")


def _define_value(value: Any) -> str:
    """Render a cache define value the way CMake expects it on the command line."""
    # YAML 1.1 reads ON/OFF as booleans
    if isinstance(value, bool):
        return "ON" if value else "OFF"
    return str(value)


def _parse_str_mapping(owner: str, key: str, value: Any) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{owner}: {key} must be a mapping")
    return {str(k): _define_value(v) for k, v in value.items()}


def readonly_mapping(mapping: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Copy a mapping into a read-only view."""
    return MappingProxyType(dict(mapping or {}))


def _check_keys(owner: str, data: Mapping[str, Any], allowed: set) -> None:
    unknown = sorted(str(k) for k in data if k not in allowed)
    if unknown:
        raise ConfigError(f"{owner} contains unknown keys: {', '.join(unknown)}")


@dataclass(frozen=True)
class BuildTypeProfile:
    """A named build type.

    Attributes:
        name: Registry key
        build_type: Value passed as ``CMAKE_BUILD_TYPE`` (and ``ctest -C``)
        cmake_usr_args: Extra cache defines, in declaration order
        environment_variables: Environment overrides for configure
    """

    name: str
    build_type: str
    cmake_usr_args: Mapping[str, str] = field(default_factory=dict)
    environment_variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for attr in ("cmake_usr_args", "environment_variables"):
            object.__setattr__(self, attr, readonly_mapping(getattr(self, attr)))

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "BuildTypeProfile":
        owner = f'Build type "{name}"'
        if not isinstance(data, Mapping):
            raise ConfigError(f"{owner} definition must be a mapping")
        _check_keys(
            owner, data, {"build_type", "cmake_usr_args", "environment_variables"}
        )

        build_type = data.get("build_type")
        if not isinstance(build_type, str) or not build_type:
            raise ConfigError(f"{owner} missing required field: build_type")

        return cls(
            name=name,
            build_type=build_type,
            cmake_usr_args=_parse_str_mapping(
                owner, "cmake_usr_args", data.get("cmake_usr_args")
            ),
            environment_variables=_parse_str_mapping(
                owner, "environment_variables", data.get("environment_variables")
            ),
        )


@dataclass(frozen=True)
class BuildKit:
    """A named build kit.

    Attributes:
        name: Registry key
        generator: CMake generator (``-G``)
        compilers: Compiler executables keyed by language (``C``, ``CXX``)
        toolchain_file: Optional ``CMAKE_TOOLCHAIN_FILE``
        cmake_usr_args: Extra cache defines; override build type defines
        environment_variables: Environment overrides for build, clean and ctest
        build_type_aware: Whether ``CMAKE_BUILD_TYPE`` is passed at all
            (multi-config generators and some toolchain files set it themselves)
    """

    name: str
    generator: str = DEFAULT_GENERATOR
    compilers: Optional[Mapping[str, str]] = None
    toolchain_file: Optional[str] = None
    cmake_usr_args: Mapping[str, str] = field(default_factory=dict)
    environment_variables: Mapping[str, str] = field(default_factory=dict)
    build_type_aware: bool = True

    def __post_init__(self):
        for attr in ("cmake_usr_args", "environment_variables"):
            object.__setattr__(self, attr, readonly_mapping(getattr(self, attr)))
        if self.compilers is not None:
            object.__setattr__(self, "compilers", readonly_mapping(self.compilers))

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "BuildKit":
        owner = f'Build kit "{name}"'
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"{owner} definition must be a mapping")
        _check_keys(
            owner,
            data,
            {
                "generator",
                "compilers",
                "toolchain_file",
                "cmake_usr_args",
                "environment_variables",
                "build_type_aware",
            },
        )

        generator = data.get("generator") or DEFAULT_GENERATOR
        if not isinstance(generator, str):
            raise ConfigError(f"{owner}: generator must be a string")

        compilers = None
        if data.get("compilers") is not None:
            compilers = _parse_str_mapping(owner, "compilers", data["compilers"])
            missing = [lang for lang in COMPILER_LANGUAGES if lang not in compilers]
            if missing:
                raise ConfigError(
                    f"{owner}: compilers missing languages: {', '.join(missing)}"
                )

        toolchain_file = data.get("toolchain_file")
        if toolchain_file is not None:
            toolchain_file = str(toolchain_file)

        build_type_aware = data.get("build_type_aware", True)
        if not isinstance(build_type_aware, bool):
            raise ConfigError(f"{owner}: build_type_aware must be a boolean")

        return cls(
            name=name,
            generator=generator,
            compilers=compilers,
            toolchain_file=toolchain_file,
            cmake_usr_args=_parse_str_mapping(
                owner, "cmake_usr_args", data.get("cmake_usr_args")
            ),
            environment_variables=_parse_str_mapping(
                owner, "environment_variables", data.get("environment_variables")
            ),
            build_type_aware=build_type_aware,
        )


class ConfigRegistry:
    """Read-only lookup of build types and build kits by name."""

    def __init__(
        self,
        build_types: Mapping[str, BuildTypeProfile],
        build_kits: Mapping[str, BuildKit],
    ):
        self._build_types = MappingProxyType(dict(build_types))
        self._build_kits = MappingProxyType(dict(build_kits))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConfigRegistry":
        """Build a registry from already-parsed configuration data.

        Args:
            data: Mapping with ``build_types`` and ``build_kits`` sections

        Raises:
            ConfigError: If a section or an entry is malformed
        """
        build_types_data = data.get("build_types") or {}
        build_kits_data = data.get("build_kits") or {}
        if not isinstance(build_types_data, Mapping):
            raise ConfigError("build_types must be a mapping")
        if not isinstance(build_kits_data, Mapping):
            raise ConfigError("build_kits must be a mapping")

        build_types = {
            str(name): BuildTypeProfile.from_mapping(str(name), entry)
            for name, entry in build_types_data.items()
        }
        build_kits = {
            str(name): BuildKit.from_mapping(str(name), entry)
            for name, entry in build_kits_data.items()
        }
        return cls(build_types, build_kits)

    @property
    def build_types(self) -> Mapping[str, BuildTypeProfile]:
        return self._build_types

    @property
    def build_kits(self) -> Mapping[str, BuildKit]:
        return self._build_kits

    def build_type(self, name: Optional[str]) -> BuildTypeProfile:
        if name is None or name not in self._build_types:
            raise UnknownSelectionError("build type", str(name))
        return self._build_types[name]

    def build_kit(self, name: Optional[str]) -> BuildKit:
        if name is None or name not in self._build_kits:
            raise UnknownSelectionError("build kit", str(name))
        return self._build_kits[name]

    def build_type_names(self) -> List[str]:
        return list(self._build_types)

    def build_kit_names(self) -> List[str]:
        return list(self._build_kits)

    def __repr__(self) -> str:
        return (
            f"ConfigRegistry(build_types={self.build_type_names()}, "
            f"build_kits={self.build_kit_names()})"
        )
