"""Registry and task context fixtures.

Provides a registry with two build types and three build kits covering
the interesting kit shapes: explicit compilers, toolchain file with cache
defines overriding a build type's, and a multi-config generator that is
not build type aware.
"""

import pytest

from cmakekits.config.parser import ModuleSettings
from cmakekits.config.registry import ConfigRegistry
from cmakekits.core.platform import PlatformInfo
from cmakekits.tasks.context import Selection, TaskContext

SAMPLE_CONFIG = {
    "build_types": {
        "Debug": {"build_type": "Debug"},
        "Release": {
            "build_type": "Release",
            "cmake_usr_args": {"ENABLE_LTO": "ON", "WARNINGS_AS_ERRORS": "OFF"},
            "environment_variables": {"CFLAGS": "-O2"},
        },
    },
    "build_kits": {
        "gcc": {
            "compilers": {"C": "gcc", "CXX": "g++"},
            "environment_variables": {"CCACHE_DIR": "/tmp/ccache"},
        },
        "clang": {
            "compilers": {"C": "clang", "CXX": "clang++"},
            "toolchain_file": "/opt/cmake/clang.cmake",
            "cmake_usr_args": {"WARNINGS_AS_ERRORS": "ON", "USE_LIBCXX": "ON"},
        },
        "vs2022": {
            "generator": "Visual Studio 17 2022",
            "build_type_aware": False,
        },
    },
}


@pytest.fixture
def sample_registry() -> ConfigRegistry:
    """Registry built from SAMPLE_CONFIG."""
    return ConfigRegistry.from_mapping(SAMPLE_CONFIG)


@pytest.fixture
def linux_platform() -> PlatformInfo:
    return PlatformInfo(os="linux", cpu_count=8)


@pytest.fixture
def make_context(sample_registry, cmake_project, linux_platform):
    """
    Factory for task contexts rooted at the sample CMake project.

    Example:
        def test_build(make_context):
            context = make_context(build_kit="clang", target="app")
    """

    def _make(
        build_type="Debug",
        build_kit="gcc",
        target=None,
        current_file=None,
        settings=None,
        platform=None,
    ) -> TaskContext:
        return TaskContext(
            registry=sample_registry,
            selection=Selection(
                build_type=build_type,
                build_kit=build_kit,
                target=target,
                current_file=current_file,
            ),
            settings=settings or ModuleSettings(),
            cwd=cmake_project,
            platform=platform or linux_platform,
        )

    return _make
