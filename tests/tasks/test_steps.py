"""
Tests for the individual task functions.
"""

from pathlib import Path

import pytest

from cmakekits.config.parser import ModuleSettings
from cmakekits.core.exceptions import (
    IOFailureError,
    NoTargetSelectedError,
    NotASourceFileError,
    NotConfiguredError,
    TargetNotBuiltError,
    UnknownSelectionError,
    UnsupportedGeneratorError,
    WrongKindError,
)
from cmakekits.core.platform import PlatformInfo
from cmakekits.tasks import steps
from tests.utils.builders import ReplyBuilder


@pytest.fixture
def build_dir(cmake_project) -> Path:
    return cmake_project / "build" / "gcc" / "Debug"


@pytest.fixture
def built_app(build_dir) -> Path:
    """Configured tree with an 'app' executable that has been built."""
    ReplyBuilder(build_dir).with_target("app", artifact="bin/app").with_target(
        "core", kind="STATIC_LIBRARY", artifact="libcore.a"
    ).write()
    executable = build_dir / "bin" / "app"
    executable.parent.mkdir(parents=True)
    executable.write_text("")
    return executable


class TestConfigure:
    def test_creates_build_dir_and_query(self, make_context, build_dir):
        invocation = steps.configure(make_context())

        assert build_dir.is_dir()
        query = build_dir / ".cmake" / "api" / "v1" / "query"
        assert (query / "codemodel-v2").is_file()
        assert invocation.command == "cmake"
        assert invocation.arguments[:4] == ("-G", "Ninja", "-B", str(build_dir))

    def test_uses_build_type_environment(self, make_context):
        invocation = steps.configure(make_context(build_type="Release"))
        assert invocation.env == {"CFLAGS": "-O2"}

    def test_no_environment(self, make_context):
        assert steps.configure(make_context()).env is None

    def test_custom_cmake_command(self, make_context):
        settings = ModuleSettings(cmd="/opt/cmake/bin/cmake")
        assert steps.configure(make_context(settings=settings)).command == (
            "/opt/cmake/bin/cmake"
        )

    def test_query_failure(self, make_context, cmake_project):
        # Build tree path blocked by a regular file
        settings = ModuleSettings(build_dir="{cwd}/blocked")
        (cmake_project / "blocked").write_text("")

        with pytest.raises(IOFailureError):
            steps.configure(make_context(settings=settings))

    def test_unknown_kit(self, make_context):
        with pytest.raises(UnknownSelectionError):
            steps.configure(make_context(build_kit="icc"))


class TestBuild:
    def test_selected_target(self, make_context, build_dir):
        invocation = steps.build(make_context(target="app"))

        assert invocation.arguments == ("--build", str(build_dir), "--target", "app")
        assert invocation.env == {"CCACHE_DIR": "/tmp/ccache"}

    @pytest.mark.parametrize("target", [None, "all"])
    def test_everything(self, make_context, build_dir, target):
        invocation = steps.build(make_context(target=target))
        assert invocation.arguments == ("--build", str(build_dir))

    def test_build_all_ignores_target(self, make_context, build_dir):
        invocation = steps.build_all(make_context(target="app"))
        assert invocation.arguments == ("--build", str(build_dir))

    def test_clean(self, make_context, build_dir):
        invocation = steps.clean(make_context())
        assert invocation.arguments == ("--build", str(build_dir), "--target", "clean")


class TestBuildCurrentFile:
    def test_source_file(self, make_context, cmake_project, build_dir):
        source = cmake_project / "src" / "main.cpp"

        invocation = steps.build_current_file(make_context(current_file=source))

        assert invocation.arguments == (
            "--build",
            str(build_dir),
            "--target",
            f"{source}^",
        )

    def test_relative_path_made_absolute(self, make_context, cmake_project):
        invocation = steps.build_current_file(
            make_context(current_file=Path("src/main.cpp"))
        )
        assert invocation.arguments[-1] == f"{cmake_project / 'src' / 'main.cpp'}^"

    @pytest.mark.parametrize("name", ["app.h", "app.hxx", "app.hpp", "Makefile"])
    def test_not_a_source_file(self, make_context, cmake_project, name):
        with pytest.raises(NotASourceFileError):
            steps.build_current_file(make_context(current_file=cmake_project / name))

    def test_no_file(self, make_context):
        with pytest.raises(NotASourceFileError, match="No file given"):
            steps.build_current_file(make_context())

    def test_non_ninja_generator(self, make_context, cmake_project):
        context = make_context(
            build_kit="vs2022", current_file=cmake_project / "src" / "main.cpp"
        )

        with pytest.raises(UnsupportedGeneratorError, match="Ninja"):
            steps.build_current_file(context)

    def test_header_checked_before_generator(self, make_context, cmake_project):
        context = make_context(
            build_kit="vs2022", current_file=cmake_project / "include" / "app.hpp"
        )

        with pytest.raises(NotASourceFileError):
            steps.build_current_file(context)


class TestPurge:
    def test_posix(self, make_context, build_dir):
        invocation = steps.purge(make_context())

        assert invocation.command == "rm"
        assert invocation.arguments == ("-rf", str(build_dir))

    def test_windows(self, make_context, build_dir):
        context = make_context(platform=PlatformInfo(os="windows", cpu_count=4))

        invocation = steps.purge(context)

        assert invocation.command == "cmd"
        assert invocation.arguments == ("/c", "rmdir", "/s", "/q", str(build_dir))


class TestCTest:
    def test_arguments(self, make_context, build_dir):
        invocation = steps.ctest(make_context(build_type="Release"))

        assert invocation.command == "ctest"
        assert invocation.arguments == (
            "-C",
            "Release",
            "-j",
            "8",
            "--output-on-failure",
        )
        assert invocation.cwd == build_dir.parent / "Release"
        assert invocation.env == {"CCACHE_DIR": "/tmp/ccache"}


class TestCheckRunnable:
    def test_no_target(self, make_context, build_dir):
        build_dir.mkdir(parents=True)

        with pytest.raises(NoTargetSelectedError):
            steps.check_runnable(make_context())

    def test_not_configured(self, make_context):
        with pytest.raises(NotConfiguredError):
            steps.check_runnable(make_context(target="app"))

    def test_build_tree_is_enough(self, make_context, build_dir):
        # The executable need not exist yet, the build step produces it
        build_dir.mkdir(parents=True)
        assert steps.check_runnable(make_context(target="app")) is None


class TestRun:
    def test_no_target(self, make_context):
        with pytest.raises(NoTargetSelectedError):
            steps.run(make_context())

    def test_not_configured(self, make_context):
        with pytest.raises(NotConfiguredError):
            steps.run(make_context(target="app"))

    def test_not_built(self, make_context, build_dir):
        ReplyBuilder(build_dir).with_target("app", artifact="bin/app").write()

        with pytest.raises(TargetNotBuiltError, match="is not built"):
            steps.run(make_context(target="app"))

    def test_wrong_kind(self, make_context, built_app):
        with pytest.raises(WrongKindError):
            steps.run(make_context(target="core"))

    def test_runs_executable(self, make_context, built_app):
        invocation = steps.run(make_context(target="app"))

        assert invocation.command == str(built_app)
        assert invocation.arguments == ()
        assert invocation.cwd == built_app.parent
        assert invocation.dap_name is None

    def test_debug_adds_dap_name(self, make_context, built_app):
        settings = ModuleSettings(dap_name="codelldb")

        invocation = steps.debug(make_context(target="app", settings=settings))

        assert invocation.command == str(built_app)
        assert invocation.dap_name == "codelldb"
