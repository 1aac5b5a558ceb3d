"""
Task functions.

Each function takes a TaskContext and returns one Invocation, or raises a
CMakeKitsError describing why no invocation can be produced. They are the
leaves the pipelines in ``cmakekits.tasks.module`` are built from.
"""

import dataclasses
import logging
from pathlib import Path

from cmakekits.cmake.api import ALL_TARGET
from cmakekits.config.registry import DEFAULT_GENERATOR
from cmakekits.core.exceptions import (
    IOFailureError,
    NoTargetSelectedError,
    NotASourceFileError,
    NotConfiguredError,
    TargetNotBuiltError,
    UnsupportedGeneratorError,
)
from cmakekits.core.filesystem import ensure_directory
from cmakekits.tasks.context import TaskContext
from cmakekits.tasks.invocation import Invocation

logger = logging.getLogger(__name__)

HEADER_EXTENSIONS = frozenset({"h", "hxx", "hpp"})

# Ninja names the object rule of a source file "<absolute path>^"
NINJA_SOURCE_TARGET_SUFFIX = "^"


def _env(mapping):
    return dict(mapping) if mapping else None


def configure(context: TaskContext) -> Invocation:
    """Create the build tree with its File API query and configure it."""
    spec = context.spec()

    try:
        ensure_directory(spec.build_dir)
    except OSError as e:
        raise IOFailureError(f'Unable to create "{spec.build_dir}": {e}')

    api = context.file_api(spec.build_dir)
    if not api.ensure_query_stub():
        raise IOFailureError(f'Unable to create CMake API query in "{api.query_dir}"')

    return Invocation(
        command=context.settings.cmd,
        arguments=spec.arguments,
        env=_env(spec.type_environment),
    )


def build(context: TaskContext) -> Invocation:
    """Build the selected target (everything when none or ``all``)."""
    spec = context.spec()

    args = ["--build", str(spec.build_dir)]
    target = context.selection.target
    if target and target != ALL_TARGET:
        args.extend(["--target", target])

    return Invocation(
        command=context.settings.cmd,
        arguments=tuple(args),
        env=_env(spec.kit_environment),
    )


def build_all(context: TaskContext) -> Invocation:
    """Build everything regardless of the selected target."""
    spec = context.spec()
    return Invocation(
        command=context.settings.cmd,
        arguments=("--build", str(spec.build_dir)),
        env=_env(spec.kit_environment),
    )


def build_current_file(context: TaskContext) -> Invocation:
    """Compile only the object file of the current source file (Ninja only)."""
    source = context.selection.current_file
    if source is None:
        raise NotASourceFileError(None)

    source = Path(source)
    extension = source.suffix[1:]
    if not extension or extension in HEADER_EXTENSIONS:
        raise NotASourceFileError(source)

    spec = context.spec()
    if spec.generator != DEFAULT_GENERATOR:
        raise UnsupportedGeneratorError(spec.generator, DEFAULT_GENERATOR)

    if not source.is_absolute():
        source = context.cwd / source
    ninja_target = f"{source.resolve()}{NINJA_SOURCE_TARGET_SUFFIX}"

    return Invocation(
        command=context.settings.cmd,
        arguments=("--build", str(spec.build_dir), "--target", ninja_target),
        env=_env(spec.kit_environment),
    )


def clean(context: TaskContext) -> Invocation:
    spec = context.spec()
    return Invocation(
        command=context.settings.cmd,
        arguments=("--build", str(spec.build_dir), "--target", "clean"),
        env=_env(spec.kit_environment),
    )


def purge(context: TaskContext) -> Invocation:
    """Remove the whole build directory."""
    build_dir = str(context.spec().build_dir)

    if context.platform.is_windows:
        return Invocation(
            command="cmd", arguments=("/c", "rmdir", "/s", "/q", build_dir)
        )
    return Invocation(command="rm", arguments=("-rf", build_dir))


def ctest(context: TaskContext) -> Invocation:
    spec = context.spec()
    return Invocation(
        command="ctest",
        arguments=(
            "-C",
            spec.build_type,
            "-j",
            str(context.platform.cpu_count),
            "--output-on-failure",
        ),
        cwd=spec.build_dir,
        env=_env(spec.kit_environment),
    )


def check_runnable(context: TaskContext) -> None:
    """
    Check that a target is selected and its build tree exists.

    The run and debug pipelines check this before building anything.

    Raises:
        NoTargetSelectedError: If no target is selected
        NotConfiguredError: If the build directory does not exist
    """
    if not context.selection.target:
        raise NoTargetSelectedError()

    build_dir = context.spec().build_dir
    if not build_dir.is_dir():
        raise NotConfiguredError(build_dir)


def run(context: TaskContext) -> Invocation:
    """
    Run the executable of the selected target.

    Raises:
        NoTargetSelectedError: If no target is selected
        NotConfiguredError: If the build directory does not exist
        TargetNotBuiltError: If the executable has not been built yet
    """
    check_runnable(context)

    target = context.selection.target
    spec = context.spec()

    api = context.file_api(spec.build_dir)
    target_path = api.resolve_executable_path(target, build_type=spec.build_type)
    if not target_path.is_file():
        raise TargetNotBuiltError(target_path)

    logger.debug(f"Resolved target {target} to {target_path}")
    return Invocation(command=str(target_path), cwd=target_path.parent)


def debug(context: TaskContext) -> Invocation:
    """Same as ``run``, tagged with the debug adapter to launch it under."""
    return dataclasses.replace(run(context), dap_name=context.settings.dap_name)
