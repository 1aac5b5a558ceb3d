"""
Centralized exception hierarchy for cmakekits.

Every failure a task can report derives from CMakeKitsError, so the
pipeline engine can turn any of them into "no invocation" without
catching unrelated errors.
"""

from pathlib import Path
from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class CMakeKitsError(Exception):
    """Base exception for all cmakekits errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(CMakeKitsError):
    """Configuration parsing or validation error."""

    pass


class UnknownSelectionError(ConfigError):
    """Raised when a selected build type or build kit is not registered."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f'Unknown {kind} "{name}"')


# ============================================================================
# Introspection Exceptions
# ============================================================================


class IntrospectionError(CMakeKitsError):
    """Base exception for CMake File API errors."""

    pass


class NotConfiguredError(IntrospectionError):
    """Raised when the build directory does not exist yet."""

    def __init__(self, build_dir: Path):
        self.build_dir = build_dir
        super().__init__(
            f'Build directory "{build_dir}" does not exist, '
            'you need to run "configure" task first'
        )


class NoReplyError(IntrospectionError):
    """Raised when CMake has not written a File API reply."""

    pass


class ReplyParseError(NoReplyError):
    """Raised when a reply file exists but cannot be parsed."""

    pass


class TargetNotFoundError(IntrospectionError):
    """Raised when no target of the given name is in the codemodel."""

    def __init__(self, target_name: str):
        self.target_name = target_name
        super().__init__(f'Unable to find target named "{target_name}"')


class WrongKindError(IntrospectionError):
    """Raised when a target is not an executable."""

    def __init__(self, target_name: str, kind: str):
        self.target_name = target_name
        self.kind = kind
        super().__init__(
            f'Specified target "{target_name}" is not an executable ({kind})'
        )


# ============================================================================
# Task Exceptions
# ============================================================================


class TaskError(CMakeKitsError):
    """Base exception for task precondition failures."""

    pass


class NoTargetSelectedError(TaskError):
    """Raised when a task needs a target and none is selected."""

    def __init__(self):
        super().__init__('No selected target, please set "target" parameter')


class TargetNotBuiltError(TaskError):
    """Raised when a resolved executable does not exist on disk."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'Selected target "{path}" is not built')


class NotASourceFileError(TaskError):
    """Raised when build_current_file is given a header or extensionless file."""

    def __init__(self, path: Optional[Path]):
        self.path = path
        if path is None:
            super().__init__("No file given, cannot build current file")
        else:
            super().__init__(f'Given file "{path}" is not a source file!')


class UnsupportedGeneratorError(TaskError):
    """Raised when a task needs a generator feature the kit does not have."""

    def __init__(self, generator: str, required: str = "Ninja"):
        self.generator = generator
        self.required = required
        super().__init__(
            f"Build current file is supported only for {required} generator "
            f'at the moment! (kit uses "{generator}")'
        )


class IOFailureError(TaskError):
    """Raised when creating or removing files in the build tree fails."""

    pass


# ============================================================================
# Execution Exceptions
# ============================================================================


class ExecutionAbortedError(CMakeKitsError):
    """Raised by an executor when a running pipeline is cancelled."""

    pass
