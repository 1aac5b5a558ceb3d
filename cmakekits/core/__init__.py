"""
Core functionality for cmakekits.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    PlatformInfo,
    detect_platform,
    detect_cpu_count,
    clear_platform_cache,
)

from .filesystem import (
    ensure_directory,
    ensure_file,
    atomic_write,
)

from .exceptions import (
    CMakeKitsError,
    ConfigError,
    UnknownSelectionError,
    IntrospectionError,
    NotConfiguredError,
    NoReplyError,
    ReplyParseError,
    TargetNotFoundError,
    WrongKindError,
    TaskError,
    NoTargetSelectedError,
    TargetNotBuiltError,
    NotASourceFileError,
    UnsupportedGeneratorError,
    IOFailureError,
    ExecutionAbortedError,
)

__all__ = [
    # Platform
    "PlatformInfo",
    "detect_platform",
    "detect_cpu_count",
    "clear_platform_cache",
    # Filesystem
    "ensure_directory",
    "ensure_file",
    "atomic_write",
    # Exceptions
    "CMakeKitsError",
    "ConfigError",
    "UnknownSelectionError",
    "IntrospectionError",
    "NotConfiguredError",
    "NoReplyError",
    "ReplyParseError",
    "TargetNotFoundError",
    "WrongKindError",
    "TaskError",
    "NoTargetSelectedError",
    "TargetNotBuiltError",
    "NotASourceFileError",
    "UnsupportedGeneratorError",
    "IOFailureError",
    "ExecutionAbortedError",
]
