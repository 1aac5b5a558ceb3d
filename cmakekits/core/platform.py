"""
Platform detection for cmakekits.

Only the facts the task functions need are detected here: the host
operating system (to pick a directory removal command for ``purge``) and
the number of available CPUs (to size ``ctest -j``).

Usage:
    from cmakekits.core.platform import detect_platform

    info = detect_platform()
    print(f"OS: {info.os}, CPUs: {info.cpu_count}")
"""

import functools
import os
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos', or the raw name)
        cpu_count: Number of CPUs usable by this process (at least 1)
    """

    os: str
    cpu_count: int

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information
    """
    return PlatformInfo(os=_detect_os(), cpu_count=detect_cpu_count())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', or the lowercased
        ``platform.system()`` value for anything else
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    else:
        return system


def detect_cpu_count() -> int:
    """
    Detect the number of CPUs available to this process.

    Prefers the scheduler affinity mask (what ``nproc`` reports) and falls
    back to the total CPU count.

    Returns:
        CPU count, never less than 1
    """
    if hasattr(os, "sched_getaffinity"):
        try:
            return max(1, len(os.sched_getaffinity(0)))
        except OSError:
            pass
    return max(1, os.cpu_count() or 1)


def clear_platform_cache():
    """Clear the cached platform detection result (used by tests)."""
    detect_platform.cache_clear()
