"""
CMake integration module for cmakekits.

This module provides access to the CMake File API of a build tree.
"""

from .api import (
    ALL_TARGET,
    EXECUTABLE_KIND,
    CMakeFileAPI,
    Target,
)

__all__ = [
    "ALL_TARGET",
    "EXECUTABLE_KIND",
    "CMakeFileAPI",
    "Target",
]
