"""
Task context: everything a task function may look at.

A context is built once per pipeline run. The effective invocation spec
is not stored on it; ``spec()`` resolves a fresh one on every call.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from cmakekits.cmake.api import CMakeFileAPI
from cmakekits.config.parser import ModuleSettings
from cmakekits.config.registry import ConfigRegistry
from cmakekits.config.resolver import EffectiveInvocationSpec, resolve
from cmakekits.core.platform import PlatformInfo, detect_platform


@dataclass
class Selection:
    """User selection for one task run."""

    build_type: Optional[str] = None
    build_kit: Optional[str] = None
    target: Optional[str] = None
    current_file: Optional[Path] = None


@dataclass
class TaskContext:
    """Inputs shared by the steps of a pipeline."""

    registry: ConfigRegistry
    selection: Selection
    settings: ModuleSettings = field(default_factory=ModuleSettings)
    cwd: Path = field(default_factory=Path.cwd)
    platform: PlatformInfo = field(default_factory=detect_platform)
    api_factory: Callable[[Path], CMakeFileAPI] = CMakeFileAPI

    def spec(self) -> EffectiveInvocationSpec:
        """Resolve the current selection (never cached)."""
        return resolve(
            self.registry,
            self.selection.build_type,
            self.selection.build_kit,
            settings=self.settings,
            cwd=self.cwd,
        )

    def file_api(self, build_dir: Path) -> CMakeFileAPI:
        return self.api_factory(build_dir)
