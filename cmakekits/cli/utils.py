"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from cmakekits.config.parser import DEFAULT_CONFIG_FILE, CMakeKitsConfig, parse_config
from cmakekits.ide.clangd import ClangdRefresher
from cmakekits.tasks.context import Selection
from cmakekits.tasks.module import CMakeKitsModule

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def config_path(project_root: Path, config_file: Optional[Path] = None) -> Path:
    """Return the configuration file to use for a project."""
    if config_file:
        return Path(config_file).resolve()
    return project_root / DEFAULT_CONFIG_FILE


def load_project_config(
    project_root: Path, config_file: Optional[Path] = None
) -> CMakeKitsConfig:
    """
    Load the cmakekits configuration of a project.

    Args:
        project_root: Project root directory
        config_file: Explicit configuration file (default: <root>/cmakekits.yaml)

    Raises:
        ConfigError: If the file is missing or invalid
    """
    path = config_path(project_root, config_file)
    logger.debug(f"Loading configuration from {path}")
    return parse_config(path)


def make_module(project_root: Path, config: CMakeKitsConfig) -> CMakeKitsModule:
    """Create the task module, with clangd refreshed after configure/build."""
    refresher = ClangdRefresher(project_root)
    return CMakeKitsModule(
        config.registry,
        config.settings,
        project_root=project_root,
        hook_factory=refresher.hook_factory,
    )


def make_selection(args, config: CMakeKitsConfig) -> Selection:
    """
    Build a Selection from parsed arguments.

    Build type and kit default to the first entry of the configuration.
    """
    build_type = getattr(args, "build_type", None)
    build_kit = getattr(args, "build_kit", None)
    if build_type is None:
        build_type = config.registry.build_type_names()[0]
    if build_kit is None:
        build_kit = config.registry.build_kit_names()[0]

    return Selection(
        build_type=build_type,
        build_kit=build_kit,
        target=getattr(args, "target", None),
        current_file=getattr(args, "file", None),
    )


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
