"""
Run command implementation.

Runs one task pipeline for the selected build type, build kit and target.
"""

import logging
from pathlib import Path

from cmakekits.cli.executor import DryRunExecutor, SubprocessExecutor
from cmakekits.cli.utils import (
    load_project_config,
    make_module,
    make_selection,
    print_error,
)
from cmakekits.core.exceptions import ConfigError
from cmakekits.tasks.module import PROJECT_MARKER
from cmakekits.tasks.pipeline import PipelineState

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error, 130 if aborted)
    """
    project_root = Path(args.project_root).resolve()

    try:
        config = load_project_config(project_root, args.config)
    except ConfigError as e:
        logger.error(f"Failed to load configuration: {e}")
        print_error("Failed to load configuration", str(e))
        return 1

    module = make_module(project_root, config)
    if not module.condition():
        print_error(
            "Not a CMake project", f"No {PROJECT_MARKER} found in {project_root}"
        )
        return 1

    selection = make_selection(args, config)
    logger.debug(f"Selection: {selection}")

    if args.dry_run:
        executor = DryRunExecutor()
    else:
        executor = SubprocessExecutor(cwd=project_root)

    result = module.run_task(
        args.task, selection, executor, fire_hooks=not args.dry_run
    )
    if result is None:
        return 1
    if result.state is PipelineState.ABORTED:
        return 130
    if not result.succeeded:
        return 1

    logger.info(f'Task "{args.task}" finished')
    return 0
