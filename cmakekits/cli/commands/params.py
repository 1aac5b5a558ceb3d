"""
Params command implementation.

Lists the values a task parameter can take: registered build types and
build kits, and the targets of the selected build tree.
"""

import logging
from pathlib import Path

from cmakekits.cli.utils import (
    load_project_config,
    make_module,
    make_selection,
    print_error,
)
from cmakekits.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the params command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    project_root = Path(args.project_root).resolve()

    try:
        config = load_project_config(project_root, args.config)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    module = make_module(project_root, config)
    selection = make_selection(args, config)

    names = [args.param] if args.param else list(module.params)
    exit_code = 0
    for name in names:
        values = module.params[name](selection)
        if values is None:
            exit_code = 1
            continue

        if len(names) == 1:
            for value in values:
                print(value)
        else:
            print(f"{name}:")
            for value in values:
                print(f"  {value}")

    return exit_code
