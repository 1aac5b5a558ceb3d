"""
cmakekits CLI argument parser.

This module implements the command-line interface for cmakekits using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cmakekits.tasks.module import build_tasks

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("cmakekits")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

TASK_NAMES = list(build_tasks())
PARAM_NAMES = ["target", "build_type", "build_kit"]


class CLI:
    """cmakekits command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="cmakekits",
            description="cmakekits - CMake tasks driven by build kits and build types",
            epilog='Use "cmakekits COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"cmakekits {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./cmakekits.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_run_command(subparsers)
        self._add_params_command(subparsers)
        self._add_tasks_command(subparsers)

        return parser

    @staticmethod
    def _add_selection_arguments(parser):
        """Add build type / kit / target selection options."""
        parser.add_argument(
            "--build-type",
            "-t",
            metavar="NAME",
            help="Build type (default: first one in the configuration)",
        )
        parser.add_argument(
            "--build-kit",
            "-k",
            metavar="NAME",
            help="Build kit (default: first one in the configuration)",
        )
        parser.add_argument(
            "--target",
            metavar="NAME",
            help="Target for build, run and debug",
        )

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Run a task",
            description="Run a task pipeline (configure, build, run, ...)",
        )
        parser.add_argument(
            "task",
            choices=TASK_NAMES,
            metavar="TASK",
            help=f"Task to run ({'|'.join(TASK_NAMES)})",
        )
        self._add_selection_arguments(parser)
        parser.add_argument(
            "--file",
            type=Path,
            metavar="PATH",
            help="Source file for build_current_file",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the commands instead of running them",
        )

    def _add_params_command(self, subparsers):
        """Add 'params' subcommand."""
        parser = subparsers.add_parser(
            "params",
            help="List selectable parameter values",
            description="List targets, build types and build kits",
        )
        parser.add_argument(
            "param",
            nargs="?",
            choices=PARAM_NAMES,
            metavar="PARAM",
            help=f"Parameter to list ({'|'.join(PARAM_NAMES)}) [default: all]",
        )
        self._add_selection_arguments(parser)

    def _add_tasks_command(self, subparsers):
        """Add 'tasks' subcommand."""
        subparsers.add_parser(
            "tasks",
            help="List available tasks",
            description="List available tasks and their steps",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "run": "cmakekits.cli.commands.run",
            "params": "cmakekits.cli.commands.params",
            "tasks": "cmakekits.cli.commands.tasks",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
