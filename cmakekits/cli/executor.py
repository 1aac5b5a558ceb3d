"""
Executors used by the command-line front end.
"""

import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from cmakekits.core.exceptions import ExecutionAbortedError
from cmakekits.core.interfaces import Executor
from cmakekits.tasks.invocation import Invocation

logger = logging.getLogger(__name__)


class SubprocessExecutor(Executor):
    """
    Run invocations with ``subprocess``, streaming output to the terminal.
    """

    def __init__(self, cwd: Optional[Path] = None):
        """
        Args:
            cwd: Working directory for invocations that do not set one
        """
        self.cwd = cwd

    def execute(self, invocation: Invocation) -> bool:
        if invocation.dap_name:
            logger.warning(
                f'Debug adapter "{invocation.dap_name}" needs an editor, '
                "running without debugger"
            )

        cwd = invocation.cwd or self.cwd
        logger.debug(f"Executing {invocation} (cwd={cwd})")

        try:
            result = subprocess.run(
                list(invocation.argv), cwd=cwd, env=invocation.merged_env()
            )
        except FileNotFoundError:
            logger.error(f"{invocation.command} not found in PATH")
            return False
        except OSError as e:
            logger.error(f"Failed to execute {invocation.command}: {e}")
            return False
        except KeyboardInterrupt:
            raise ExecutionAbortedError("Interrupted by user")

        if result.returncode != 0:
            logger.error(
                f"{invocation.command} failed with exit code {result.returncode}"
            )
            return False
        return True


class DryRunExecutor(Executor):
    """Print invocations instead of running them; every step succeeds."""

    def __init__(self, out=None):
        self.out = out or sys.stdout
        self.invocations: List[Invocation] = []

    def execute(self, invocation: Invocation) -> bool:
        self.invocations.append(invocation)
        line = str(invocation)
        if invocation.cwd:
            line = f"(cd {invocation.cwd}) {line}"
        if invocation.env:
            env = " ".join(f"{k}={v}" for k, v in invocation.env.items())
            line = f"{env} {line}"
        print(line, file=self.out)
        return True
