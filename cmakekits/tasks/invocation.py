"""
Process invocation contract.

An Invocation is the only thing a task function produces: a command line
plus where and with which extra environment to run it. Spawning the
process is the executor's job.
"""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Invocation:
    """
    A process to run.

    Attributes:
        command: Executable name or path
        arguments: Arguments, in order
        cwd: Working directory (None: the executor's current directory)
        env: Variables to set on top of the inherited environment
        dap_name: Debug adapter to launch the command under (debug task only)
    """

    command: str
    arguments: Tuple[str, ...] = ()
    cwd: Optional[Path] = None
    env: Optional[Dict[str, str]] = None
    dap_name: Optional[str] = None

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.command,) + tuple(self.arguments)

    def merged_env(self, base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """
        Overlay ``env`` on an inherited environment.

        Args:
            base: Inherited environment (default: ``os.environ``)

        Returns:
            New environment mapping; ``base`` is not modified
        """
        merged = dict(os.environ if base is None else base)
        if self.env:
            merged.update(self.env)
        return merged

    def __str__(self) -> str:
        return shlex.join(self.argv)
