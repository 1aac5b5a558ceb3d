"""
Core interfaces for cmakekits.

This module defines the abstract interfaces of the collaborators the task
engine hands work to. The engine only builds invocations and reports
problems; running processes and showing messages to the user are done by
whatever implements these interfaces (the CLI, an editor integration, a
test double).
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger("cmakekits")


class Executor(ABC):
    """
    Abstract interface for running invocations.

    Implementations spawn the process described by an invocation, stream
    its output and report whether it succeeded.
    """

    @abstractmethod
    def execute(self, invocation) -> bool:
        """
        Run one invocation to completion.

        Args:
            invocation: The Invocation to run

        Returns:
            True if the process succeeded, False otherwise

        Raises:
            ExecutionAbortedError: If the run was cancelled
        """
        pass


class Notifier(ABC):
    """
    Abstract interface for reporting task failures to the user.

    Notifications never stop the host process.
    """

    @abstractmethod
    def notify(self, message: str, level: int = logging.ERROR) -> None:
        """
        Report a message.

        Args:
            message: Human readable message
            level: ``logging`` level of the message
        """
        pass


class LoggingNotifier(Notifier):
    """Notifier that writes to the ``cmakekits`` logger."""

    def notify(self, message: str, level: int = logging.ERROR) -> None:
        logger.log(level, message)
