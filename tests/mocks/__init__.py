"""
Mock implementations for testing cmakekits components.

This package provides recording doubles for the executor and notifier
collaborators so pipelines can run without spawning processes.
"""

from .collaborators import RecordingExecutor, RecordingNotifier

__all__ = [
    "RecordingExecutor",
    "RecordingNotifier",
]
