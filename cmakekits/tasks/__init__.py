"""
Task definitions and the pipeline engine for cmakekits.
"""

from cmakekits.tasks.invocation import Invocation
from cmakekits.tasks.context import Selection, TaskContext
from cmakekits.tasks.pipeline import (
    PipelineEngine,
    PipelineResult,
    PipelineState,
    TaskPipeline,
    TaskStep,
)
from cmakekits.tasks.module import PROJECT_MARKER, CMakeKitsModule, build_tasks

__all__ = [
    "Invocation",
    "Selection",
    "TaskContext",
    "PipelineEngine",
    "PipelineResult",
    "PipelineState",
    "TaskPipeline",
    "TaskStep",
    "PROJECT_MARKER",
    "CMakeKitsModule",
    "build_tasks",
]
