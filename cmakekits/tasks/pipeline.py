"""
Task pipeline engine.

A pipeline is an ordered list of steps. Running it moves through

    PENDING -> RUNNING -> SUCCEEDED | FAILED | ABORTED

Steps run strictly in order. A pipeline may declare a precondition that is
checked before any step is built; when it fails nothing runs. The first
step that cannot produce an invocation, or whose invocation the executor
reports as failed, ends the pipeline in FAILED and no later step runs.
A cancelled execution ends it in ABORTED. Only SUCCEEDED fires the
pipeline's post-success hook, exactly once, after the last step.

Example:
    >>> engine = PipelineEngine(executor)
    >>> result = engine.run(module.tasks["run"], context)
    >>> result.state
    <PipelineState.SUCCEEDED: 'succeeded'>
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from cmakekits.core.exceptions import CMakeKitsError, ExecutionAbortedError
from cmakekits.core.interfaces import Executor, LoggingNotifier, Notifier
from cmakekits.tasks.context import TaskContext
from cmakekits.tasks.invocation import Invocation

logger = logging.getLogger(__name__)

Hook = Callable[[], None]
HookFactory = Callable[[TaskContext], Hook]
Precondition = Callable[[TaskContext], None]


class PipelineState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class TaskStep:
    """A named invocation producer."""

    name: str
    function: Callable[[TaskContext], Invocation]

    def build(self, context: TaskContext) -> Invocation:
        return self.function(context)


@dataclass(frozen=True)
class TaskPipeline:
    """
    Named ordered sequence of steps.

    Attributes:
        name: Task name
        steps: Steps, run in order
        hook_factory: Builds the post-success hook for a run (optional)
        precondition: Raises CMakeKitsError when the task cannot start
            (optional); checked before the first step
    """

    name: str
    steps: Tuple[TaskStep, ...]
    hook_factory: Optional[HookFactory] = None
    precondition: Optional[Precondition] = None

    def __post_init__(self):
        if not self.steps:
            raise ValueError(f'Pipeline "{self.name}" has no steps')


@dataclass
class PipelineResult:
    """
    Outcome of one pipeline run.

    Attributes:
        task: Task name
        state: Current (finally: terminal) state
        step_index: Index of the step running or the step that failed
            (None when the precondition failed)
        cause: Exception or message explaining FAILED / ABORTED
        invocations: Invocations handed to the executor, in order
        on_success: Post-success hook, set only on SUCCEEDED
        hook_fired: Whether on_success has been called
    """

    task: str
    state: PipelineState = PipelineState.PENDING
    step_index: Optional[int] = None
    cause: Optional[object] = None
    invocations: List[Invocation] = field(default_factory=list)
    on_success: Optional[Hook] = None
    hook_fired: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.SUCCEEDED


class PipelineEngine:
    """Runs pipelines through an executor."""

    def __init__(
        self,
        executor: Executor,
        notifier: Optional[Notifier] = None,
        fire_hooks: bool = True,
    ):
        """
        Args:
            executor: Runs each step's invocation
            notifier: Receives failure reports (default: logging)
            fire_hooks: Set to False to skip post-success hooks (dry runs)
        """
        self.executor = executor
        self.notifier = notifier or LoggingNotifier()
        self.fire_hooks = fire_hooks

    def run(self, pipeline: TaskPipeline, context: TaskContext) -> PipelineResult:
        """
        Run a pipeline to a terminal state.

        Args:
            pipeline: Pipeline to run
            context: Context given to every step

        Returns:
            PipelineResult in SUCCEEDED, FAILED or ABORTED state
        """
        result = PipelineResult(task=pipeline.name)
        result.state = PipelineState.RUNNING
        logger.debug(f"Running task {pipeline.name}")

        try:
            self._check_precondition(pipeline, context)
        except CMakeKitsError as e:
            return self._fail(result, e)

        for index, step in enumerate(pipeline.steps):
            result.step_index = index

            try:
                invocation = step.build(context)
            except CMakeKitsError as e:
                return self._fail(result, e)

            result.invocations.append(invocation)
            logger.info(f"[{pipeline.name}] {invocation}")

            try:
                succeeded = self.executor.execute(invocation)
            except ExecutionAbortedError as e:
                result.state = PipelineState.ABORTED
                result.cause = e
                self.notifier.notify(
                    f'Task "{pipeline.name}" aborted: {e}', logging.WARNING
                )
                return result

            if not succeeded:
                return self._fail(
                    result, f'Step "{step.name}" of task "{pipeline.name}" failed'
                )

        result.state = PipelineState.SUCCEEDED
        if pipeline.hook_factory is not None:
            try:
                result.on_success = pipeline.hook_factory(context)
            except CMakeKitsError as e:
                self.notifier.notify(
                    f'Post-success hook of task "{pipeline.name}" unavailable: {e}',
                    logging.WARNING,
                )
            else:
                if self.fire_hooks:
                    self._fire_hook(result)
        return result

    def build_invocation(
        self, pipeline: TaskPipeline, context: TaskContext
    ) -> Optional[Invocation]:
        """
        Build the first step's invocation without executing anything.

        The precondition is checked first.

        Returns:
            The invocation, or None if it cannot be built (reported)
        """
        try:
            self._check_precondition(pipeline, context)
            return pipeline.steps[0].build(context)
        except CMakeKitsError as e:
            self.notifier.notify(str(e))
            return None

    def _check_precondition(
        self, pipeline: TaskPipeline, context: TaskContext
    ) -> None:
        if pipeline.precondition is not None:
            pipeline.precondition(context)

    def _fail(self, result: PipelineResult, cause) -> PipelineResult:
        result.state = PipelineState.FAILED
        result.cause = cause
        self.notifier.notify(str(cause))
        return result

    def _fire_hook(self, result: PipelineResult) -> None:
        if result.hook_fired or result.on_success is None:
            return
        result.hook_fired = True
        try:
            result.on_success()
        except (CMakeKitsError, OSError) as e:
            self.notifier.notify(
                f'Post-success hook of task "{result.task}" failed: {e}',
                logging.WARNING,
            )
