"""
CMake kits task module.

Ties the registry, the task functions and the pipeline engine together
into the surface a task runner (CLI, editor) consumes:

- ``condition()``: whether the project root is a CMake project at all
- ``params``: enumerators for ``target``, ``build_type`` and ``build_kit``
- ``tasks``: the named pipelines
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from cmakekits.cmake.api import CMakeFileAPI
from cmakekits.config.parser import ModuleSettings
from cmakekits.config.registry import ConfigRegistry
from cmakekits.core.exceptions import CMakeKitsError
from cmakekits.core.interfaces import Executor, LoggingNotifier, Notifier
from cmakekits.tasks import steps
from cmakekits.tasks.context import Selection, TaskContext
from cmakekits.tasks.pipeline import (
    HookFactory,
    PipelineEngine,
    PipelineResult,
    TaskPipeline,
    TaskStep,
)

logger = logging.getLogger(__name__)

PROJECT_MARKER = "CMakeLists.txt"

CONFIGURE = TaskStep("configure", steps.configure)
BUILD = TaskStep("build", steps.build)
BUILD_ALL = TaskStep("build_all", steps.build_all)
BUILD_CURRENT_FILE = TaskStep("build_current_file", steps.build_current_file)
CLEAN = TaskStep("clean", steps.clean)
PURGE = TaskStep("purge", steps.purge)
CTEST = TaskStep("ctest", steps.ctest)
RUN = TaskStep("run", steps.run)
DEBUG = TaskStep("debug", steps.debug)


def build_tasks(hook_factory: Optional[HookFactory] = None) -> Dict[str, TaskPipeline]:
    """
    Define the task pipelines.

    Args:
        hook_factory: Post-success hook for configure, build and reconfigure

    Returns:
        Mapping of task name to pipeline, in display order
    """
    return {
        "configure": TaskPipeline("configure", (CONFIGURE,), hook_factory),
        "build": TaskPipeline("build", (BUILD,), hook_factory),
        "build_all": TaskPipeline("build_all", (BUILD_ALL,)),
        "build_current_file": TaskPipeline("build_current_file", (BUILD_CURRENT_FILE,)),
        "run": TaskPipeline("run", (BUILD, RUN), precondition=steps.check_runnable),
        "debug": TaskPipeline(
            "debug", (BUILD, DEBUG), precondition=steps.check_runnable
        ),
        "clean": TaskPipeline("clean", (CLEAN,)),
        "ctest": TaskPipeline("ctest", (CTEST,)),
        "purge": TaskPipeline("purge", (PURGE,)),
        "reconfigure": TaskPipeline("reconfigure", (PURGE, CONFIGURE), hook_factory),
    }


class CMakeKitsModule:
    """
    Task surface for one CMake project.

    Example:
        >>> module = CMakeKitsModule(registry, project_root=Path("."))
        >>> module.params["build_kit"](Selection())
        ['gcc', 'clang']
        >>> module.run_task("build", Selection("Debug", "gcc"), executor)
    """

    def __init__(
        self,
        registry: ConfigRegistry,
        settings: Optional[ModuleSettings] = None,
        project_root: Optional[Path] = None,
        hook_factory: Optional[HookFactory] = None,
        notifier: Optional[Notifier] = None,
        api_factory: Callable[[Path], CMakeFileAPI] = CMakeFileAPI,
    ):
        self.registry = registry
        self.settings = settings or ModuleSettings()
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.notifier = notifier or LoggingNotifier()
        self.api_factory = api_factory
        self.tasks = build_tasks(hook_factory)

    @property
    def params(self) -> Dict[str, Callable[[Selection], Optional[List[str]]]]:
        return {
            "target": self.target_names,
            "build_type": lambda _selection: self.registry.build_type_names(),
            "build_kit": lambda _selection: self.registry.build_kit_names(),
        }

    def condition(self) -> bool:
        """True when the project root holds a CMakeLists.txt."""
        return (self.project_root / PROJECT_MARKER).exists()

    def context(self, selection: Selection) -> TaskContext:
        return TaskContext(
            registry=self.registry,
            selection=selection,
            settings=self.settings,
            cwd=self.project_root,
            api_factory=self.api_factory,
        )

    def target_names(self, selection: Selection) -> Optional[List[str]]:
        """
        Enumerate the targets of the selected build tree.

        Returns:
            Target names with ``all`` last, or None if they cannot be
            determined (the reason is reported)
        """
        try:
            spec = self.context(selection).spec()
            api = self.api_factory(spec.build_dir)
            return api.target_names(build_type=spec.build_type)
        except CMakeKitsError as e:
            self.notifier.notify(str(e))
            return None

    def run_task(
        self,
        name: str,
        selection: Selection,
        executor: Executor,
        fire_hooks: bool = True,
    ) -> Optional[PipelineResult]:
        """
        Run a task by name.

        Returns:
            PipelineResult, or None if this is not a CMake project or the
            task is unknown
        """
        if not self.condition():
            logger.debug(f"No {PROJECT_MARKER} in {self.project_root}, tasks disabled")
            return None

        pipeline = self.tasks.get(name)
        if pipeline is None:
            self.notifier.notify(
                f'Unknown task "{name}". Available: {", ".join(self.tasks)}'
            )
            return None

        engine = PipelineEngine(executor, self.notifier, fire_hooks=fire_hooks)
        return engine.run(pipeline, self.context(selection))
