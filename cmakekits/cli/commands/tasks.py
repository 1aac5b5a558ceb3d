"""
Tasks command implementation.

Lists the task pipelines and the steps they run.
"""

from pathlib import Path

from cmakekits.cli.utils import load_project_config, make_module, print_error
from cmakekits.core.exceptions import ConfigError
from cmakekits.tasks.module import PROJECT_MARKER


def run(args) -> int:
    project_root = Path(args.project_root).resolve()

    try:
        config = load_project_config(project_root, args.config)
    except ConfigError as e:
        print_error("Failed to load configuration", str(e))
        return 1

    module = make_module(project_root, config)
    if not module.condition():
        print_error(
            "Not a CMake project", f"No {PROJECT_MARKER} found in {project_root}"
        )
        return 1

    for name, pipeline in module.tasks.items():
        steps = " -> ".join(step.name for step in pipeline.steps)
        hook = " (refreshes clangd)" if pipeline.hook_factory else ""
        print(f"{name}: {steps}{hook}")
    return 0
