"""
clangd integration.

After a successful configure or build the language server has to be
pointed at the new ``compile_commands.json`` and allowed to query the
kit's compilers for their system include paths. ClangdRefresher builds the
post-success hook that does this.

The restart itself belongs to the editor. ClangdRefresher hands the new
clangd command line to a ``restart`` callback; without one it updates the
project's ``.clangd`` file so any clangd started afterwards picks up the
compilation database.

Example:
    >>> refresher = ClangdRefresher(Path('/projects/myapp'))
    >>> pipeline = TaskPipeline("configure", steps, refresher.hook_factory)
"""

import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from cmakekits.config.resolver import EffectiveInvocationSpec
from cmakekits.core.filesystem import atomic_write
from cmakekits.tasks.context import TaskContext

logger = logging.getLogger(__name__)

CLANGD_CONFIG_FILE = ".clangd"


def clangd_arguments(spec: EffectiveInvocationSpec, cmdline: List[str]) -> List[str]:
    """
    Build the clangd command line for an effective spec.

    Args:
        spec: Resolved selection
        cmdline: Base clangd command line (executable first)

    Returns:
        Command line with ``--compile-commands-dir`` and, when the kit names
        compilers, ``--query-driver``
    """
    args = list(cmdline)
    args.append(f"--compile-commands-dir={spec.build_dir}")

    if spec.compilers:
        drivers: List[str] = []
        for compiler in spec.compilers.values():
            driver = shutil.which(compiler) or compiler
            if driver not in drivers:
                drivers.append(driver)
        args.append(f"--query-driver={','.join(drivers)}")

    return args


class ClangdRefresher:
    """
    Post-success hook provider that re-points clangd at the build tree.
    """

    def __init__(
        self,
        project_root: Path,
        restart: Optional[Callable[[List[str]], None]] = None,
    ):
        """
        Args:
            project_root: Directory holding the ``.clangd`` file
            restart: Called with the new clangd command line; when None the
                ``.clangd`` file is updated instead
        """
        self.project_root = Path(project_root)
        self.restart = restart
        self.config_file = self.project_root / CLANGD_CONFIG_FILE

    def hook_factory(self, context: TaskContext) -> Callable[[], None]:
        """Build the zero-argument hook for one pipeline run."""
        spec = context.spec()
        args = clangd_arguments(spec, context.settings.clangd_cmdline)

        def refresh() -> None:
            self.refresh(spec, args)

        return refresh

    def refresh(self, spec: EffectiveInvocationSpec, args: List[str]) -> None:
        logger.debug(f"clangd command line: {' '.join(args)}")
        if self.restart is not None:
            self.restart(args)
        else:
            self.write_config(spec.build_dir)

    def write_config(self, build_dir: Path) -> Path:
        """
        Point ``CompileFlags.CompilationDatabase`` of ``.clangd`` at build_dir.

        Other keys and additional YAML documents in the file are preserved.

        Returns:
            Path to the written file
        """
        documents = self._load_existing_config()
        first = documents[0] if documents else {}

        compile_flags = first.get("CompileFlags")
        if not isinstance(compile_flags, dict):
            compile_flags = {}
        compile_flags["CompilationDatabase"] = str(build_dir)
        first["CompileFlags"] = compile_flags

        if documents:
            documents[0] = first
        else:
            documents = [first]

        atomic_write(
            self.config_file,
            yaml.safe_dump_all(documents, default_flow_style=False, sort_keys=False),
        )
        logger.info(f"Updated {self.config_file} to use {build_dir}")
        return self.config_file

    def _load_existing_config(self) -> List[Dict[str, Any]]:
        if not self.config_file.exists():
            return []

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                documents = [doc for doc in yaml.safe_load_all(f) if doc is not None]
        except yaml.YAMLError as e:
            logger.warning(f"Failed to parse existing {self.config_file}: {e}")
            logger.warning("Creating new .clangd file")
            return []

        if not all(isinstance(doc, dict) for doc in documents):
            logger.warning(f"Unexpected content in {self.config_file}, replacing it")
            return []
        return documents
