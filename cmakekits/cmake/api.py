"""
CMake File API interaction helper.

This module provides functionality to interact with the CMake File API
to discover the targets of a configured build tree and the artifacts they
produce, without invoking CMake.

Protocol:
    1. Before configuring, a zero-byte ``codemodel-v2`` query file is placed
       in ``<build>/.cmake/api/v1/query``.
    2. On every successful configure CMake writes a reply: an
       ``index-<timestamp>.json`` file pointing at ``codemodel-v2-*.json``,
       which in turn references one ``target-*.json`` file per target.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from cmakekits.core.exceptions import (
    NoReplyError,
    NotConfiguredError,
    ReplyParseError,
    TargetNotFoundError,
    WrongKindError,
)
from cmakekits.core.filesystem import ensure_directory, ensure_file

logger = logging.getLogger(__name__)

CODEMODEL_QUERY = "codemodel-v2"
EXECUTABLE_KIND = "EXECUTABLE"
ALL_TARGET = "all"

# Targets generated by AUTOMOC/AUTOUIC/AUTORCC
AUTOGEN_MARKER = "_autogen"


@dataclass(frozen=True)
class Target:
    """A buildable target as reported by the codemodel.

    Attributes:
        name: Target name
        kind: CMake target type (EXECUTABLE, STATIC_LIBRARY, UTILITY, ...)
        json_file: Reply file with the target details (None for ``all``)
    """

    name: str
    kind: str
    json_file: Optional[str] = None

    @property
    def is_executable(self) -> bool:
        return self.kind == EXECUTABLE_KIND


class CMakeFileAPI:
    """
    Interface to CMake File API.

    Allows querying a configured build tree for its targets and
    executable artifacts.
    """

    def __init__(self, build_dir: Path):
        """
        Initialize CMake File API wrapper.

        Args:
            build_dir: Path to CMake build directory
        """
        self.build_dir = Path(build_dir)
        self.api_dir = self.build_dir / ".cmake" / "api" / "v1"
        self.query_dir = self.api_dir / "query"
        self.reply_dir = self.api_dir / "reply"

    @property
    def is_configured(self) -> bool:
        return self.build_dir.is_dir()

    def ensure_query_stub(self) -> bool:
        """
        Create the codemodel query file (idempotent).

        Must be called BEFORE running CMake configuration; CMake answers
        the query on its next successful run.

        Returns:
            True if the query file exists afterwards, False if it could
            not be created (the failure is logged)
        """
        try:
            ensure_directory(self.query_dir)
        except OSError as e:
            logger.error(f'Unable to create "{self.query_dir}": {e}')
            return False

        codemodel_query = self.query_dir / CODEMODEL_QUERY
        try:
            ensure_file(codemodel_query)
        except OSError as e:
            logger.error(f'Unable to create "{codemodel_query}": {e}')
            return False

        logger.debug(f"CMake API query ready: {codemodel_query}")
        return True

    def latest_index(self) -> Path:
        """
        Find the newest reply index file.

        CMake names index files ``index-<timestamp>.json``, so the
        lexicographically greatest name is the most recent reply.

        Raises:
            NoReplyError: If there is no reply directory or no index
        """
        if not self.reply_dir.is_dir():
            raise NoReplyError(
                f'CMake API reply directory "{self.reply_dir}" not found, '
                'run "configure" task first'
            )

        index_files = sorted(self.reply_dir.glob("index-*.json"))
        if not index_files:
            raise NoReplyError(f'No CMake API reply index in "{self.reply_dir}"')

        logger.debug(f"Using CMake API reply index {index_files[-1].name}")
        return index_files[-1]

    def _load_json(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise NoReplyError(f'CMake API reply file "{path}" not found')
        except (OSError, json.JSONDecodeError) as e:
            raise ReplyParseError(f'Failed to read CMake API reply "{path}": {e}')

        if not isinstance(data, dict):
            raise ReplyParseError(f'Unexpected content in CMake API reply "{path}"')
        return data

    def read_codemodel(self) -> Dict[str, Any]:
        """
        Read the codemodel object referenced by the newest index.

        Raises:
            NoReplyError: If the index does not answer the codemodel query
            ReplyParseError: If a reply file is malformed
        """
        index = self._load_json(self.latest_index())

        reply = index.get("reply", {})
        if not isinstance(reply, dict):
            raise ReplyParseError(
                'CMake API reply index has a malformed "reply" object'
            )

        entry = reply.get(CODEMODEL_QUERY)
        if not isinstance(entry, dict) or "jsonFile" not in entry:
            raise NoReplyError(
                f"CMake API reply does not contain {CODEMODEL_QUERY}, "
                "make sure the query file existed before configuring"
            )

        return self._load_json(self.reply_dir / entry["jsonFile"])

    def _configuration(
        self, codemodel: Dict[str, Any], build_type: Optional[str]
    ) -> Dict[str, Any]:
        """Pick the configuration matching build_type, else the first one."""
        configurations = codemodel.get("configurations") or []
        if not isinstance(configurations, list) or not all(
            isinstance(configuration, dict) for configuration in configurations
        ):
            raise ReplyParseError("CMake codemodel has malformed configurations")
        if not configurations:
            raise ReplyParseError("CMake codemodel has no configurations")

        if build_type:
            for configuration in configurations:
                if configuration.get("name") == build_type:
                    return configuration
        return configurations[0]

    def target_refs(self, build_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get the codemodel's target references for one configuration.

        Args:
            build_type: Configuration name for multi-config generators

        Returns:
            List of target reference objects (``name``, ``jsonFile``, ...)
        """
        if not self.is_configured:
            raise NotConfiguredError(self.build_dir)

        configuration = self._configuration(self.read_codemodel(), build_type)
        targets = configuration.get("targets") or []
        if not isinstance(targets, list) or not all(
            isinstance(target_ref, dict) for target_ref in targets
        ):
            raise ReplyParseError(
                f"CMake codemodel configuration \"{configuration.get('name')}\" "
                "has malformed targets"
            )
        return list(targets)

    def target_info(self, target_ref: Dict[str, Any]) -> Dict[str, Any]:
        """
        Read the detail file of one target.

        Args:
            target_ref: Target reference from the codemodel

        Returns:
            Parsed target object
        """
        json_file = target_ref.get("jsonFile")
        if not json_file:
            raise ReplyParseError(
                f"Target reference without jsonFile: {target_ref.get('name')}"
            )
        return self._load_json(self.reply_dir / json_file)

    def list_targets(self, build_type: Optional[str] = None) -> List[Target]:
        """
        List the user-visible targets of the build tree.

        Targets are returned in codemodel order with ``_autogen`` helper
        targets removed; the synthetic ``all`` target is always last.

        Args:
            build_type: Configuration name for multi-config generators

        Raises:
            NotConfiguredError: If the build directory does not exist
            NoReplyError: If CMake has not answered the codemodel query
        """
        targets = []
        for target_ref in self.target_refs(build_type):
            info = self.target_info(target_ref)
            name = info.get("name", target_ref.get("name"))
            if not name:
                logger.warning(
                    f"Skipping unnamed target in {target_ref.get('jsonFile')}"
                )
                continue
            if AUTOGEN_MARKER in name:
                continue
            targets.append(
                Target(
                    name=name,
                    kind=info.get("type", "UNKNOWN"),
                    json_file=target_ref.get("jsonFile"),
                )
            )

        targets.append(Target(name=ALL_TARGET, kind="UTILITY"))
        logger.debug(f"Discovered targets: {[t.name for t in targets]}")
        return targets

    def target_names(self, build_type: Optional[str] = None) -> List[str]:
        return [target.name for target in self.list_targets(build_type)]

    def resolve_executable_path(
        self, target_name: str, build_type: Optional[str] = None
    ) -> Path:
        """
        Get the artifact path of an executable target.

        The path is returned whether or not the file exists: a configured
        but unbuilt tree still knows where its executables will go.

        Args:
            target_name: Name of the target
            build_type: Configuration name for multi-config generators

        Returns:
            Absolute path to the executable artifact

        Raises:
            TargetNotFoundError: If no target has this name
            WrongKindError: If the target is not an executable
        """
        for target_ref in self.target_refs(build_type):
            if target_ref.get("name") != target_name:
                continue

            info = self.target_info(target_ref)
            kind = info.get("type", "UNKNOWN")
            if kind != EXECUTABLE_KIND:
                raise WrongKindError(target_name, kind)

            artifacts = info.get("artifacts") or []
            if not artifacts or "path" not in artifacts[0]:
                raise ReplyParseError(f'Target "{target_name}" has no artifacts')

            path = Path(artifacts[0]["path"])
            if not path.is_absolute():
                # Relative to the top of the build tree
                path = self.build_dir / path
            return path

        raise TargetNotFoundError(target_name)
