"""
Test data builders for cmakekits testing.

This module provides builder classes for constructing CMake File API
replies with a fluent API, making tests more readable and maintainable.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional


class ReplyBuilder:
    """Builder for ``.cmake/api/v1/reply`` directories."""

    def __init__(self, build_dir: Path):
        """
        Initialize builder for a build directory.

        Args:
            build_dir: Build directory the reply belongs to
        """
        self.build_dir = Path(build_dir)
        self.reply_dir = self.build_dir / ".cmake" / "api" / "v1" / "reply"
        self._configurations: Dict[str, List[Dict[str, Any]]] = {}
        self._index_name = "index-2024-05-01T10-00-00-0000.json"
        self._with_codemodel = True

    def with_target(
        self,
        name: str,
        kind: str = "EXECUTABLE",
        artifact: Optional[str] = None,
        configuration: str = "Debug",
    ) -> "ReplyBuilder":
        """
        Add a target to a configuration.

        Args:
            name: Target name
            kind: CMake target type
            artifact: Artifact path; executables default to ``<name>``
            configuration: Configuration the target belongs to

        Returns:
            Self for method chaining
        """
        if artifact is None and kind == "EXECUTABLE":
            artifact = name
        self._configurations.setdefault(configuration, []).append(
            {"name": name, "type": kind, "artifact": artifact}
        )
        return self

    def with_configuration(self, configuration: str) -> "ReplyBuilder":
        """Declare a configuration, even if it has no targets."""
        self._configurations.setdefault(configuration, [])
        return self

    def with_index_name(self, index_name: str) -> "ReplyBuilder":
        self._index_name = index_name
        return self

    def without_codemodel(self) -> "ReplyBuilder":
        """Write an index that does not answer the codemodel query."""
        self._with_codemodel = False
        return self

    def write(self) -> Path:
        """
        Write index, codemodel and target files.

        Returns:
            Path to the reply directory
        """
        self.reply_dir.mkdir(parents=True, exist_ok=True)

        configurations = []
        for config_name, targets in self._configurations.items():
            refs = []
            for target in targets:
                json_file = f"target-{target['name']}-{config_name}-0123abcd.json"
                data: Dict[str, Any] = {
                    "name": target["name"],
                    "type": target["type"],
                    "id": f"{target['name']}::@6890427a1f51a3e7e1df",
                }
                if target["artifact"] is not None:
                    data["artifacts"] = [{"path": target["artifact"]}]
                self._write_json(json_file, data)
                refs.append(
                    {
                        "name": target["name"],
                        "id": data["id"],
                        "directoryIndex": 0,
                        "projectIndex": 0,
                        "jsonFile": json_file,
                    }
                )
            configurations.append({"name": config_name, "targets": refs})

        # One codemodel per index so older replies stay intact
        stamp = self._index_name[len("index-") : -len(".json")]
        codemodel_file = f"codemodel-v2-{stamp}.json"
        self._write_json(
            codemodel_file,
            {
                "kind": "codemodel",
                "version": {"major": 2, "minor": 6},
                "paths": {"build": str(self.build_dir), "source": "/src"},
                "configurations": configurations,
            },
        )

        reply: Dict[str, Any] = {}
        if self._with_codemodel:
            reply["codemodel-v2"] = {
                "kind": "codemodel",
                "version": {"major": 2, "minor": 6},
                "jsonFile": codemodel_file,
            }
        self._write_json(
            self._index_name,
            {
                "cmake": {"version": {"string": "3.28.3"}},
                "objects": [],
                "reply": reply,
            },
        )
        return self.reply_dir

    def _write_json(self, name: str, data: Dict[str, Any]) -> None:
        (self.reply_dir / name).write_text(json.dumps(data), encoding="utf-8")
