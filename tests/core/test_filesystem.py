"""
Tests for file system utilities.
"""

from unittest.mock import patch

import pytest

from cmakekits.core.filesystem import atomic_write, ensure_directory, ensure_file


class TestEnsureDirectory:
    def test_creates_nested(self, tmp_path):
        target = tmp_path / "build" / ".cmake" / "api" / "v1" / "query"

        result = ensure_directory(target)

        assert target.is_dir()
        assert result == target.resolve()

    def test_idempotent(self, tmp_path):
        ensure_directory(tmp_path / "build")
        ensure_directory(tmp_path / "build")
        assert (tmp_path / "build").is_dir()

    def test_blocked_by_file(self, tmp_path):
        (tmp_path / "build").write_text("")

        with pytest.raises(OSError):
            ensure_directory(tmp_path / "build")


class TestEnsureFile:
    def test_creates_empty_file(self, tmp_path):
        marker = ensure_file(tmp_path / "codemodel-v2")

        assert marker.is_file()
        assert marker.read_text() == ""

    def test_keeps_content(self, tmp_path):
        marker = tmp_path / "codemodel-v2"
        marker.write_text("existing")

        ensure_file(marker)

        assert marker.read_text() == "existing"


class TestAtomicWrite:
    def test_writes_and_creates_parent(self, tmp_path):
        target = tmp_path / "sub" / ".clangd"

        atomic_write(target, "CompileFlags: {}\n")

        assert target.read_text(encoding="utf-8") == "CompileFlags: {}\n"

    def test_replaces_existing(self, tmp_path):
        target = tmp_path / ".clangd"
        target.write_text("old")

        atomic_write(target, "new")

        assert target.read_text() == "new"

    def test_failure_keeps_original(self, tmp_path):
        """A failed rename leaves the original file and no temp files."""
        target = tmp_path / ".clangd"
        target.write_text("original")

        with patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write(target, "new")

        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == [".clangd"]
