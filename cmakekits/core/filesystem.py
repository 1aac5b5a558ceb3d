"""
File system utilities for cmakekits.

The core writes to the build tree in only two ways: creating the File
API query directory with its marker file, and writing tooling config
files at the project root. Both go through the helpers here.
"""

import tempfile
from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object (resolved)

    Raises:
        OSError: If the directory cannot be created

    Example:
        >>> ensure_directory('/tmp/build/.cmake/api/v1/query')
        PosixPath('/tmp/build/.cmake/api/v1/query')
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path.resolve()


def ensure_file(path: Union[str, Path]) -> Path:
    """
    Create an empty file unless one already exists.

    Existing content is never truncated.

    Args:
        path: File path (parent directory must exist)

    Returns:
        Path object

    Raises:
        OSError: If the file cannot be created
    """
    path = Path(path)
    if not path.is_file():
        path.touch()
    return path


def atomic_write(
    file_path: Union[str, Path], content: str, encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    If the write fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Text content to write
        encoding: Text encoding
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding) as f:
            f.write(content)
        temp_path.replace(file_path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise
