"""jsontool.fileio
=================

Importing JSON documents from disk and exporting results back.

Only ``.json`` files are accepted.  Imports are capped at
:data:`~jsontool.config.MAX_IMPORT_FILE_SIZE`; exports create missing parent
directories and add the ``.json`` extension when a path has none.
"""
from __future__ import annotations

from collections import namedtuple
from pathlib import Path
from typing import Union

from .config import MAX_IMPORT_FILE_SIZE
from .exceptions import FileAccessError

__all__ = ["FileReadResult", "read_json_file", "write_json_file"]

FileReadResult = namedtuple("FileReadResult", ["content", "file_name"])

JSON_SUFFIX = ".json"


def read_json_file(file_path: Union[str, Path]) -> FileReadResult:
    """Read a ``.json`` file as UTF-8 text.

    Raises
    ------
    FileAccessError
        When the path is missing, not a regular file, has another extension,
        is larger than 10 MB or cannot be read.
    """
    path = Path(file_path)

    if not path.exists():
        raise FileAccessError(f"File does not exist: {path}")
    if not path.is_file():
        raise FileAccessError(f"Path is not a file: {path}")
    if not path.suffix:
        raise FileAccessError("File has no extension, it must be a .json file")
    if path.suffix.lower() != JSON_SUFFIX:
        raise FileAccessError(f"File must be a .json file, got: {path.suffix}")

    try:
        size = path.stat().st_size
    except OSError as exc:
        raise FileAccessError(f"Cannot read file metadata: {exc}") from exc
    if size > MAX_IMPORT_FILE_SIZE:
        raise FileAccessError(
            f"File is too large ({size / (1024 * 1024):.2f} MB), the maximum is 10 MB"
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to read file: {exc}") from exc

    return FileReadResult(content, path.name)


def write_json_file(file_path: Union[str, Path], content: str) -> Path:
    """Write *content* to a ``.json`` file and return the path written."""
    path = Path(file_path)

    if not path.suffix:
        path = path.with_suffix(JSON_SUFFIX)
    elif path.suffix.lower() != JSON_SUFFIX:
        raise FileAccessError(f"File must be a .json file, got: {path.suffix}")

    # encoded before touching the filesystem
    try:
        data = content.encode("utf-8")
    except UnicodeError as exc:
        raise FileAccessError(f"Content is not valid UTF-8 text: {exc}") from exc

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileAccessError(f"Cannot create directory {path.parent}: {exc}") from exc

    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FileAccessError(f"Failed to write file: {exc}") from exc

    return path
