"""Exceptions raised by the side-effecting parts of jsontool.

The pure transforms never raise; they return outcome objects from
:mod:`jsontool.results`.  Only filesystem work (the operation log and file
import/export) raises, and always one of the types below.
"""


class JsonToolError(Exception):
    """Base class for all jsontool errors."""


class StorageError(JsonToolError):
    """The operation log could not be created, written, rotated, read or cleared."""


class FileAccessError(JsonToolError):
    """A JSON file could not be imported or exported."""
