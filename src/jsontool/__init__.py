"""jsontool: local JSON validation, formatting and operation logging."""

# Must stay above the submodule imports: report.py reads it at import time.
__version__ = "0.1.0"

from .config import JsonToolConfig
from .results import FormattingOptions
from .validators import validate_json
from .formatter import format_json, minify_json
from .oplog import OperationLogger
from .report import LogRecord, LogStatistics, OperationResult, OperationType
from .exceptions import JsonToolError, StorageError, FileAccessError

__all__ = [
    "__version__",
    "JsonToolConfig",
    "FormattingOptions",
    "validate_json",
    "format_json",
    "minify_json",
    "OperationLogger",
    "LogRecord",
    "LogStatistics",
    "OperationResult",
    "OperationType",
    "JsonToolError",
    "StorageError",
    "FileAccessError",
]
