"""jsontool.report
=================

Data-objects persisted and produced by the operation log.

:class:`LogRecord` is one line of ``operations.log``; :class:`LogStatistics`
is the aggregate computed on demand over every record in the active file.
"""
from __future__ import annotations

import datetime
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from . import __version__


class OperationType(str, Enum):
    VALIDATE = "validate"
    FORMAT = "format"
    MINIFY = "minify"


class OperationResult(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


def _format_timestamp(ts: datetime.datetime) -> str:
    return ts.astimezone(datetime.timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _parse_timestamp(raw: str) -> datetime.datetime:
    if not isinstance(raw, str):
        raise TypeError(f"timestamp must be a string, got {type(raw).__name__}")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    ts = datetime.datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        raise ValueError("timestamp has no UTC offset")
    return ts.astimezone(datetime.timezone.utc)


def _non_negative_int(data: Dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer")
    return value


@dataclass(frozen=True)
class LogRecord:
    """A single logged transform invocation."""

    timestamp: datetime.datetime
    operation: OperationType
    result: OperationResult
    input_size: int
    processing_time_ms: int
    error_message: Optional[str] = None
    app_version: str = __version__

    @classmethod
    def now(
        cls,
        operation: OperationType,
        result: OperationResult,
        input_size: int,
        processing_time_ms: int,
        error_message: Optional[str] = None,
    ) -> "LogRecord":
        """Build a record stamped with the current UTC time and package version."""
        return cls(
            timestamp=datetime.datetime.now(datetime.timezone.utc),
            operation=OperationType(operation),
            result=OperationResult(result),
            input_size=input_size,
            processing_time_ms=processing_time_ms,
            error_message=error_message,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": _format_timestamp(self.timestamp),
            "operation": self.operation.value,
            "result": self.result.value,
            "input_size": self.input_size,
            "processing_time_ms": self.processing_time_ms,
            "error_message": self.error_message,
            "app_version": self.app_version,
        }

    def to_json_line(self) -> str:
        """Serialise as one compact JSON line (without the newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogRecord":
        """Inverse of :meth:`to_dict`.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` for records that
        are missing fields or carry values of the wrong shape.
        """
        if not isinstance(data, dict):
            raise TypeError("log record must be a JSON object")
        error_message = data.get("error_message")
        if error_message is not None and not isinstance(error_message, str):
            raise TypeError("error_message must be a string or null")
        app_version = data["app_version"]
        if not isinstance(app_version, str):
            raise TypeError("app_version must be a string")
        return cls(
            timestamp=_parse_timestamp(data["timestamp"]),
            operation=OperationType(data["operation"]),
            result=OperationResult(data["result"]),
            input_size=_non_negative_int(data, "input_size"),
            processing_time_ms=_non_negative_int(data, "processing_time_ms"),
            error_message=error_message,
            app_version=app_version,
        )

    @classmethod
    def from_json_line(cls, line: str) -> "LogRecord":
        return cls.from_dict(json.loads(line))


@dataclass
class LogStatistics:
    """Aggregate over the active log file.  Never persisted."""

    total_operations: int = 0
    success_count: int = 0
    error_count: int = 0
    success_rate: float = 0.0  # percentage, 0-100
    validate_count: int = 0
    format_count: int = 0
    minify_count: int = 0
    avg_processing_time_ms: float = 0.0
    earliest_log: Optional[datetime.datetime] = None
    latest_log: Optional[datetime.datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.__dict__)
        for key in ("earliest_log", "latest_log"):
            if data[key] is not None:
                data[key] = _format_timestamp(data[key])
        return data


__all__ = ["OperationType", "OperationResult", "LogRecord", "LogStatistics"]
