"""jsontool.oplog
================

Append-only operation log.

Each validate / format / minify invocation is recorded as one JSON object
per line in ``<log_dir>/operations.log``.  Once that file grows past
:data:`~jsontool.config.MAX_LOG_FILE_SIZE` the next write first moves it to
``operations.log.old`` (replacing any earlier backup) and starts a fresh
file.  Reads and statistics only ever look at the active file.

One :class:`OperationLogger` is expected per log directory and process; no
cross-process locking is attempted.  All filesystem failures surface as
:class:`~jsontool.exceptions.StorageError`.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from threading import Lock
from typing import List, Optional, Union

from .config import MAX_LOG_FILE_SIZE
from .exceptions import StorageError
from .report import LogRecord, LogStatistics, OperationResult, OperationType

__all__ = ["OperationLogger", "LOG_FILE_NAME", "BACKUP_SUFFIX"]

logger = logging.getLogger(__name__)

LOG_FILE_NAME = "operations.log"
BACKUP_SUFFIX = ".old"


class OperationLogger:
    """Writes, rotates, reads and aggregates operation records."""

    def __init__(self, log_dir: Union[str, Path], enabled: bool = True) -> None:
        """
        Parameters
        ----------
        log_dir:
            Directory for the active log and its backup.  Created (with
            parents) when missing.
        enabled:
            Initial state of the write guard.
        """
        self.log_dir = Path(log_dir)
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create log directory {self.log_dir}: {exc}") from exc

        self._log_path = self.log_dir / LOG_FILE_NAME
        self._backup_path = self.log_dir / (LOG_FILE_NAME + BACKUP_SUFFIX)
        self._enabled = enabled
        self._lock = Lock()

    # ------------------------------------------------------------------
    # Paths / switches
    # ------------------------------------------------------------------

    @property
    def log_path(self) -> Path:
        return self._log_path

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._enabled = bool(enabled)

    def is_enabled(self) -> bool:
        with self._lock:
            return self._enabled

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def log_operation(
        self,
        operation: OperationType,
        result: OperationResult,
        input_size: int,
        processing_time_ms: int,
        error_message: Optional[str] = None,
    ) -> None:
        """Append one record, rotating the file first when it is too large.

        Does nothing while logging is disabled.  Raises :class:`StorageError`
        when rotation or the append fails; no record is written in that case.
        """
        if not self.is_enabled():
            return

        if self._active_size() > MAX_LOG_FILE_SIZE:
            self._rotate()

        record = LogRecord.now(
            operation=operation,
            result=result,
            input_size=input_size,
            processing_time_ms=processing_time_ms,
            error_message=error_message,
        )
        line = record.to_json_line() + "\n"
        try:
            with open(self._log_path, "a", encoding="utf-8") as fh:
                fh.write(line)
                fh.flush()
        except OSError as exc:
            raise StorageError(f"Cannot write log file {self._log_path}: {exc}") from exc

    def _active_size(self) -> int:
        try:
            return self._log_path.stat().st_size
        except FileNotFoundError:
            return 0
        except OSError as exc:
            raise StorageError(f"Cannot inspect log file {self._log_path}: {exc}") from exc

    def _rotate(self) -> None:
        """Move the active file to the backup name, dropping any older backup."""
        try:
            if self._backup_path.exists():
                self._backup_path.unlink()
            os.replace(self._log_path, self._backup_path)
        except OSError as exc:
            raise StorageError(f"Cannot rotate log file {self._log_path}: {exc}") from exc
        logger.info("Rotated %s to %s", self._log_path, self._backup_path)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_logs(self, limit: Optional[int] = None) -> List[LogRecord]:
        """Return records newest first, at most *limit* of them.

        A missing file yields an empty list.  Lines that cannot be decoded
        are skipped with a warning rather than failing the whole read.
        """
        records: List[LogRecord] = []
        try:
            with open(self._log_path, "r", encoding="utf-8", errors="replace") as fh:
                for lineno, line in enumerate(fh, 1):
                    if not line.strip():
                        continue
                    try:
                        records.append(LogRecord.from_json_line(line))
                    except (KeyError, TypeError, ValueError, RecursionError) as exc:
                        logger.warning("Skipping invalid log line %d: %s", lineno, exc)
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(f"Cannot read log file {self._log_path}: {exc}") from exc

        records.reverse()
        if limit is not None:
            records = records[:limit]
        return records

    def get_statistics(self) -> LogStatistics:
        """Aggregate every record currently in the active file."""
        records = self.read_logs()
        if not records:
            return LogStatistics()

        total = len(records)
        success = sum(1 for r in records if r.result is OperationResult.SUCCESS)
        return LogStatistics(
            total_operations=total,
            success_count=success,
            error_count=sum(1 for r in records if r.result is OperationResult.ERROR),
            success_rate=success / total * 100.0,
            validate_count=sum(1 for r in records if r.operation is OperationType.VALIDATE),
            format_count=sum(1 for r in records if r.operation is OperationType.FORMAT),
            minify_count=sum(1 for r in records if r.operation is OperationType.MINIFY),
            avg_processing_time_ms=sum(r.processing_time_ms for r in records) / total,
            # newest first, so the oldest record is last
            earliest_log=records[-1].timestamp,
            latest_log=records[0].timestamp,
        )

    def clear_logs(self) -> None:
        """Delete the active file.  The rotated backup is left alone."""
        try:
            self._log_path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"Cannot delete log file {self._log_path}: {exc}") from exc
