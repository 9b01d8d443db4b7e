"""jsontool.core
===============

Command layer tying the pure transforms to the operation log.

Each ``run_*`` function times one transform with :func:`time.perf_counter`,
returns its outcome unchanged and records the invocation through an
:class:`~jsontool.oplog.OperationLogger`.  A failing log write is reported on
this module's logger and otherwise ignored: the caller always gets the
transform outcome.

The ``*_async`` variants push the CPU-bound transform onto a worker thread
with :func:`asyncio.to_thread` so an event loop stays responsive while a
multi-megabyte document is parsed.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional, TypeVar, Union

from .exceptions import StorageError
from .formatter import format_json, minify_json
from .oplog import OperationLogger
from .report import OperationResult, OperationType
from .results import FormattingOptions, FormattingOutcome, ValidationOutcome
from .validators import utf8_size, validate_json

__all__ = [
    "run_validate",
    "run_format",
    "run_minify",
    "validate_async",
    "format_async",
    "minify_async",
]

logger = logging.getLogger(__name__)

Outcome = TypeVar("Outcome", bound=Union[ValidationOutcome, FormattingOutcome])

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _record(
    oplog: Optional[OperationLogger],
    operation: OperationType,
    outcome: Union[ValidationOutcome, FormattingOutcome],
    input_size: int,
    elapsed_ms: int,
) -> None:
    """Write the log record for *outcome*; storage failures are only reported."""
    if oplog is None:
        return
    if outcome.ok:
        result, error_message = OperationResult.SUCCESS, None
    else:
        result, error_message = OperationResult.ERROR, outcome.message
    try:
        oplog.log_operation(operation, result, input_size, elapsed_ms, error_message)
    except StorageError as exc:
        logger.warning("Failed to record %s operation: %s", operation.value, exc)


def _timed(
    operation: OperationType,
    transform: Callable[[], Outcome],
    text: str,
    oplog: Optional[OperationLogger],
) -> Outcome:
    start_ts = time.perf_counter()
    outcome = transform()
    elapsed_ms = int((time.perf_counter() - start_ts) * 1000)
    _record(oplog, operation, outcome, utf8_size(text), elapsed_ms)
    return outcome


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def run_validate(text: str, oplog: Optional[OperationLogger] = None) -> ValidationOutcome:
    """Validate *text* and log the invocation."""
    return _timed(OperationType.VALIDATE, lambda: validate_json(text), text, oplog)


def run_format(
    text: str,
    options: Optional[FormattingOptions] = None,
    oplog: Optional[OperationLogger] = None,
) -> FormattingOutcome:
    """Pretty-print *text* and log the invocation."""
    return _timed(OperationType.FORMAT, lambda: format_json(text, options), text, oplog)


def run_minify(text: str, oplog: Optional[OperationLogger] = None) -> FormattingOutcome:
    """Minify *text* and log the invocation."""
    return _timed(OperationType.MINIFY, lambda: minify_json(text), text, oplog)


async def validate_async(text: str, oplog: Optional[OperationLogger] = None) -> ValidationOutcome:
    return await asyncio.to_thread(run_validate, text, oplog)


async def format_async(
    text: str,
    options: Optional[FormattingOptions] = None,
    oplog: Optional[OperationLogger] = None,
) -> FormattingOutcome:
    return await asyncio.to_thread(run_format, text, options, oplog)


async def minify_async(text: str, oplog: Optional[OperationLogger] = None) -> FormattingOutcome:
    return await asyncio.to_thread(run_minify, text, oplog)
