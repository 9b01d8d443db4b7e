"""Unit-tests for *jsontool.core*.

The operation log is replaced by an in-memory recorder so that we can check
exactly what each command hands to it, and ``time.perf_counter`` is patched
where the measured duration matters.
"""
from __future__ import annotations

import logging
from typing import Any, List

import pytest

import jsontool.core as core
from jsontool.exceptions import StorageError
from jsontool.oplog import OperationLogger
from jsontool.report import OperationResult, OperationType
from jsontool.results import ErrorKind, FormattingOptions

# ---------------------------------------------------------------------------
# Shared stubs & helpers
# ---------------------------------------------------------------------------

class RecordingLog:
    """Collects ``log_operation`` calls instead of writing a file."""

    def __init__(self):
        self.calls: List[tuple] = []

    def log_operation(self, operation, result, input_size, processing_time_ms, error_message=None):
        self.calls.append((operation, result, input_size, processing_time_ms, error_message))


class FailingLog:
    def log_operation(self, *_: Any, **__: Any):
        raise StorageError("disk full")


def _patch_clock(monkeypatch, *readings: float):
    ticks = iter(readings)
    monkeypatch.setattr(core.time, "perf_counter", lambda: next(ticks, readings[-1]))


# ---------------------------------------------------------------------------
# Test cases
# ---------------------------------------------------------------------------

def test_validate_success_is_recorded():
    log = RecordingLog()
    outcome = core.run_validate('{"a": 1}', log)

    assert outcome.ok
    assert len(log.calls) == 1
    operation, result, size, elapsed, message = log.calls[0]
    assert operation is OperationType.VALIDATE
    assert result is OperationResult.SUCCESS
    assert size == 8
    assert elapsed >= 0
    assert message is None


def test_validate_failure_records_message():
    log = RecordingLog()
    outcome = core.run_validate('{"a": }', log)

    assert not outcome.ok
    _, result, _, _, message = log.calls[0]
    assert result is OperationResult.ERROR
    assert message == outcome.message


def test_input_size_is_utf8_bytes():
    log = RecordingLog()
    core.run_minify('["é"]', log)
    assert log.calls[0][2] == 6


def test_processing_time_is_measured(monkeypatch):
    _patch_clock(monkeypatch, 10.0, 10.25)
    log = RecordingLog()
    core.run_format("[1]", oplog=log)
    assert log.calls[0][3] == 250


def test_format_passes_options_through():
    log = RecordingLog()
    outcome = core.run_format("[1]", FormattingOptions(indent=4, trailing_newline=False), log)
    assert outcome.formatted == "[\n    1\n]"
    assert log.calls[0][0] is OperationType.FORMAT


def test_invalid_option_is_recorded_as_error():
    log = RecordingLog()
    outcome = core.run_format("[1]", FormattingOptions(indent=3), log)
    assert outcome.kind is ErrorKind.INVALID_OPTION
    assert log.calls[0][1] is OperationResult.ERROR


def test_minify_operation_type():
    log = RecordingLog()
    core.run_minify("[1, 2]", log)
    assert log.calls[0][0] is OperationType.MINIFY


def test_without_oplog_nothing_is_recorded():
    assert core.run_minify("[1, 2]").formatted == "[1,2]"


def test_storage_failure_does_not_change_outcome(caplog):
    with caplog.at_level(logging.WARNING, logger="jsontool.core"):
        outcome = core.run_format('{"a":1}', oplog=FailingLog())

    assert outcome.ok
    assert outcome.formatted == '{\n  "a": 1\n}\n'
    assert "Failed to record format operation" in caplog.text
    assert "disk full" in caplog.text


def test_disabled_logger_writes_nothing(tmp_path):
    oplog = OperationLogger(tmp_path, enabled=False)
    core.run_validate("[]", oplog)
    assert not oplog.log_path.exists()


def test_real_logger_receives_record(tmp_path):
    oplog = OperationLogger(tmp_path)
    core.run_validate("[]", oplog)
    core.run_minify("[", oplog)

    records = oplog.read_logs()
    assert [r.operation for r in records] == [OperationType.MINIFY, OperationType.VALIDATE]
    assert records[0].result is OperationResult.ERROR
    assert records[0].error_message


@pytest.mark.asyncio
async def test_async_variants():
    log = RecordingLog()

    validated = await core.validate_async("[1]", log)
    formatted = await core.format_async("[1]", FormattingOptions(trailing_newline=False), log)
    minified = await core.minify_async("[ 1 ]", log)

    assert validated.ok
    assert formatted.formatted == "[\n  1\n]"
    assert minified.formatted == "[1]"
    assert [c[0] for c in log.calls] == [
        OperationType.VALIDATE,
        OperationType.FORMAT,
        OperationType.MINIFY,
    ]


@pytest.mark.asyncio
async def test_async_failure_is_returned_not_raised():
    outcome = await core.validate_async("")
    assert outcome.kind is ErrorKind.EMPTY_INPUT
