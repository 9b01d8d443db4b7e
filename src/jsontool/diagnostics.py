"""jsontool.diagnostics
=====================

Helpers that make validation results easier to act on.

* :func:`extract_error_context` pulls the lines around a reported error
  position and suggests a likely fix.
* :func:`compute_metrics` summarises a payload (size, nesting depth, number
  of objects / arrays / keys).

Both are pure and tolerate invalid input.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Optional

from .validators import utf8_size
from .values import parse_json

__all__ = [
    "ErrorContext",
    "JsonMetrics",
    "extract_error_context",
    "compute_metrics",
    "format_bytes",
    "compression_ratio",
]

# Structure metrics are skipped above this size unless asked for explicitly.
LARGE_PAYLOAD_BYTES = 1024 * 1024

_KEY_VALUE_LINE_RE = re.compile(r'^\s*"[^"]+"\s*:\s*"[^"]+"\s*$')
_STRING_LINE_RE = re.compile(r'^\s*"[^"]+"\s*$')


# ---------------------------------------------------------------------------
# Error context
# ---------------------------------------------------------------------------

@dataclass
class ErrorContext:
    before_lines: List[str]
    error_line: str
    after_lines: List[str]
    error_char: Optional[str] = None
    suggestion: Optional[str] = None


def _suggest_fix(error_line: str, column: Optional[int]) -> Optional[str]:
    if not column:
        return None

    trimmed = error_line.strip()
    if trimmed.endswith('"'):
        return "Try adding a comma after the closing quote"
    if _KEY_VALUE_LINE_RE.match(trimmed):
        return "Object members need a trailing comma, except the last one"
    if _STRING_LINE_RE.match(trimmed):
        return "A comma may be missing after this string"
    if error_line[column - 1:column] in ("}", "]"):
        return "Check for a missing or an extra comma before this bracket"
    return "Check the syntax around this position"


def extract_error_context(
    text: str,
    line: Optional[int],
    column: Optional[int] = None,
    context_lines: int = 2,
) -> Optional[ErrorContext]:
    """Return the lines surrounding a 1-based *line*/*column* position.

    ``None`` when *line* is missing or outside the document.
    """
    if not line:
        return None

    lines = text.split("\n")
    index = line - 1
    if index < 0 or index >= len(lines):
        return None

    start = max(0, index - context_lines)
    end = min(len(lines) - 1, index + context_lines)
    error_line = lines[index]

    error_char = None
    if column and 0 < column <= len(error_line):
        error_char = error_line[column - 1]

    return ErrorContext(
        before_lines=lines[start:index],
        error_line=error_line,
        after_lines=lines[index + 1:end + 1],
        error_char=error_char,
        suggestion=_suggest_fix(error_line, column),
    )


# ---------------------------------------------------------------------------
# Payload metrics
# ---------------------------------------------------------------------------

@dataclass
class JsonMetrics:
    lines: int = 0
    chars: int = 0
    bytes: int = 0
    depth: int = 0
    objects: int = 0
    arrays: int = 0
    keys: int = 0


@dataclass
class _StructureCounter:
    max_depth: int
    depth: int = 0
    objects: int = 0
    arrays: int = 0
    keys: int = 0

    def visit(self, node: Any, current: int) -> None:
        if current > self.max_depth:
            return
        self.depth = max(self.depth, current)
        if isinstance(node, list):
            self.arrays += 1
            children = node
        else:
            self.objects += 1
            self.keys += len(node)
            children = node.values()
        for child in children:
            if isinstance(child, (dict, list)):
                self.visit(child, current + 1)


def compute_metrics(
    text: str,
    max_depth: int = 100,
    skip_structure: bool = False,
) -> JsonMetrics:
    """Summarise *text*.

    Size metrics are always filled in.  Structure metrics (depth, objects,
    arrays, keys) stay at 0 when *text* is not valid JSON, when
    *skip_structure* is set or when the payload exceeds 1 MB.  Scalars count
    as depth 1 with no containers.
    """
    if not text:
        return JsonMetrics()

    metrics = JsonMetrics(
        lines=len(text.split("\n")),
        chars=len(text),
        bytes=utf8_size(text),
    )
    if skip_structure or metrics.bytes > LARGE_PAYLOAD_BYTES:
        return metrics

    try:
        value = parse_json(text)
    except (ValueError, RecursionError):
        # invalid input: structure metrics stay at zero
        return metrics

    counter = _StructureCounter(max_depth=max_depth)
    if isinstance(value, (dict, list)):
        counter.visit(value, 1)
    else:
        counter.depth = 1

    metrics.depth = counter.depth
    metrics.objects = counter.objects
    metrics.arrays = counter.arrays
    metrics.keys = counter.keys
    return metrics


def format_bytes(size: int) -> str:
    """Render *size* as ``"512 B"``, ``"1.50 KB"``, ``"12.3 MB"`` ..."""
    if size < 1024:
        return f"{max(size, 0)} B"
    units = ["KB", "MB", "GB"]
    value = size / 1024
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    decimals = 2 if value < 10 else 1
    return f"{value:.{decimals}f} {units[index]}"


def compression_ratio(formatted: str, minified: str) -> float:
    """Percentage of bytes saved by *minified* relative to *formatted*."""
    if not formatted or not minified:
        return 0.0
    formatted_size = utf8_size(formatted)
    return (formatted_size - utf8_size(minified)) / formatted_size * 100.0
