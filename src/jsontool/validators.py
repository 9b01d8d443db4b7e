"""jsontool.validators
====================

Validation of raw JSON text.

:func:`validate_json` is *pure*: it never raises and never touches the
filesystem, so it can be unit-tested directly and called from any thread.
Failures come back as :class:`~jsontool.results.ValidationFailure` values.

Decoder diagnostics are turned into readable sentences by
:func:`describe_parse_error`.  That function (together with
:func:`classify_parse_error`) is the only place that knows the wording of the
underlying parser's messages; swapping parsers means re-mapping here and
nowhere else.

The pre-parse checks (:func:`check_input`) are shared with
:mod:`jsontool.formatter`.
"""
from __future__ import annotations

import json
from enum import Enum
from typing import Optional, Tuple

from .config import MAX_INPUT_SIZE
from .results import ErrorKind, ValidationFailure, ValidationOutcome, ValidationSuccess
from .values import parse_json

__all__ = [
    "ParseErrorCategory",
    "check_input",
    "classify_parse_error",
    "describe_parse_error",
    "utf8_size",
    "validate_json",
]

# ---------------------------------------------------------------------------
# Pre-parse checks
# ---------------------------------------------------------------------------

def utf8_size(text: str) -> int:
    """Return the UTF-8 byte length of *text*."""
    return len(text.encode("utf-8", "surrogatepass"))


def check_input(text: str) -> Optional[Tuple[ErrorKind, str]]:
    """Apply the size ceiling and the empty-input check, in that order.

    Returns ``None`` when *text* may be parsed, otherwise the error kind and
    message to report.
    """
    size = utf8_size(text)
    if size > MAX_INPUT_SIZE:
        return (
            ErrorKind.INPUT_TOO_LARGE,
            f"Input size ({size / (1024 * 1024):.2f} MB) exceeds the maximum "
            f"limit of 5 MB",
        )
    if not text.strip():
        return ErrorKind.EMPTY_INPUT, "Input is empty, please provide valid JSON"
    return None


# ---------------------------------------------------------------------------
# Parser diagnostics
# ---------------------------------------------------------------------------

class ParseErrorCategory(Enum):
    TRAILING_COMMA = "trailing_comma"
    MISSING_SEPARATOR = "missing_separator"
    MISSING_VALUE = "missing_value"
    UNEXPECTED_EOF = "unexpected_eof"
    KEY_NOT_STRING = "key_not_string"
    INVALID_ESCAPE = "invalid_escape"
    CONTROL_CHARACTER = "control_character"
    GENERIC = "generic"


_MESSAGES = {
    ParseErrorCategory.TRAILING_COMMA:
        "JSON contains a trailing comma (line {line}, column {column})",
    ParseErrorCategory.MISSING_SEPARATOR:
        "Missing comma or colon separator (line {line}, column {column})",
    ParseErrorCategory.MISSING_VALUE:
        "Missing value or incomplete quotes (line {line}, column {column})",
    ParseErrorCategory.UNEXPECTED_EOF:
        "Incomplete JSON structure, a bracket or quote may be missing (line {line})",
    ParseErrorCategory.KEY_NOT_STRING:
        "Object keys must be strings (line {line}, column {column})",
    ParseErrorCategory.INVALID_ESCAPE:
        "Invalid escape sequence (line {line}, column {column})",
    ParseErrorCategory.CONTROL_CHARACTER:
        "Invalid control character (line {line}, column {column})",
    ParseErrorCategory.GENERIC:
        "JSON parse error: {raw} (line {line}, column {column})",
}


def _previous_significant_char(doc: str, pos: int) -> str:
    stripped = doc[:pos].rstrip()
    return stripped[-1:] if stripped else ""


def classify_parse_error(exc: json.JSONDecodeError) -> ParseErrorCategory:
    """Map a decoder error onto one of the known categories."""
    msg, doc, pos = exc.msg, exc.doc, exc.pos
    next_char = doc[pos:pos + 1]
    at_end = not doc[pos:].strip()

    if msg.startswith("Illegal trailing comma"):
        return ParseErrorCategory.TRAILING_COMMA
    if msg.startswith("Unterminated string"):
        return ParseErrorCategory.UNEXPECTED_EOF
    if msg.startswith("Invalid control character"):
        return ParseErrorCategory.CONTROL_CHARACTER
    if msg.startswith("Invalid") and "escape" in msg:
        return ParseErrorCategory.INVALID_ESCAPE
    if msg.startswith("Expecting") and at_end:
        return ParseErrorCategory.UNEXPECTED_EOF
    if msg.startswith("Expecting property name"):
        if next_char == "}" and _previous_significant_char(doc, pos) == ",":
            return ParseErrorCategory.TRAILING_COMMA
        return ParseErrorCategory.KEY_NOT_STRING
    if msg.startswith("Expecting value"):
        if next_char == "]" and _previous_significant_char(doc, pos) == ",":
            return ParseErrorCategory.TRAILING_COMMA
        return ParseErrorCategory.MISSING_VALUE
    if msg.startswith("Expecting ',' delimiter") or msg.startswith("Expecting ':' delimiter"):
        return ParseErrorCategory.MISSING_SEPARATOR
    return ParseErrorCategory.GENERIC


def describe_parse_error(exc: json.JSONDecodeError) -> str:
    """Return a readable sentence for *exc* that names its line and column."""
    template = _MESSAGES[classify_parse_error(exc)]
    return template.format(line=exc.lineno, column=exc.colno, raw=exc.msg)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def validate_json(text: str) -> ValidationOutcome:
    """Validate *text* as a JSON document.

    Parameters
    ----------
    text:
        The raw document.

    Returns
    -------
    ValidationOutcome
        :class:`ValidationSuccess` with the decoded value and the input's
        UTF-8 size, or :class:`ValidationFailure`.  Only syntax errors carry
        ``line``/``column``.
    """
    rejected = check_input(text)
    if rejected is not None:
        kind, message = rejected
        return ValidationFailure(message=message, kind=kind)

    try:
        value = parse_json(text)
    except json.JSONDecodeError as exc:
        return ValidationFailure(
            message=describe_parse_error(exc),
            kind=ErrorKind.PARSE_ERROR,
            line=exc.lineno,
            column=exc.colno,
        )
    except RecursionError:
        return ValidationFailure(
            message="JSON is nested too deeply to be parsed",
            kind=ErrorKind.PARSE_ERROR,
        )
    except ValueError as exc:
        # e.g. integer literals beyond the interpreter's digit limit
        return ValidationFailure(
            message=f"JSON parse error: {exc}",
            kind=ErrorKind.PARSE_ERROR,
        )

    return ValidationSuccess(value=value, input_size_bytes=utf8_size(text))
