"""jsontool.formatter
===================

Pretty-printing and minification of JSON text.

Both transforms share the validator's pre-parse checks, decode the input with
:func:`jsontool.values.parse_json` and re-serialise it with the standard
library encoder.  Object keys keep their first-seen order and non-ASCII text
is written as-is, so ``minify(pretty(s))`` decodes to the same value as *s*.
"""
from __future__ import annotations

import json
from typing import Optional, Tuple

from .results import (
    SUPPORTED_INDENTS,
    ErrorKind,
    FormattingFailure,
    FormattingOptions,
    FormattingOutcome,
    FormattingSuccess,
)
from .validators import check_input, utf8_size
from .values import JsonValue, parse_json

__all__ = ["format_json", "minify_json"]

PRETTY_SEPARATORS = (",", ": ")
COMPACT_SEPARATORS = (",", ":")


def _precheck(text: str) -> Optional[FormattingFailure]:
    rejected = check_input(text)
    if rejected is None:
        return None
    kind, message = rejected
    return FormattingFailure(message=message, kind=kind)


def _parse_for_output(text: str) -> Tuple[Optional[JsonValue], Optional[FormattingFailure]]:
    """Decode *text*; returns ``(value, None)`` or ``(None, failure)``.

    Parse failures keep the decoder's own wording plus the position.
    """
    try:
        return parse_json(text), None
    except json.JSONDecodeError as exc:
        message = f"Failed to parse JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
    except RecursionError:
        message = "Failed to parse JSON: nested too deeply"
    except ValueError as exc:
        message = f"Failed to parse JSON: {exc}"
    return None, FormattingFailure(message=message, kind=ErrorKind.PARSE_ERROR)


def _serialize(value: JsonValue, indent: Optional[int]) -> str:
    separators = PRETTY_SEPARATORS if indent is not None else COMPACT_SEPARATORS
    return json.dumps(
        value,
        indent=indent,
        separators=separators,
        ensure_ascii=False,
        allow_nan=False,
    )


def format_json(text: str, options: Optional[FormattingOptions] = None) -> FormattingOutcome:
    """Pretty-print *text* using *options* (defaults: 2 spaces, trailing newline)."""
    options = options or FormattingOptions()

    failure = _precheck(text)
    if failure is not None:
        return failure

    # bool is an int subclass; True must not pass as an indent of 1
    if isinstance(options.indent, bool) or options.indent not in SUPPORTED_INDENTS:
        return FormattingFailure(
            message=(
                f"Unsupported indent value {options.indent}, "
                f"only 2 or 4 spaces are supported"
            ),
            kind=ErrorKind.INVALID_OPTION,
        )

    value, failure = _parse_for_output(text)
    if failure is not None:
        return failure

    try:
        formatted = _serialize(value, options.indent)
    except (TypeError, ValueError, RecursionError) as exc:
        return FormattingFailure(
            message=f"Failed to format JSON: {exc}",
            kind=ErrorKind.SERIALIZATION_FAILURE,
        )

    if options.trailing_newline:
        formatted += "\n"
    return FormattingSuccess(formatted=formatted, size_bytes=utf8_size(formatted))


def minify_json(text: str) -> FormattingOutcome:
    """Serialise *text* in compact form: no insignificant whitespace, no newline."""
    failure = _precheck(text)
    if failure is not None:
        return failure

    value, failure = _parse_for_output(text)
    if failure is not None:
        return failure

    try:
        minified = _serialize(value, None)
    except (TypeError, ValueError, RecursionError) as exc:
        return FormattingFailure(
            message=f"Failed to minify JSON: {exc}",
            kind=ErrorKind.SERIALIZATION_FAILURE,
        )

    return FormattingSuccess(formatted=minified, size_bytes=utf8_size(minified))
