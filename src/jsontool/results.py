"""jsontool.results
=================

Outcome objects returned by the validate / format / minify transforms.

Every transform returns one of two dataclasses instead of raising: a
``*Success`` carrying the produced value and its byte size, or a
``*Failure`` carrying a human-readable message and an :class:`ErrorKind`.
Callers branch on the ``ok`` attribute.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .values import JsonValue

__all__ = [
    "ErrorKind",
    "ValidationSuccess",
    "ValidationFailure",
    "ValidationOutcome",
    "FormattingOptions",
    "FormattingSuccess",
    "FormattingFailure",
    "FormattingOutcome",
    "SUPPORTED_INDENTS",
]

SUPPORTED_INDENTS = (2, 4)


class ErrorKind(str, Enum):
    """Why a transform failed."""

    INPUT_TOO_LARGE = "input_too_large"
    EMPTY_INPUT = "empty_input"
    INVALID_OPTION = "invalid_option"
    PARSE_ERROR = "parse_error"
    SERIALIZATION_FAILURE = "serialization_failure"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

@dataclass
class ValidationSuccess:
    value: JsonValue
    input_size_bytes: int
    ok: bool = field(default=True, init=False)


@dataclass
class ValidationFailure:
    """A failed validation.

    ``line``/``column`` are 1-based and only set for syntax errors at a known
    offset; size and emptiness checks leave them as ``None``.
    """

    message: str
    kind: ErrorKind
    line: Optional[int] = None
    column: Optional[int] = None
    ok: bool = field(default=False, init=False)


ValidationOutcome = Union[ValidationSuccess, ValidationFailure]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

@dataclass
class FormattingOptions:
    """Pretty-printing options.  Only 2 and 4 space indents are accepted."""

    indent: int = 2
    trailing_newline: bool = True


@dataclass
class FormattingSuccess:
    formatted: str
    size_bytes: int
    ok: bool = field(default=True, init=False)


@dataclass
class FormattingFailure:
    message: str
    kind: ErrorKind
    ok: bool = field(default=False, init=False)


FormattingOutcome = Union[FormattingSuccess, FormattingFailure]
