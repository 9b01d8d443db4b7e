"""jsontool.values
================

In-memory representation of a parsed JSON document.

Documents are decoded into plain Python containers: ``dict`` for objects
(insertion ordered, so first-seen key order survives a parse/serialise round
trip), ``list`` for arrays and the usual scalars.  The standard library
:mod:`json` decoder does the actual parsing; this module only tightens it to
strict JSON:

* the ``NaN``/``Infinity`` extensions the decoder accepts by default are
  rejected;
* number literals that overflow a float (``1e400``) are rejected instead of
  decoding to ``inf``;
* ``\\uXXXX`` escapes that leave an unpaired surrogate are rejected, since
  the result could not be written back out as UTF-8.
"""
from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, List, Optional, Union

__all__ = [
    "JsonValue",
    "parse_json",
    "structurally_equal",
]

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

# A string literal, or a bare constant / number token, whichever comes first.
# Matching strings first keeps quoted "NaN" or "1e400" from being reported.
_TOKEN_RE = re.compile(
    r'"(?:[^"\\]|\\.)*"'
    r'|(-?Infinity|NaN|-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?)',
    re.DOTALL,
)
_STRING_RE = re.compile(r'"(?:[^"\\]|\\.)*"', re.DOTALL)
_ESCAPE_RE = re.compile(r'\\(?:u([0-9a-fA-F]{4})|.)|([\ud800-\udfff])', re.DOTALL)
_SURROGATE_HINT_RE = re.compile(r'\\u[dD][89a-fA-F]|[\ud800-\udfff]')


class _LiteralRejected(Exception):
    """Raised from a decoder hook; carries the offending literal."""

    def __init__(self, literal: str, reason: str):
        super().__init__(literal)
        self.literal = literal
        self.reason = reason


def _reject_constant(name: str) -> Any:
    raise _LiteralRejected(name, "Expecting value")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise _LiteralRejected(literal, "Number out of range")
    return value


def _literal_position(text: str, literal: str) -> int:
    for match in _TOKEN_RE.finditer(text):
        if match.group(1) == literal:
            return match.start(1)
    return 0


def _unpaired_surrogate(literal: str) -> Optional[tuple]:
    """Return ``(offset, message)`` of the first unpaired surrogate in *literal*."""
    pending = None
    pending_end = -1
    for match in _ESCAPE_RE.finditer(literal):
        if match.group(2):
            return match.start(), "Invalid character: unpaired surrogate"
        code = match.group(1)
        unit = int(code, 16) if code else None
        if pending is not None:
            if unit is not None and 0xDC00 <= unit <= 0xDFFF and match.start() == pending_end:
                pending = None
                continue
            return pending, "Invalid \\uXXXX escape: unpaired surrogate"
        if unit is None:
            continue
        if 0xD800 <= unit <= 0xDBFF:
            pending, pending_end = match.start(), match.end()
        elif 0xDC00 <= unit <= 0xDFFF:
            return match.start(), "Invalid \\uXXXX escape: unpaired surrogate"
    if pending is not None:
        return pending, "Invalid \\uXXXX escape: unpaired surrogate"
    return None


def _check_surrogates(text: str) -> None:
    if not _SURROGATE_HINT_RE.search(text):
        return
    # only called on text that decoded, so string literals tokenize cleanly
    for match in _STRING_RE.finditer(text):
        found = _unpaired_surrogate(match.group(0))
        if found is not None:
            offset, message = found
            raise json.JSONDecodeError(message, text, match.start() + offset)


def parse_json(text: str) -> JsonValue:
    """Decode *text* as strict JSON.

    Raises
    ------
    json.JSONDecodeError
        On any syntax error, including the bare ``NaN``/``Infinity``
        literals, out-of-range numbers and unpaired surrogates.
        ``lineno``/``colno`` are 1-based.
    RecursionError
        When nesting is deeper than the interpreter can decode.
    """
    try:
        value = json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except _LiteralRejected as exc:
        pos = _literal_position(text, exc.literal)
        raise json.JSONDecodeError(exc.reason, text, pos) from None
    _check_surrogates(text)
    return value


def structurally_equal(left: Any, right: Any) -> bool:
    """Compare two decoded values, including object key order.

    Plain ``==`` is not enough: it ignores dict ordering and treats
    ``True == 1``.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, dict):
        if not isinstance(right, dict) or list(left) != list(right):
            return False
        return all(structurally_equal(left[k], right[k]) for k in left)
    if isinstance(left, list):
        if not isinstance(right, list) or len(left) != len(right):
            return False
        return all(structurally_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right
