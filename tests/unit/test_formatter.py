"""Unit tests for *jsontool.formatter*.

Covers pretty-printing with both indent widths, the trailing newline switch,
option rejection and minification.
"""

from __future__ import annotations

import json

import pytest

from jsontool.formatter import format_json, minify_json
from jsontool.results import ErrorKind, FormattingFailure, FormattingOptions, FormattingSuccess
from jsontool.values import parse_json, structurally_equal

SAMPLE = '{"name":"test","value":42}'


# ---------------------------------------------------------------------------
# format_json
# ---------------------------------------------------------------------------

def test_format_two_spaces_exact():
    result = format_json(SAMPLE, FormattingOptions(indent=2, trailing_newline=False))
    assert isinstance(result, FormattingSuccess)
    assert result.formatted == '{\n  "name": "test",\n  "value": 42\n}'


def test_format_four_spaces_exact():
    result = format_json(SAMPLE, FormattingOptions(indent=4, trailing_newline=False))
    assert result.formatted == '{\n    "name": "test",\n    "value": 42\n}'


def test_format_defaults_add_trailing_newline():
    result = format_json(SAMPLE)
    assert result.ok
    assert result.formatted.endswith("}\n")
    assert not result.formatted.endswith("\n\n")
    assert result.size_bytes == len(result.formatted.encode("utf-8"))


def test_format_nested_structure():
    result = format_json('{"a":[1,{"b":null}],"c":true}', FormattingOptions(trailing_newline=False))
    assert result.formatted == (
        '{\n'
        '  "a": [\n'
        '    1,\n'
        '    {\n'
        '      "b": null\n'
        '    }\n'
        '  ],\n'
        '  "c": true\n'
        '}'
    )


@pytest.mark.parametrize("document, expected", [("[]", "[]"), ("{}", "{}"), ("  7 ", "7")])
def test_format_empty_containers_and_scalars(document, expected):
    result = format_json(document, FormattingOptions(trailing_newline=False))
    assert result.formatted == expected


def test_format_keeps_non_ascii_and_big_integers():
    result = format_json('{"city":"Zürich","n":12345678901234567890}')
    assert '"Zürich"' in result.formatted
    assert "12345678901234567890" in result.formatted


@pytest.mark.parametrize("indent", [3, 0, 8, -2, True])
def test_format_rejects_unsupported_indent(indent):
    result = format_json(SAMPLE, FormattingOptions(indent=indent))
    assert isinstance(result, FormattingFailure)
    assert result.kind is ErrorKind.INVALID_OPTION
    assert "2 or 4" in result.message


def test_format_input_checks_come_before_options():
    result = format_json("", FormattingOptions(indent=3))
    assert result.kind is ErrorKind.EMPTY_INPUT


def test_format_parse_failure_message():
    result = format_json('{"name": invalid}')
    assert result.kind is ErrorKind.PARSE_ERROR
    assert result.message == "Failed to parse JSON: Expecting value (line 1, column 10)"


def test_format_rejects_nan():
    result = format_json("[NaN]")
    assert result.kind is ErrorKind.PARSE_ERROR


def test_format_too_large():
    result = format_json("a" * (6 * 1024 * 1024))
    assert result.kind is ErrorKind.INPUT_TOO_LARGE


# ---------------------------------------------------------------------------
# minify_json
# ---------------------------------------------------------------------------

def test_minify_exact():
    result = minify_json('{\n  "name": "test",\n  "value": 42,\n  "list": [1, 2, 3]\n}\n')
    assert result.ok
    assert result.formatted == '{"name":"test","value":42,"list":[1,2,3]}'
    assert result.size_bytes == len(result.formatted)


def test_minify_keeps_key_order_and_unicode():
    result = minify_json('{ "z": "測試", "a": 1 }')
    assert result.formatted == '{"z":"測試","a":1}'


def test_minify_keeps_whitespace_inside_strings():
    result = minify_json('[ "a  b", "\\n" ]')
    assert result.formatted == '["a  b","\\n"]'


def test_minify_is_idempotent():
    once = minify_json('{ "a" : [ 1 , 2 ] }').formatted
    assert minify_json(once).formatted == once


def test_minify_of_pretty_preserves_value():
    source = '{"b": [1.5, {"c": "x"}], "a": false, "d": null}'
    pretty = format_json(source, FormattingOptions(indent=4)).formatted
    minified = minify_json(pretty).formatted
    assert structurally_equal(parse_json(minified), parse_json(source))
    assert json.loads(minified) == json.loads(source)


def test_pretty_minify_pretty_is_stable():
    source = '{"z": {"y": [3, 2, 1]}, "a": "ü", "m": [{}, []]}'
    pretty = format_json(source).formatted
    again = format_json(minify_json(pretty).formatted).formatted
    assert again == pretty


def test_minify_failures():
    assert minify_json("   ").kind is ErrorKind.EMPTY_INPUT
    failure = minify_json("[1, 2")
    assert failure.kind is ErrorKind.PARSE_ERROR
    assert failure.message.startswith("Failed to parse JSON:")


@pytest.mark.parametrize("transform", [format_json, minify_json])
def test_out_of_range_number_fails_to_parse(transform):
    result = transform("[1e400]")
    assert result.kind is ErrorKind.PARSE_ERROR
    assert result.message == "Failed to parse JSON: Number out of range (line 1, column 2)"


@pytest.mark.parametrize("transform", [format_json, minify_json])
def test_unpaired_surrogate_fails_to_parse(transform):
    result = transform('{"s": "\\udbff"}')
    assert result.kind is ErrorKind.PARSE_ERROR
    assert "(line 1, column 8)" in result.message


def test_output_is_always_utf8_encodable():
    result = format_json('["\\ud83d\\ude00", "\\u00e9"]')
    assert result.formatted.encode("utf-8").decode("utf-8") == '[\n  "\U0001F600",\n  "é"\n]\n'
