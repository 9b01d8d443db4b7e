"""Tests for jsontool.fileio import / export helpers."""

import pytest

from jsontool.config import MAX_IMPORT_FILE_SIZE
from jsontool.exceptions import FileAccessError
from jsontool.fileio import read_json_file, write_json_file


def test_read_returns_content_and_name(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"k": "välue"}', encoding="utf-8")

    result = read_json_file(path)

    assert result.content == '{"k": "välue"}'
    assert result.file_name == "data.json"


def test_read_accepts_upper_case_suffix(tmp_path):
    path = tmp_path / "DATA.JSON"
    path.write_text("[]", encoding="utf-8")
    assert read_json_file(str(path)).content == "[]"


@pytest.mark.parametrize(
    "name, message",
    [
        ("missing.json", "File does not exist"),
        ("notes.txt", "must be a .json file, got: .txt"),
        ("README", "no extension"),
    ],
)
def test_read_rejections(tmp_path, name, message):
    path = tmp_path / name
    if name != "missing.json":
        path.write_text("[]", encoding="utf-8")

    with pytest.raises(FileAccessError) as exc:
        read_json_file(path)
    assert message in str(exc.value)


def test_read_rejects_directory(tmp_path):
    folder = tmp_path / "folder.json"
    folder.mkdir()
    with pytest.raises(FileAccessError, match="not a file"):
        read_json_file(folder)


def test_read_rejects_large_file(tmp_path):
    path = tmp_path / "big.json"
    path.write_bytes(b" " * (MAX_IMPORT_FILE_SIZE + 1))
    with pytest.raises(FileAccessError, match="too large"):
        read_json_file(path)


def test_read_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b'["\xff"]')
    with pytest.raises(FileAccessError, match="Failed to read file"):
        read_json_file(path)


def test_write_adds_suffix_and_parents(tmp_path):
    written = write_json_file(tmp_path / "nested" / "dir" / "result", "[1]")

    assert written == tmp_path / "nested" / "dir" / "result.json"
    assert written.read_text(encoding="utf-8") == "[1]"


def test_write_overwrites_existing(tmp_path):
    path = tmp_path / "out.json"
    path.write_text("old", encoding="utf-8")

    write_json_file(path, "new")

    assert path.read_text(encoding="utf-8") == "new"


def test_write_rejects_other_suffix(tmp_path):
    with pytest.raises(FileAccessError, match=r"got: \.csv"):
        write_json_file(tmp_path / "out.csv", "[]")
    assert not (tmp_path / "out.csv").exists()


def test_write_rejects_unencodable_text(tmp_path):
    target = tmp_path / "broken.json"
    with pytest.raises(FileAccessError, match="not valid UTF-8"):
        write_json_file(target, '["\ud800"]')
    assert not target.exists()
