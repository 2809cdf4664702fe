import io
import json

import pytest

from json_tree_editor.errors import JsonParseError
from json_tree_editor.io_utils import (
    export_basename,
    mime_type_for,
    parse_json_text,
    read_json_content,
    results_filename,
    write_csv_export,
    write_json_export,
)
from json_tree_editor.persistence import LocalFileStore


class TestNames:

    @pytest.mark.parametrize("filename,expected", [
        ("report.pdf", "report"),
        ("archive.tar.gz", "archive.tar"),
        ("/tmp/uploads/data.json", "data"),
        ("noext", "noext"),
        ("", "export"),
        (None, "export"),
    ])
    def test_basename(self, filename, expected):
        assert export_basename(filename) == expected

    def test_results_filename(self):
        assert results_filename("scan_01.pdf", "csv") == "scan_01_results.csv"
        assert results_filename("scan_01.pdf", "json") == "scan_01_results.json"


class TestRead:

    def test_from_path(self, tmp_path):
        path = tmp_path / "in.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        assert read_json_content(str(path)) == {"a": 1}

    def test_from_file_object(self):
        assert read_json_content(io.BytesIO(b'[1, "\xc3\xa9"]')) == [1, "é"]

    def test_invalid(self):
        with pytest.raises(JsonParseError):
            read_json_content(io.StringIO("{nope"))

    def test_missing(self):
        with pytest.raises(ValueError):
            read_json_content(None)

    def test_parse_error_message(self):
        with pytest.raises(JsonParseError, match="Invalid JSON format"):
            parse_json_text("[1,")


class TestWrite:

    def test_json_export(self, tmp_path, document):
        path = write_json_export(document, "report.pdf", str(tmp_path))
        assert path.endswith("report_results.json")
        with open(path, encoding="utf-8") as f:
            text = f.read()
        assert text == json.dumps(document, indent=2, ensure_ascii=False)

    def test_csv_export(self, tmp_path):
        path = write_csv_export([{"a": "x"}, {"a": "y, z"}], "t.json", str(tmp_path))
        with open(path, encoding="utf-8", newline="") as f:
            assert f.read() == 'a\nx\n"y, z"'


class TestLocalFileStore:

    def test_success(self, tmp_path):
        store = LocalFileStore(str(tmp_path))
        response = store("/uploads/report.pdf", {"a": 1})
        assert response["status"] == "success"
        with open(response["path"], encoding="utf-8") as f:
            assert json.load(f) == {"a": 1}

    def test_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        response = LocalFileStore(str(blocker))("report", {"a": 1})
        assert response["status"] == "error"
        assert "Error writing" in response["message"]


def test_mime_type_for():
    assert mime_type_for("/tmp/x_results.csv") == "text/csv;charset=utf-8;"
    assert mime_type_for("/tmp/x_results.json") == "application/json"
