import pytest

from json_tree_editor.errors import PathError
from json_tree_editor.paths import (
    child_of,
    format_path,
    is_prefix,
    parent_of,
    parse_path,
    validate_path,
)


class TestFormatPath:

    @pytest.mark.parametrize("path,expected", [
        ((), "(root)"),
        (("a",), "a"),
        (("items", 0, "name"), "items[0].name"),
        ((0, "a"), "[0].a"),
        (("m", 1, 2), "m[1][2]"),
        (("gpt-3.5-turbo",), "gpt-3\\.5-turbo"),
        (("a[b]",), "a\\[b\\]"),
        (("a", ""), "a[\"\"]"),
        ((" x",), "[\" x\"]"),
        (("(root)",), "[\"(root)\"]"),
    ])
    def test_format(self, path, expected):
        assert format_path(path) == expected

    @pytest.mark.parametrize("path", [
        ("items", 0, "name"),
        ("gpt-3.5-turbo", "response"),
        ("back\\slash", 3),
        ("a[b]", "c.d"),
        ("a", ""),
        ("", "b", 0),
        (" x", "y "),
        ("(root)",),
        ("a", "(root)", ""),
        ("say \"hi\"", "tab\t", "\u00e9"),
        ("", ""),
    ])
    def test_parse_inverts_format(self, path):
        assert parse_path(format_path(path)) == path


class TestParsePath:

    @pytest.mark.parametrize("text", ["", "(root)", None])
    def test_root_forms(self, text):
        assert parse_path(text) == ()

    def test_dotted_and_indexed(self):
        assert parse_path("responses.list[12].value") == ("responses", "list", 12, "value")

    def test_text_is_not_trimmed(self):
        assert parse_path("  ") == ("  ",)
        assert parse_path(" a .b") == (" a ", "b")

    def test_quoted_keys(self):
        assert parse_path('a[""].b') == ("a", "", "b")
        assert parse_path('["x.y"][0]') == ("x.y", 0)

    @pytest.mark.parametrize("text", [
        "a[x]", "a[1", "a]", "a[-1]",
        "a.", ".a", "a..b", 'a["b"', 'a["b]',
    ])
    def test_malformed(self, text):
        with pytest.raises(PathError):
            parse_path(text)


class TestValidatePath:

    def test_list_becomes_tuple(self):
        assert validate_path(["a", 0]) == ("a", 0)

    def test_string_is_parsed(self):
        assert validate_path("a[0]") == ("a", 0)

    @pytest.mark.parametrize("path", [(-1,), (True,), (1.5,), (None,)])
    def test_rejects_bad_segments(self, path):
        with pytest.raises(PathError):
            validate_path(path)

    def test_helpers(self):
        assert parent_of(("a", 0)) == ("a",)
        assert child_of(("a",), 0) == ("a", 0)
        assert is_prefix(("a",), ("a", 0))
        assert is_prefix((), ("a",))
        assert not is_prefix(("a", 0), ("a",))
        with pytest.raises(PathError):
            parent_of(())
