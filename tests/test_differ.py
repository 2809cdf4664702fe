import pytest

from json_tree_editor.differ import (
    SegmentKind,
    diff_values,
    render_unified,
    serialize,
    side_by_side,
)

U, A, R = SegmentKind.UNCHANGED, SegmentKind.ADDED, SegmentKind.REMOVED


class TestDiffValues:

    @pytest.mark.parametrize("value", [
        {"a": 1},
        [1, [2, {"b": None}]],
        "text",
        None,
    ])
    def test_self_diff_is_empty(self, value):
        result = diff_values(value, value)
        assert result.identical
        assert (result.added, result.removed, result.modified) == (0, 0, 0)
        assert result.summary() == "No differences"
        assert all(seg.kind is U for seg in result.segments)

    def test_single_value_change(self):
        result = diff_values({"a": 1}, {"a": 2})
        assert not result.identical
        assert (result.added, result.removed) == (1, 1)
        assert [seg.kind for seg in result.segments] == [U, R, A, U]
        assert result.segments[1].text == '  "a": 1'
        assert result.segments[2].text == '  "a": 2'
        # both braces touch the changed run
        assert result.modified == 2

    def test_added_key(self):
        result = diff_values({"a": 1}, {"a": 1, "b": 2})
        # the trailing comma makes the "a" line differ too
        assert result.removed == 1
        assert result.added == 2

    def test_key_order_matters(self):
        result = diff_values({"a": 1, "b": 2}, {"b": 2, "a": 1})
        assert not result.identical

    def test_null_against_object(self):
        result = diff_values(None, {})
        assert (result.added, result.removed) == (1, 1)

    def test_summary(self):
        assert diff_values({"a": 1}, {"a": 2}).summary() == "Changes: 2 modified, 1 added, 1 removed"

    def test_unicode_is_kept(self):
        assert serialize({"name": "Zoë"}) == '{\n  "name": "Zoë"\n}'


class TestRendering:

    def test_unified(self):
        text = render_unified(diff_values({"a": 1}, {"a": 2}))
        assert text.splitlines() == ["  {", '-   "a": 1', '+   "a": 2', "  }"]

    def test_side_by_side_pairs_replacements(self):
        rows = side_by_side(diff_values({"a": 1}, {"a": 2}))
        assert rows == [("{", "{"), ('  "a": 1', '  "a": 2'), ("}", "}")]

    def test_side_by_side_pads_shorter_side(self):
        rows = side_by_side(diff_values({"a": 1}, {"a": 1, "b": 2}))
        assert rows == [
            ("{", "{"),
            ('  "a": 1', '  "a": 1,'),
            (None, '  "b": 2'),
            ("}", "}"),
        ]
