import pytest

from json_tree_editor.flattening import flatten, format_cell


class TestFlatten:

    def test_array_union_of_keys(self):
        table = flatten([{"a": 1, "b": 2}, {"a": 3}])
        assert table.headers == ["a", "b"]
        assert table.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": ""}]

    def test_first_seen_order(self):
        table = flatten([{"b": 1}, {"a": 2, "b": 3}, {"c": 4}])
        assert table.headers == ["b", "a", "c"]

    def test_single_object(self, document):
        table = flatten(document)
        assert table.headers == ["name", "fields", "items", "tags"]
        assert len(table.rows) == 1
        assert table.rows[0]["tags"] == "alpha; beta; gamma"
        assert table.rows[0]["fields"] == "permit: A-17; approved: true; depth: 1520.5"

    @pytest.mark.parametrize("value", ["text", 3, True, None])
    def test_scalars_give_empty_table(self, value):
        table = flatten(value)
        assert table.is_empty

    def test_empty_array(self):
        table = flatten([])
        assert table.headers == [] and table.rows == []

    def test_non_object_elements(self):
        table = flatten([1, {"a": 2}])
        assert table.headers == ["a"]
        assert table.rows == [{"a": ""}, {"a": "2"}]

    def test_as_lists(self):
        assert flatten([{"a": 1, "b": 2}, {"b": 3}]).as_lists() == [["1", "2"], ["", "3"]]


class TestFormatCell:

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        ("x", "x"),
        (1, "1"),
        (1.5, "1.5"),
        (True, "true"),
        (["x", "y"], "x; y"),
        ([{"a": 1}, None, False], '{"a":1}; null; false'),
        ({"k": 1, "n": None}, "k: 1; n: null"),
        ({"k": {"deep": [1]}}, 'k: {"deep":[1]}'),
        (["é"], "é"),
        ([], ""),
    ])
    def test_flattened(self, value, expected):
        assert format_cell(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (["x", "y"], '["x","y"]'),
        ({"k": 1, "n": None}, '{"k":1,"n":null}'),
        ("plain", "plain"),
        (None, ""),
    ])
    def test_raw_json_mode(self, value, expected):
        assert format_cell(value, flatten_nested=False) == expected
