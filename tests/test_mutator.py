import math

import pytest

from json_tree_editor.errors import KeyCollisionError, NodeTypeError, PathError
from json_tree_editor.mutator import (
    NOT_FOUND,
    check_tree,
    clone,
    get,
    insert_child,
    next_free_key,
    remove_child,
    rename_key,
    resolve,
    set_value,
)


class TestGet:

    def test_nested(self, document):
        assert get(document, ("items", 1, "code")) == "y"
        assert get(document, ()) is document

    @pytest.mark.parametrize("path", [
        ("missing",),
        ("items", 5),
        ("items", "code"),
        ("fields", 0),
        ("name", "x"),
    ])
    def test_not_found(self, document, path):
        assert get(document, path) is NOT_FOUND
        with pytest.raises(PathError):
            resolve(document, path)

    def test_not_found_is_falsy(self):
        assert not NOT_FOUND
        assert repr(NOT_FOUND) == "NOT_FOUND"


class TestSetValue:

    @pytest.mark.parametrize("path,value", [
        (("name",), "other.pdf"),
        (("fields", "depth"), 10),
        (("items", 0, "qty"), None),
        (("items", 1), {"code": "z"}),
        (("tags", 2), ["nested", 1]),
        (("fields", "new"), False),
    ])
    def test_write_then_read(self, document, path, value):
        new = set_value(document, path, value)
        assert get(new, path) == value

    def test_siblings_are_shared(self, document):
        new = set_value(document, ("items", 0, "qty"), 9)
        assert new is not document
        assert new["fields"] is document["fields"]
        assert new["tags"] is document["tags"]
        assert new["items"][1] is document["items"][1]
        assert new["items"] is not document["items"]
        assert document["items"][0]["qty"] == 1

    def test_new_key_appended(self):
        new = set_value({"a": 1}, ("b",), 2)
        assert list(new) == ["a", "b"]

    def test_root(self, document):
        assert set_value(document, (), [1]) == [1]

    def test_same_value_keeps_root(self, document):
        assert set_value(document, ("fields",), document["fields"]) is document

    @pytest.mark.parametrize("path", [
        ("name", "x"),
        ("tags", "first"),
        ("tags", 3),
        ("fields", 0),
        ("missing", "x"),
    ])
    def test_bad_paths_raise_and_leave_root(self, document, path):
        before = clone(document)
        with pytest.raises(PathError):
            set_value(document, path, 1)
        assert document == before

    def test_primitive_parent(self):
        root = {"a": 1}
        with pytest.raises(PathError):
            set_value(root, ("a", "b"), 2)
        assert root == {"a": 1}

    def test_rejects_non_json_values(self, document):
        with pytest.raises(NodeTypeError):
            set_value(document, ("name",), {1, 2})


class TestRenameKey:

    def test_keeps_position(self):
        new = rename_key({"a": 1, "b": 2, "c": 3}, (), "b", "z")
        assert list(new.items()) == [("a", 1), ("z", 2), ("c", 3)]

    def test_nested_shares_siblings(self, document):
        new = rename_key(document, ("fields",), "permit", "permit_no")
        assert new["fields"]["permit_no"] == "A-17"
        assert "permit" not in new["fields"]
        assert new["items"] is document["items"]
        assert "permit" in document["fields"]

    def test_collision_is_rejected(self):
        root = {"a": 1, "b": 2}
        with pytest.raises(KeyCollisionError) as info:
            rename_key(root, (), "a", "b")
        assert isinstance(info.value, PathError)
        assert root == {"a": 1, "b": 2}

    def test_same_name_is_noop(self, document):
        assert rename_key(document, (), "name", "name") is document

    def test_missing_key(self, document):
        with pytest.raises(PathError):
            rename_key(document, (), "nope", "x")

    def test_array_parent(self, document):
        with pytest.raises(NodeTypeError):
            rename_key(document, ("tags",), 0, "x")


class TestInsertChild:

    def test_array_appends_empty_string(self, document):
        new = insert_child(document, ("tags",))
        assert new["tags"] == ["alpha", "beta", "gamma", ""]
        assert len(document["tags"]) == 3

    def test_object_keys_are_disambiguated(self):
        root = {}
        root = insert_child(root, ())
        root = insert_child(root, ())
        root = insert_child(root, ())
        assert list(root) == ["newKey", "newKey1", "newKey2"]
        assert all(v == "" for v in root.values())

    def test_next_free_key_fills_gaps(self):
        assert next_free_key({"newKey": 1, "newKey2": 1}) == "newKey1"

    @pytest.mark.parametrize("path", [("name",), ("fields", "approved")])
    def test_primitive(self, document, path):
        with pytest.raises(NodeTypeError):
            insert_child(document, path)


class TestRemoveChild:

    def test_array_is_compacted(self):
        assert remove_child(["x", "y", "z"], (), 1) == ["x", "z"]

    def test_object_key(self, document):
        new = remove_child(document, ("items", 1), "note")
        assert new["items"][1] == {"code": "y", "qty": 2}
        assert new["items"][0] is document["items"][0]

    @pytest.mark.parametrize("parent,key", [
        (("name",), 0),
        (("tags",), 3),
        (("tags",), "alpha"),
        (("fields",), "nope"),
    ])
    def test_errors(self, document, parent, key):
        with pytest.raises(PathError):
            remove_child(document, parent, key)


class TestCheckTree:

    def test_cycle(self):
        loop = []
        loop.append(loop)
        with pytest.raises(NodeTypeError):
            check_tree(loop)

    def test_shared_subtree_is_not_a_cycle(self):
        leaf = {"a": 1}
        check_tree([leaf, leaf])

    @pytest.mark.parametrize("value", [
        {"a": math.nan},
        {"a": (1, 2)},
        {1: "x"},
        [b"bytes"],
    ])
    def test_non_json(self, value):
        with pytest.raises(NodeTypeError):
            check_tree(value)

    def test_clone_is_deep(self, document):
        copy = clone(document)
        assert copy == document
        assert copy["items"][0] is not document["items"][0]
