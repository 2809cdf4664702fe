"""Path-addressed reads and writes over an untyped JSON tree.

Every write returns a new root. Only the containers on the path from the
root to the edited node are copied; all other subtrees are shared with the
input, so callers can detect changes by identity.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, List

from . import config
from .errors import KeyCollisionError, NodeTypeError, PathError
from .kinds import JsonKind, kind_of
from .paths import Path, Segment, format_path, is_index, validate_path


class _NotFound:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'NOT_FOUND'

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


def check_tree(value: Any) -> None:
    """Raise `NodeTypeError` unless `value` is an acyclic tree of JSON values."""
    active = set()

    def walk(node, path):
        kind = kind_of(node)
        if not kind.is_container:
            return
        if id(node) in active:
            raise NodeTypeError(f"Cycle detected at {format_path(path)}")
        active.add(id(node))
        if kind is JsonKind.OBJECT:
            for key, child in node.items():
                if not isinstance(key, str):
                    raise NodeTypeError(f"Object key {key!r} at {format_path(path)} is not a string")
                walk(child, path + (key,))
        else:
            for idx, child in enumerate(node):
                walk(child, path + (idx,))
        active.discard(id(node))

    walk(value, ())


def clone(value: Any) -> Any:
    """Validated deep copy, used whenever a value crosses into the editor."""
    check_tree(value)
    return copy.deepcopy(value)


def _step(node: Any, segment: Segment) -> Any:
    kind = kind_of(node)
    if kind is JsonKind.OBJECT:
        if isinstance(segment, str) and segment in node:
            return node[segment]
    elif kind is JsonKind.ARRAY:
        if is_index(segment) and segment < len(node):
            return node[segment]
    return NOT_FOUND


def get(root: Any, path) -> Any:
    """Return the node at `path`, or `NOT_FOUND` if any segment fails to resolve."""
    node = root
    for segment in validate_path(path):
        node = _step(node, segment)
        if node is NOT_FOUND:
            return NOT_FOUND
    return node


def resolve(root: Any, path) -> Any:
    """Like `get`, but raise `PathError` naming the first segment that fails."""
    path = validate_path(path)
    node = root
    for depth, segment in enumerate(path):
        nxt = _step(node, segment)
        if nxt is NOT_FOUND:
            where = format_path(path[:depth])
            kind = kind_of(node)
            if not kind.is_container:
                reason = f"{where} is a {kind.value}, not a container"
            elif kind is JsonKind.ARRAY and not is_index(segment):
                reason = f"key {segment!r} used on array {where}"
            elif kind is JsonKind.OBJECT and not isinstance(segment, str):
                reason = f"index {segment!r} used on object {where}"
            else:
                reason = f"{segment!r} not found in {where}"
            raise PathError(f"Cannot resolve {format_path(path)}: {reason}", path)
        node = nxt
    return node


def _check_child_segment(parent: Any, segment: Segment, path: Path, must_exist: bool) -> JsonKind:
    kind = kind_of(parent)
    if kind is JsonKind.OBJECT:
        if not isinstance(segment, str):
            raise PathError(f"Object at {format_path(path[:-1])} needs a string key, got {segment!r}", path)
        if must_exist and segment not in parent:
            raise PathError(f"Key {segment!r} not found in {format_path(path[:-1])}", path)
    elif kind is JsonKind.ARRAY:
        if not is_index(segment):
            raise PathError(f"Array at {format_path(path[:-1])} needs an integer index, got {segment!r}", path)
        if segment >= len(parent):
            raise PathError(f"Index {segment} out of range for {format_path(path[:-1])}", path)
    else:
        raise PathError(f"{format_path(path[:-1])} is a {kind.value}, not a container", path)
    return kind


def _shallow_copy(node: Any) -> Any:
    return dict(node) if kind_of(node) is JsonKind.OBJECT else list(node)


def update_in(root: Any, path, fn: Callable[[Any], Any]) -> Any:
    """Replace the node at `path` with `fn(node)`, copying only its ancestors.

    When `fn` returns the very same node the original root is returned.
    """
    path = validate_path(path)
    resolve(root, path)

    chain: List[Any] = [root]
    for segment in path:
        chain.append(_step(chain[-1], segment))

    new_node = fn(chain[-1])
    if new_node is chain[-1]:
        return root

    for depth in range(len(path) - 1, -1, -1):
        parent = _shallow_copy(chain[depth])
        parent[path[depth]] = new_node
        new_node = parent
    return new_node


def set_value(root: Any, path, value: Any) -> Any:
    """Return a new root with the node at `path` replaced by `value`.

    An object parent accepts a new key; an array parent only in-range indices.
    """
    path = validate_path(path)
    check_tree(value)
    if not path:
        return value

    parent_path, segment = path[:-1], path[-1]
    parent = resolve(root, parent_path)
    _check_child_segment(parent, segment, path, must_exist=False)

    def replace(node):
        if _step(node, segment) is value:
            return node
        new = _shallow_copy(node)
        new[segment] = value
        return new

    return update_in(root, parent_path, replace)


def rename_key(root: Any, parent_path, old_key: str, new_key: str) -> Any:
    """Rename `old_key` in the object at `parent_path`, keeping its position.

    Renaming onto a key that already exists raises `KeyCollisionError`.
    """
    parent_path = validate_path(parent_path)
    parent = resolve(root, parent_path)
    kind = kind_of(parent)
    if kind is not JsonKind.OBJECT:
        raise NodeTypeError(f"Cannot rename keys of a {kind.value} at {format_path(parent_path)}")
    if not isinstance(new_key, str):
        raise NodeTypeError(f"Object keys must be strings, got {new_key!r}")
    if old_key not in parent:
        raise PathError(f"Key {old_key!r} not found in {format_path(parent_path)}", parent_path + (old_key,))
    if new_key == old_key:
        return root
    if new_key in parent:
        raise KeyCollisionError(
            f"Key {new_key!r} already exists in {format_path(parent_path)}", parent_path + (new_key,)
        )

    def rename(node):
        return {(new_key if k == old_key else k): v for k, v in node.items()}

    return update_in(root, parent_path, rename)


def next_free_key(obj: dict, base: str = config.NEW_KEY_NAME) -> str:
    """`base`, or `base1`, `base2`, ... whichever is first unused in `obj`."""
    if base not in obj:
        return base
    n = 1
    while f"{base}{n}" in obj:
        n += 1
    return f"{base}{n}"


def insert_child(root: Any, path) -> Any:
    """Append an empty string to an array, or add a fresh key to an object."""
    path = validate_path(path)
    node = resolve(root, path)
    kind = kind_of(node)
    if kind is JsonKind.ARRAY:
        return update_in(root, path, lambda n: n + [config.NEW_CHILD_VALUE])
    if kind is JsonKind.OBJECT:
        key = next_free_key(node)

        def add(n):
            new = dict(n)
            new[key] = config.NEW_CHILD_VALUE
            return new

        return update_in(root, path, add)
    raise NodeTypeError(f"Cannot add a child to a {kind.value} at {format_path(path)}")


def remove_child(root: Any, parent_path, key: Segment) -> Any:
    """Delete an object key or an array element; arrays are compacted."""
    parent_path = validate_path(parent_path)
    parent = resolve(root, parent_path)
    _check_child_segment(parent, key, parent_path + (key,), must_exist=True)

    if kind_of(parent) is JsonKind.ARRAY:
        return update_in(root, parent_path, lambda n: n[:key] + n[key + 1:])

    def drop(n):
        new = dict(n)
        del new[key]
        return new

    return update_in(root, parent_path, drop)
