from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from . import mutator
from .paths import Path, Segment, validate_path


@dataclass(frozen=True)
class SetValue:
    path: Path
    value: Any


@dataclass(frozen=True)
class RenameKey:
    parent_path: Path
    old_key: str
    new_key: str


@dataclass(frozen=True)
class InsertChild:
    path: Path


@dataclass(frozen=True)
class RemoveChild:
    parent_path: Path
    key: Segment


EditOperation = Union[SetValue, RenameKey, InsertChild, RemoveChild]


def apply_operation(root: Any, op: EditOperation) -> Any:
    """Apply one edit to an immutable snapshot and return the new snapshot."""
    if isinstance(op, SetValue):
        return mutator.set_value(root, op.path, op.value)
    if isinstance(op, RenameKey):
        return mutator.rename_key(root, op.parent_path, op.old_key, op.new_key)
    if isinstance(op, InsertChild):
        return mutator.insert_child(root, op.path)
    if isinstance(op, RemoveChild):
        return mutator.remove_child(root, op.parent_path, op.key)
    raise TypeError(f"Unknown edit operation: {op!r}")


def target_path(op: EditOperation) -> Path:
    """Path of the node whose subtree the operation changes."""
    if isinstance(op, SetValue):
        return validate_path(op.path)
    if isinstance(op, InsertChild):
        return validate_path(op.path)
    return validate_path(op.parent_path)
