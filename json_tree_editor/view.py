"""Presentation state kept beside the JSON value, keyed by path."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Optional

from .kinds import JsonKind, kind_of, summarize
from .paths import Path, Segment, format_path, is_index, is_prefix

ROOT_KEY = 'root'


@dataclass(frozen=True)
class NodeUiState:
    expanded: bool = True
    editing: bool = False


@dataclass(frozen=True)
class TreeRow:
    path: Path
    key: Segment
    depth: int
    kind: JsonKind
    display: str
    expandable: bool
    expanded: bool
    editing: bool = False

    @property
    def label(self) -> str:
        return format_path(self.path)


class ViewState:
    """Per-path expand/edit flags. Paths without an entry use the defaults."""

    def __init__(self):
        self._nodes: Dict[Path, NodeUiState] = {}

    def __len__(self):
        return len(self._nodes)

    def get(self, path: Path) -> NodeUiState:
        return self._nodes.get(tuple(path), NodeUiState())

    def _put(self, path: Path, state: NodeUiState):
        if state == NodeUiState():
            self._nodes.pop(tuple(path), None)
        else:
            self._nodes[tuple(path)] = state

    def set_expanded(self, path: Path, expanded: bool):
        self._put(path, replace(self.get(path), expanded=expanded))

    def toggle(self, path: Path) -> bool:
        expanded = not self.get(path).expanded
        self.set_expanded(path, expanded)
        return expanded

    def set_editing(self, path: Path, editing: bool):
        self._put(path, replace(self.get(path), editing=editing))

    def stop_editing(self):
        for p in [p for p, s in self._nodes.items() if s.editing]:
            self.set_editing(p, False)

    def clear(self):
        self._nodes.clear()

    def prune(self, path: Path):
        """Forget `path` and everything below it."""
        for p in [p for p in self._nodes if is_prefix(path, p)]:
            del self._nodes[p]

    def rename(self, parent_path: Path, old_key: str, new_key: str):
        old_prefix = tuple(parent_path) + (old_key,)
        new_prefix = tuple(parent_path) + (new_key,)
        moved = {p: s for p, s in self._nodes.items() if is_prefix(old_prefix, p)}
        for p in moved:
            del self._nodes[p]
        for p, s in moved.items():
            self._nodes[new_prefix + p[len(old_prefix):]] = s

    def compact(self, parent_path: Path, index: int):
        """Shift entries after a removed array element down by one."""
        parent_path = tuple(parent_path)
        depth = len(parent_path)
        self.prune(parent_path + (index,))
        shifted = {}
        for p in list(self._nodes):
            if len(p) > depth and is_prefix(parent_path, p) and is_index(p[depth]) and p[depth] > index:
                shifted[parent_path + (p[depth] - 1,) + p[depth + 1:]] = self._nodes.pop(p)
        self._nodes.update(shifted)


def render_rows(value: Any, view: Optional[ViewState] = None) -> Iterator[TreeRow]:
    """Yield display rows in document order, skipping collapsed subtrees."""
    view = view or ViewState()

    def walk(node, path, key, depth):
        kind = kind_of(node)
        state = view.get(path)
        yield TreeRow(
            path=path,
            key=key,
            depth=depth,
            kind=kind,
            display=summarize(node),
            expandable=kind.is_container,
            expanded=state.expanded,
            editing=state.editing,
        )
        if not (kind.is_container and state.expanded):
            return
        children = node.items() if kind is JsonKind.OBJECT else enumerate(node)
        for child_key, child in children:
            yield from walk(child, path + (child_key,), child_key, depth + 1)

    yield from walk(value, (), ROOT_KEY, 0)


def render_text(value: Any, view: Optional[ViewState] = None, indent: str = '  ') -> str:
    """Plain-text outline of the tree, one row per line."""
    lines = []
    for row in render_rows(value, view):
        marker = ('v ' if row.expanded else '> ') if row.expandable else '  '
        lines.append(f"{indent * row.depth}{marker}{row.key}: {row.display}")
    return '\n'.join(lines)
