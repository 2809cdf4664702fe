"""Stateful editing session over one JSON value.

The editor owns a private copy of the caller's value. Edits go through the
pure mutator and replace the held snapshot; nothing reaches the caller until
`commit` hands a copy to the save collaborator.

States::

    CLEAN --edit--> DIRTY --commit--> SAVING --ok--> SAVED (or CLEAN)
                      ^                 |
                      +----- ERROR <----+ (failure, back to DIRTY)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from . import config
from .coercion import coerce, to_edit_text
from .csv_export import to_csv
from .differ import DiffResult, diff_values
from .errors import EditorStateError, PersistenceError, TreeEditError
from .flattening import FlatTable, flatten
from .io_utils import dump_json, parse_json_text, write_csv_export, write_json_export
from .kinds import kind_of
from .mutator import NOT_FOUND, check_tree, clone, get
from .operations import (
    EditOperation,
    InsertChild,
    RemoveChild,
    RenameKey,
    SetValue,
    apply_operation,
    target_path,
)
from .paths import child_of, format_path, is_index, validate_path
from .persistence import SaveCallable
from .view import TreeRow, ViewState, render_rows

module_logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = 'Failed to update results'
SAVE_OK_MESSAGE = 'Results updated successfully!'
INVALID_JSON_MESSAGE = 'Invalid JSON format'
FIX_BEFORE_SAVE_MESSAGE = 'Please fix JSON errors before saving'
CANNOT_FORMAT_MESSAGE = 'Cannot format invalid JSON'


class EditorState(Enum):
    CLEAN = 'clean'
    DIRTY = 'dirty'
    SAVING = 'saving'
    SAVED = 'saved'
    ERROR = 'error'


@dataclass(frozen=True)
class EditResult:
    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class SaveOutcome:
    ok: bool
    message: Optional[str] = None
    value: Any = None


class TreeEditor:
    """Edit, validate, save and discard one JSON document."""

    def __init__(
        self,
        initial: Any,
        identifier: Optional[str] = None,
        persist: Optional[SaveCallable] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or module_logger
        if isinstance(initial, (str, bytes)):
            initial = parse_json_text(initial)
        self._original = clone(initial)
        self._committed = self._original
        self._value = self._original
        self.identifier = identifier
        self.persist = persist
        self.state = EditorState.CLEAN
        self.view = ViewState()
        self.revision = 0
        self.last_error: Optional[str] = None
        self.is_valid = True
        self._text: Optional[str] = None
        self._cache: Dict[tuple, Any] = {}
        self._success_callbacks: List[Callable[[Any], None]] = []

    # -- read access -----------------------------------------------------

    @property
    def value(self) -> Any:
        """Current snapshot. Treat as read-only; edits go through the editor."""
        return self._value

    @property
    def original(self) -> Any:
        """The value the session was opened with; diffs compare against it."""
        return self._original

    @property
    def committed(self) -> Any:
        """The last value saved successfully (or the opening value)."""
        return self._committed

    @property
    def is_dirty(self) -> bool:
        return self.state is EditorState.DIRTY

    @property
    def has_unsaved_changes(self) -> bool:
        return self.is_dirty or (self._text is not None and not self.is_valid)

    @property
    def text(self) -> str:
        """Whole-document text, including not-yet-valid free-text input."""
        return self._text if self._text is not None else dump_json(self._value)

    def get(self, path) -> Any:
        return get(self._value, path)

    def rows(self) -> Iterator[TreeRow]:
        return render_rows(self._value, self.view)

    def on_success(self, callback: Callable[[Any], None]):
        self._success_callbacks.append(callback)

    # -- state -----------------------------------------------------------

    def _transition(self, state: EditorState):
        if state is not self.state:
            self.logger.debug("editor %s: %s -> %s", self.identifier, self.state.value, state.value)
            self.state = state

    def _fail(self, message: str) -> EditResult:
        self.last_error = message
        self.logger.warning("edit rejected: %s", message)
        return EditResult(False, message)

    def _replace_value(self, new_value: Any):
        self._value = new_value
        self.revision += 1
        # Projections of the previous snapshot are stale now.
        self._cache.clear()

    def _mark_dirty(self, new_value: Any):
        self._replace_value(new_value)
        self._text = None
        self.is_valid = True
        self.last_error = None
        self._transition(EditorState.DIRTY)

    # -- tree edits ------------------------------------------------------

    def apply(self, op: EditOperation) -> EditResult:
        if self.state is EditorState.SAVING:
            return self._fail("Editing is disabled while saving")
        try:
            if isinstance(op, SetValue):
                # The stored value must not alias the caller's object.
                op = replace(op, value=clone(op.value))
            new_value = apply_operation(self._value, op)
        except TreeEditError as exc:
            return self._fail(str(exc))

        if new_value is self._value:
            self.last_error = None
            return EditResult(True)

        self._sync_view(op)
        self._mark_dirty(new_value)
        self.logger.debug("applied %s at %s", type(op).__name__, format_path(target_path(op)))
        return EditResult(True)

    def _sync_view(self, op: EditOperation):
        if isinstance(op, RemoveChild):
            parent = validate_path(op.parent_path)
            if is_index(op.key) and isinstance(get(self._value, parent), list):
                self.view.compact(parent, op.key)
            else:
                self.view.prune(child_of(parent, op.key))
        elif isinstance(op, RenameKey):
            self.view.rename(validate_path(op.parent_path), op.old_key, op.new_key)
        elif isinstance(op, SetValue):
            self.view.prune(validate_path(op.path))

    def set_value(self, path, value: Any) -> EditResult:
        return self.apply(SetValue(path, value))

    def edit_value(self, path, raw_text: str) -> EditResult:
        """Coerce `raw_text` to a primitive and store it at `path`."""
        try:
            path = validate_path(path)
        except TreeEditError as exc:
            return self._fail(str(exc))
        result = self.apply(SetValue(path, coerce(raw_text)))
        if result:
            self.view.set_editing(path, False)
        return result

    def rename_key(self, parent_path, old_key: str, new_key: str) -> EditResult:
        return self.apply(RenameKey(parent_path, old_key, new_key))

    def insert_child(self, path) -> EditResult:
        return self.apply(InsertChild(path))

    def remove_child(self, parent_path, key) -> EditResult:
        return self.apply(RemoveChild(parent_path, key))

    def begin_edit(self, path) -> Optional[str]:
        """Mark a primitive as being edited and return its edit text.

        Only one node is edited at a time; starting an edit ends the others.
        """
        path = validate_path(path)
        self.view.stop_editing()
        node = get(self._value, path)
        if node is NOT_FOUND or kind_of(node).is_container:
            return None
        self.view.set_editing(path, True)
        return to_edit_text(node)

    def cancel_edit(self, path):
        self.view.set_editing(validate_path(path), False)

    def toggle(self, path) -> bool:
        return self.view.toggle(validate_path(path))

    # -- free-text variant -----------------------------------------------

    def edit_text(self, text: str) -> EditResult:
        """Replace the whole document from text; invalid text blocks commit."""
        if self.state is EditorState.SAVING:
            return self._fail("Editing is disabled while saving")
        try:
            parsed = parse_json_text(text)
            check_tree(parsed)
        except TreeEditError:
            self._text = text
            self.is_valid = False
            return self._fail(INVALID_JSON_MESSAGE)

        self.view.clear()
        self._mark_dirty(parsed)
        self._text = text
        return EditResult(True)

    def format_text(self) -> EditResult:
        if not self.is_valid:
            return self._fail(CANNOT_FORMAT_MESSAGE)
        self._text = dump_json(self._value)
        self.last_error = None
        return EditResult(True)

    # -- projections -----------------------------------------------------

    def diff(self) -> DiffResult:
        key = ('diff',)
        if key not in self._cache:
            self._cache[key] = diff_values(self._original, self._value)
        return self._cache[key]

    def table(self, flatten_nested: bool = True) -> FlatTable:
        key = ('table', flatten_nested)
        if key not in self._cache:
            self._cache[key] = flatten(self._value, flatten_nested)
        return self._cache[key]

    def csv(self, options: Optional[config.ExportOptions] = None) -> str:
        options = options or config.ExportOptions()
        key = ('csv', options)
        if key not in self._cache:
            self._cache[key] = to_csv(self._value, options)
        return self._cache[key]

    def export_json(self, filename: Optional[str] = None, directory: Optional[str] = None) -> str:
        return write_json_export(self._value, filename or self.identifier, directory)

    def export_csv(
        self,
        filename: Optional[str] = None,
        directory: Optional[str] = None,
        options: Optional[config.ExportOptions] = None,
    ) -> str:
        return write_csv_export(self._value, filename or self.identifier, directory, options)

    # -- save / close ----------------------------------------------------

    def commit(self, keep_editing: bool = False) -> SaveOutcome:
        """Hand the current value to the save collaborator.

        On failure the editor returns to DIRTY with the message in
        `last_error`; the edited tree is kept so the save can be retried.
        """
        if self.state is EditorState.SAVING:
            return SaveOutcome(False, "A save is already in progress")
        if not self.is_valid:
            self.last_error = FIX_BEFORE_SAVE_MESSAGE
            return SaveOutcome(False, FIX_BEFORE_SAVE_MESSAGE)
        if not self.is_dirty:
            return SaveOutcome(False, "No changes to save")
        if self.persist is None:
            raise EditorStateError("No save collaborator configured")

        snapshot = self._value
        self._transition(EditorState.SAVING)
        try:
            response = self.persist(self.identifier, clone(snapshot)) or {}
            if response.get('status') != 'success':
                raise PersistenceError(response.get('message') or SAVE_FAILED_MESSAGE)
        except Exception as exc:
            message = str(exc) or SAVE_FAILED_MESSAGE
            self.logger.warning("saving %s failed: %s", self.identifier, message)
            self._transition(EditorState.ERROR)
            self.last_error = message
            self._transition(EditorState.DIRTY)
            return SaveOutcome(False, message)

        self.last_error = None
        self._transition(EditorState.SAVED)
        self.logger.info("saved %s (revision %d)", self.identifier, self.revision)
        self._committed = snapshot
        for callback in self._success_callbacks:
            callback(clone(snapshot))

        if keep_editing:
            self._transition(EditorState.CLEAN)
        return SaveOutcome(True, SAVE_OK_MESSAGE, clone(snapshot))

    def close(self, confirm: Optional[Callable[[str], bool]] = None) -> bool:
        """Close the session, asking `confirm` first if there are unsaved edits.

        Returns False (and keeps every edit) when confirmation is missing or
        declined.
        """
        if self.state is EditorState.SAVING:
            return False
        if self.has_unsaved_changes:
            if confirm is None or not confirm(config.UNSAVED_CHANGES_PROMPT):
                self.logger.info("close of %s cancelled, unsaved changes kept", self.identifier)
                return False
        self.discard()
        return True

    def discard(self):
        """Drop all edits since the last successful save."""
        if self._value is not self._committed:
            self._replace_value(self._committed)
        self._text = None
        self.is_valid = True
        self.last_error = None
        self.view.clear()
        self._transition(EditorState.CLEAN)
