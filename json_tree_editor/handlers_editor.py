from __future__ import annotations

import logging
from typing import List, Optional

import gradio as gr

from .coercion import to_edit_text
from .editor import EditorState, TreeEditor
from .errors import TreeEditError
from .io_utils import read_json_content
from .kinds import kind_of
from .mutator import NOT_FOUND
from .paths import child_of, format_path, parent_of, parse_path
from .persistence import LocalFileStore
from .view import render_rows, render_text

logger = logging.getLogger(__name__)

STATE_LABELS = {
    EditorState.CLEAN: "Valid JSON",
    EditorState.DIRTY: "Valid JSON | Unsaved changes",
    EditorState.SAVING: "Saving...",
    EditorState.SAVED: "Saved!",
    EditorState.ERROR: "Save failed",
}


def list_paths(value) -> List[str]:
    return [row.label for row in render_rows(value)]


def editor_badge(editor: Optional[TreeEditor]) -> str:
    if editor is None:
        return ""
    if not editor.is_valid:
        return "Invalid JSON"
    return STATE_LABELS[editor.state]


def render_editor(editor: Optional[TreeEditor], message: str = "", selected: Optional[str] = None):
    """Common outputs: (editor, tree text, path dropdown, status, badge, document text)."""
    if editor is None:
        return None, "", gr.update(choices=[], value=None), message or "No results data available", "", ""

    choices = list_paths(editor.value)
    if selected not in choices:
        selected = choices[0] if choices else None
    status = message or (editor.last_error or "")
    return (
        editor,
        render_text(editor.value, editor.view),
        gr.update(choices=choices, value=selected),
        status,
        editor_badge(editor),
        editor.text,
    )


def load_document(file_obj, store_dir: Optional[str] = None):
    if file_obj is None:
        return render_editor(None, "No file uploaded.")

    try:
        data = read_json_content(file_obj)
        name = getattr(file_obj, 'name', None) or str(file_obj)
        editor = TreeEditor(data, identifier=name, persist=LocalFileStore(store_dir))
    except (TreeEditError, ValueError, OSError) as e:
        logger.warning("Loading %s failed: %s", file_obj, e)
        return render_editor(None, f"Error parsing JSON: {str(e)}")

    count = sum(1 for _ in render_rows(editor.value))
    return render_editor(editor, f"Successfully loaded. Found {count} nodes.")


def _parse(path_text: str):
    return parse_path(path_text or '')


def handle_select_path(editor: Optional[TreeEditor], path_text: str):
    """Edit text for the selected node ('' for containers)."""
    if editor is None:
        return ""
    try:
        text = editor.begin_edit(_parse(path_text))
    except TreeEditError:
        return ""
    return text if text is not None else ""


def handle_cancel_edit(editor: Optional[TreeEditor], path_text: str):
    """Drop the pending edit and restore the stored value in the value box."""
    if editor is None:
        return ""
    try:
        path = _parse(path_text)
        editor.cancel_edit(path)
    except TreeEditError:
        return ""
    node = editor.get(path)
    if node is NOT_FOUND or kind_of(node).is_container:
        return ""
    return to_edit_text(node)


def handle_set_value(editor: Optional[TreeEditor], path_text: str, raw_text: str):
    if editor is None:
        return render_editor(None)
    try:
        path = _parse(path_text)
    except TreeEditError as e:
        return render_editor(editor, str(e), path_text)
    result = editor.edit_value(path, raw_text or '')
    return render_editor(editor, "Value updated." if result else result.error, path_text)


def handle_rename_key(editor: Optional[TreeEditor], path_text: str, new_key: str):
    if editor is None:
        return render_editor(None)
    try:
        path = _parse(path_text)
    except TreeEditError as e:
        return render_editor(editor, str(e), path_text)
    if not path or not isinstance(path[-1], str):
        return render_editor(editor, "Select an object key to rename.", path_text)

    new_key = new_key or ''
    if not new_key.strip():
        return render_editor(editor, "Enter a new key name.", path_text)
    parent = parent_of(path)
    result = editor.rename_key(parent, path[-1], new_key)
    selected = format_path(child_of(parent, new_key)) if result else path_text
    return render_editor(editor, "Key renamed." if result else result.error, selected)


def handle_add_child(editor: Optional[TreeEditor], path_text: str):
    if editor is None:
        return render_editor(None)
    try:
        path = _parse(path_text)
    except TreeEditError as e:
        return render_editor(editor, str(e), path_text)
    result = editor.insert_child(path)
    return render_editor(editor, "Item added." if result else result.error, path_text)


def handle_remove(editor: Optional[TreeEditor], path_text: str):
    if editor is None:
        return render_editor(None)
    try:
        path = _parse(path_text)
    except TreeEditError as e:
        return render_editor(editor, str(e), path_text)
    if not path:
        return render_editor(editor, "The root cannot be removed.", path_text)
    parent = parent_of(path)
    result = editor.remove_child(parent, path[-1])
    return render_editor(editor, "Item removed." if result else result.error, format_path(parent))


def handle_toggle(editor: Optional[TreeEditor], path_text: str):
    if editor is None:
        return render_editor(None)
    try:
        editor.toggle(_parse(path_text))
    except TreeEditError as e:
        return render_editor(editor, str(e), path_text)
    return render_editor(editor, "", path_text)


def handle_text_change(editor: Optional[TreeEditor], text: str):
    if editor is None:
        return render_editor(None)
    if text == editor.text:
        return render_editor(editor)
    result = editor.edit_text(text or '')
    return render_editor(editor, "" if result else result.error)


def handle_format_text(editor: Optional[TreeEditor]):
    if editor is None:
        return render_editor(None)
    result = editor.format_text()
    return render_editor(editor, "" if result else result.error)


def handle_save(editor: Optional[TreeEditor]):
    if editor is None:
        return render_editor(None)
    outcome = editor.commit()
    return render_editor(editor, outcome.message or "")


def handle_discard(editor: Optional[TreeEditor], confirmed: bool):
    if editor is None:
        return render_editor(None)
    if editor.close(confirm=lambda _prompt: bool(confirmed)):
        return render_editor(editor, "Changes discarded.")
    return render_editor(editor, "You have unsaved changes. Tick the confirmation box to discard them.")
