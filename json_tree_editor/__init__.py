"""Core logic for the JSON Tree Editor.

The Gradio UI lives in `app.py`. This package contains the pieces that:
- address and edit nodes of a JSON value by path
- infer primitive types from edited text
- run an edit session with save/discard
- compare two values line by line
- flatten values into tables and CSV
"""

from .differ import DiffResult, diff_values
from .editor import EditorState, EditResult, SaveOutcome, TreeEditor
from .errors import (
    EditorStateError,
    JsonParseError,
    KeyCollisionError,
    NodeTypeError,
    PathError,
    PersistenceError,
    TreeEditError,
)
from .flattening import FlatTable, flatten
from .mutator import NOT_FOUND, get, insert_child, remove_child, rename_key, set_value
from .coercion import coerce
from .csv_export import to_csv

__version__ = '0.1.0'
