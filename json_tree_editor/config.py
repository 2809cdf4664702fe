"""Defaults shared by the editor, the exporters and the Gradio app.

Values that operators may want to change without touching code can be
overridden from the environment.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass

INDENT = 2
NEW_KEY_NAME = 'newKey'
NEW_CHILD_VALUE = ''

RESULTS_SUFFIX = '_results'
JSON_MIME_TYPE = 'application/json'
CSV_MIME_TYPE = 'text/csv;charset=utf-8;'

UNSAVED_CHANGES_PROMPT = 'You have unsaved changes. Are you sure you want to close?'

LOG_LEVEL = os.environ.get('JSON_TREE_EDITOR_LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def output_dir() -> str:
    """Directory for exported and saved files."""
    return os.environ.get('JSON_TREE_EDITOR_OUTPUT_DIR') or tempfile.gettempdir()


@dataclass(frozen=True)
class ExportOptions:
    include_headers: bool = True
    flatten_nested: bool = True
