from __future__ import annotations

import logging
from typing import Optional

import gradio as gr

from .config import ExportOptions
from .editor import TreeEditor
from .io_utils import mime_type_for

logger = logging.getLogger(__name__)


def preview_table_handler(editor: Optional[TreeEditor], flatten_nested: bool = True, limit: int = 3):
    if editor is None:
        return gr.update(value=None), "No data loaded."

    table = editor.table(bool(flatten_nested))
    if not table.headers:
        return gr.update(value=None), "Nothing to tabulate: the document is not an object or an array of objects."

    rows = table.as_lists()[:max(1, int(limit))]
    return (
        gr.update(value={'headers': table.headers, 'data': rows}),
        f"Columns: {len(table.headers)} | Rows: {len(table.rows)}",
    )


def export_data_handler(
    editor: Optional[TreeEditor],
    output_format: str,
    file_name: Optional[str] = None,
    flatten_nested: bool = True,
    directory: Optional[str] = None,
):
    if editor is None:
        return None, "No data loaded."

    name = (file_name or '').strip() or editor.identifier or 'output'
    try:
        if output_format == "CSV":
            path = editor.export_csv(name, directory, ExportOptions(flatten_nested=bool(flatten_nested)))
        else:
            path = editor.export_json(name, directory)
    except OSError as e:
        logger.warning("Export failed: %s", e)
        return None, f"Error during export: {str(e)}"

    return path, f"Export successful! Saved to {path} ({mime_type_for(path)})"
