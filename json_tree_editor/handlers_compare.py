from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .differ import DiffResult, SegmentKind, diff_values, render_unified, side_by_side
from .editor import TreeEditor
from .errors import TreeEditError
from .io_utils import read_json_content

logger = logging.getLogger(__name__)

HIGHLIGHT_LABELS = {
    SegmentKind.ADDED: 'added',
    SegmentKind.REMOVED: 'removed',
    SegmentKind.UNCHANGED: None,
}


def highlighted_lines(result: DiffResult) -> List[Tuple[str, Optional[str]]]:
    """(text, label) pairs in the shape gr.HighlightedText takes."""
    return [(seg.text + '\n', HIGHLIGHT_LABELS[seg.kind]) for seg in result.segments]


def comparison_rows(result: DiffResult) -> List[List[str]]:
    return [[left or '', right or ''] for left, right in side_by_side(result)]


def render_comparison(result: DiffResult):
    """(summary, highlighted lines, side-by-side rows, unified text)."""
    if result.identical:
        return "No Changes Detected. The current result matches the original.", [], [], ""
    return result.summary(), highlighted_lines(result), comparison_rows(result), render_unified(result)


def compare_editor_handler(editor: Optional[TreeEditor]):
    if editor is None:
        return "No data loaded.", [], [], ""
    return render_comparison(editor.diff())


def compare_files_handler(original_file, current_file):
    if original_file is None or current_file is None:
        return "Upload both files to compare.", [], [], ""

    try:
        original = read_json_content(original_file)
        current = read_json_content(current_file)
    except (TreeEditError, ValueError, OSError) as exc:
        logger.warning("Comparison input rejected: %s", exc)
        return f"Error parsing JSON: {str(exc)}", [], [], ""

    return render_comparison(diff_values(original, current))
