from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Optional

from . import config
from .csv_export import to_csv
from .errors import JsonParseError

logger = logging.getLogger(__name__)


def parse_json_text(text: str) -> Any:
    """`json.loads` that raises `JsonParseError` with the decoder's message."""
    if isinstance(text, bytes):
        text = text.decode('utf-8')
    try:
        return json.loads(text)
    except ValueError as exc:
        raise JsonParseError(f"Invalid JSON format: {exc}") from exc


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_json_text(file_obj.read())

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return parse_json_text(f.read())


def dump_json(value: Any) -> str:
    return json.dumps(value, indent=config.INDENT, ensure_ascii=False)


def export_basename(filename: Optional[str]) -> str:
    """'report.pdf' -> 'report'; only the last extension is dropped."""
    name = os.path.basename((filename or '').strip()) or 'export'
    return re.sub(r'\.[^/.]+$', '', name) or name


def results_filename(filename: Optional[str], ext: str) -> str:
    return f"{export_basename(filename)}{config.RESULTS_SUFFIX}.{ext}"


def _write_text(path: str, text: str) -> str:
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(text)
    logger.info("Wrote %s (%d chars)", path, len(text))
    return path


def write_json_export(value: Any, filename: Optional[str], directory: Optional[str] = None) -> str:
    path = os.path.join(directory or config.output_dir(), results_filename(filename, 'json'))
    return _write_text(path, dump_json(value))


def write_csv_export(
    value: Any,
    filename: Optional[str],
    directory: Optional[str] = None,
    options: Optional[config.ExportOptions] = None,
) -> str:
    path = os.path.join(directory or config.output_dir(), results_filename(filename, 'csv'))
    return _write_text(path, to_csv(value, options))


def mime_type_for(path: str) -> str:
    return config.CSV_MIME_TYPE if path.lower().endswith('.csv') else config.JSON_MIME_TYPE
