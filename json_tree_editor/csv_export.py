"""CSV text for flattened JSON.

Quoting is minimal and fixed: a field is wrapped in double quotes only when it
contains a comma, a double quote or a newline, and inner quotes are doubled.
Rows are joined with '\\n' and there is no trailing newline.
"""

from __future__ import annotations

import csv
import io
from typing import Any, List, Optional

from .config import ExportOptions
from .flattening import FlatTable, flatten


def escape_csv_field(field: Any) -> str:
    if not isinstance(field, str):
        field = str(field)
    if ',' in field or '\n' in field or '"' in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def table_to_csv(table: FlatTable, include_headers: bool = True) -> str:
    lines: List[str] = []
    if include_headers:
        lines.append(','.join(escape_csv_field(h) for h in table.headers))
    for row in table.rows:
        lines.append(','.join(escape_csv_field(row.get(h, '')) for h in table.headers))
    return '\n'.join(lines)


def to_csv(data: Any, options: Optional[ExportOptions] = None) -> str:
    """Flatten `data` and serialize it; scalars and empty arrays give ''."""
    options = options or ExportOptions()
    table = flatten(data, options.flatten_nested)
    if not table.rows:
        return ''
    return table_to_csv(table, options.include_headers)


def parse_csv_line(line: str) -> List[str]:
    """Split one CSV line, honouring quotes and doubled quotes."""
    return next(csv.reader([line]), [])


def parse_csv(text: str) -> List[List[str]]:
    """Parse a whole CSV document; quoted fields may span lines."""
    return list(csv.reader(io.StringIO(text)))
