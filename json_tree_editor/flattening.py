from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .kinds import JsonKind, kind_of, scalar_text


@dataclass
class FlatTable:
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows

    def as_lists(self) -> List[List[str]]:
        """Rows as lists ordered by `headers` (the shape gr.Dataframe expects)."""
        return [[row.get(h, '') for h in self.headers] for row in self.rows]


def compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(',', ':'))


def _inner_text(value: Any) -> str:
    # Values nested inside a flattened array or object.
    kind = kind_of(value)
    if kind.is_container:
        return compact_json(value)
    return scalar_text(value)


def format_cell(value: Any, flatten_nested: bool = True) -> str:
    """Render one value as a single display string."""
    kind = kind_of(value)
    if kind is JsonKind.NULL:
        return ''
    if kind is JsonKind.ARRAY:
        if not flatten_nested:
            return compact_json(value)
        return '; '.join(_inner_text(item) for item in value)
    if kind is JsonKind.OBJECT:
        if not flatten_nested:
            return compact_json(value)
        return '; '.join(f"{k}: {_inner_text(v)}" for k, v in value.items())
    return scalar_text(value)


def flatten(data: Any, flatten_nested: bool = True) -> FlatTable:
    """Project an object, or an array of objects, into a rectangular table.

    - array: headers are the union of element keys in first-seen order,
      one row per element, missing keys become ''
    - object: its own keys, exactly one row
    - anything else: an empty table
    """
    kind = kind_of(data)

    if kind is JsonKind.OBJECT:
        headers = list(data.keys())
        row = {k: format_cell(v, flatten_nested) for k, v in data.items()}
        return FlatTable(headers=headers, rows=[row])

    if kind is JsonKind.ARRAY:
        # dict preserves first-seen order
        seen: Dict[str, None] = {}
        for item in data:
            if kind_of(item) is JsonKind.OBJECT:
                seen.update(dict.fromkeys(item))
        headers = list(seen)

        rows: List[Dict[str, str]] = []
        for item in data:
            record = item if kind_of(item) is JsonKind.OBJECT else {}
            rows.append({h: format_cell(record.get(h), flatten_nested) for h in headers})
        return FlatTable(headers=headers, rows=rows)

    return FlatTable()
