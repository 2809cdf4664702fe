from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any

from .errors import NodeTypeError


class JsonKind(Enum):
    NULL = 'null'
    BOOL = 'boolean'
    NUMBER = 'number'
    STRING = 'string'
    ARRAY = 'array'
    OBJECT = 'object'

    @property
    def is_container(self) -> bool:
        return self in (JsonKind.ARRAY, JsonKind.OBJECT)


def kind_of(value: Any) -> JsonKind:
    """Classify a native JSON value.

    `bool` is tested before numbers since it subclasses `int`. Values with no
    JSON form (tuples, sets, bytes, NaN/inf) raise `NodeTypeError`.
    """
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise NodeTypeError(f"Non-finite number has no JSON form: {value!r}")
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise NodeTypeError(f"Not a JSON value: {type(value).__name__}")


def type_name(value: Any) -> str:
    return kind_of(value).value


def scalar_text(value: Any) -> str:
    """JSON text of a primitive, strings returned verbatim."""
    kind = kind_of(value)
    if kind is JsonKind.STRING:
        return value
    if kind is JsonKind.NULL:
        return 'null'
    if kind is JsonKind.BOOL:
        return 'true' if value else 'false'
    if kind is JsonKind.NUMBER:
        return json.dumps(value)
    raise NodeTypeError(f"Expected a primitive, got {kind.value}")


def _plural(count: int, one: str, many: str) -> str:
    return f"{count} {one if count == 1 else many}"


def summarize(value: Any) -> str:
    """Short display text for a node, e.g. `{2 properties}` or `"abc"`."""
    kind = kind_of(value)
    if kind is JsonKind.OBJECT:
        return '{' + _plural(len(value), 'property', 'properties') + '}'
    if kind is JsonKind.ARRAY:
        return '[' + _plural(len(value), 'item', 'items') + ']'
    if kind is JsonKind.STRING:
        return f'"{value}"'
    return scalar_text(value)
