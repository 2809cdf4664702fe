"""Turn free-form edited text into a typed JSON primitive."""

from __future__ import annotations

import json
import re
from typing import Any, Union

from .kinds import scalar_text

JsonPrimitive = Union[None, bool, int, float, str]

_INT_RE = re.compile(r'[+-]?\d+')
_FLOAT_RE = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(text: str):
    """Return an int or float for a decimal literal, or None."""
    stripped = text.strip()
    if not stripped:
        return None
    if _INT_RE.fullmatch(stripped):
        return int(stripped)
    if _FLOAT_RE.fullmatch(stripped):
        value = float(stripped)
        # 1e999 overflows to inf, which JSON cannot hold
        if value in (float('inf'), float('-inf')):
            return None
        return value
    return None


def coerce(raw_text: str) -> JsonPrimitive:
    """Infer a primitive from edited text.

    Precedence: true/false, null, number, quoted string, plain string.
    Typing `123` always yields a number; wrap it in quotes to keep a string.
    """
    if raw_text == 'true':
        return True
    if raw_text == 'false':
        return False
    if raw_text == 'null':
        return None

    number = parse_number(raw_text)
    if number is not None:
        return number

    if len(raw_text) >= 2 and raw_text.startswith('"') and raw_text.endswith('"'):
        try:
            return json.loads(raw_text)
        except ValueError:
            return raw_text[1:-1]

    return raw_text


def to_edit_text(value: Any) -> str:
    """Text shown in the input box when editing of a primitive starts."""
    return scalar_text(value)
