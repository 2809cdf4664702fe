from __future__ import annotations

import json
from typing import List, Tuple, Union

from .errors import PathError

Segment = Union[str, int]
Path = Tuple[Segment, ...]

ROOT: Path = ()
ROOT_LABEL = '(root)'

_SPECIAL = ('\\', '.', '[', ']')
_decoder = json.JSONDecoder()


def is_index(segment) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool)


def validate_path(path) -> Path:
    """Normalize `path` to a tuple and check every segment."""
    if path is None:
        return ROOT
    if isinstance(path, str):
        return parse_path(path)
    out: List[Segment] = []
    for segment in path:
        if is_index(segment):
            if segment < 0:
                raise PathError(f"Negative array index {segment}", path)
        elif not isinstance(segment, str):
            raise PathError(f"Invalid path segment {segment!r}", path)
        out.append(segment)
    return tuple(out)


def parent_of(path: Path) -> Path:
    if not path:
        raise PathError("The root has no parent", path)
    return path[:-1]


def child_of(path: Path, segment: Segment) -> Path:
    return tuple(path) + (segment,)


def is_prefix(prefix: Path, path: Path) -> bool:
    return len(prefix) <= len(path) and tuple(path[:len(prefix)]) == tuple(prefix)


def escape_path_segment(segment: str) -> str:
    """Escape a single key segment for the textual path form.

    - Dots and brackets are escaped so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    """
    out = segment
    for ch in _SPECIAL:
        out = out.replace(ch, '\\' + ch)
    return out


def _needs_quotes(segment: str) -> bool:
    # Keys the bare dotted form cannot carry unchanged.
    return not segment or segment != segment.strip() or segment == ROOT_LABEL


def format_path(path) -> str:
    """Render a path as text, e.g. ('items', 0, 'name') -> 'items[0].name'.

    Empty keys, keys with leading or trailing whitespace and a key spelled
    '(root)' are written as quoted brackets (`a[""]`, `[" x"]`) so that
    `parse_path(format_path(p)) == p` for every valid path.
    """
    path = validate_path(path)
    if not path:
        return ROOT_LABEL
    parts: List[str] = []
    for segment in path:
        if is_index(segment):
            parts.append(f"[{segment}]")
        elif _needs_quotes(segment):
            parts.append(f"[{json.dumps(segment, ensure_ascii=False)}]")
        else:
            if parts:
                parts.append('.')
            parts.append(escape_path_segment(segment))
    return ''.join(parts)


def parse_path(text: str) -> Path:
    """Split a textual path on unescaped '.', '[n]' and '["key"]' markers.

    '' and '(root)' address the root. Text is taken verbatim, so a bare
    segment keeps its surrounding whitespace.
    """
    if text is None or text in ('', ROOT_LABEL):
        return ROOT

    parts: List[Segment] = []
    buf: List[str] = []
    # True right after '.', or at the start before anything was read
    expect_key = True
    bracketed = False
    i = 0

    while i < len(text):
        ch = text[i]
        if ch == '\\':
            if i + 1 < len(text):
                buf.append(text[i + 1])
                i += 2
            else:
                # Trailing backslash; treat as literal.
                buf.append(ch)
                i += 1
            expect_key = False
            bracketed = False
            continue
        if ch == '.':
            if buf:
                parts.append(''.join(buf))
                buf.clear()
            elif expect_key or not bracketed:
                raise PathError(f"Empty key in path {text!r}; write it as [\"\"]")
            expect_key = True
            bracketed = False
            i += 1
            continue
        if ch == '[':
            if buf:
                parts.append(''.join(buf))
                buf.clear()
            elif expect_key and parts:
                raise PathError(f"Empty key in path {text!r}; write it as [\"\"]")
            if text.startswith('"', i + 1):
                try:
                    key, end = _decoder.raw_decode(text, i + 1)
                except ValueError:
                    raise PathError(f"Invalid quoted key in path {text!r}") from None
                if not text.startswith(']', end):
                    raise PathError(f"Unbalanced '[' in path {text!r}")
                parts.append(key)
                i = end + 1
            else:
                end = text.find(']', i)
                digits = text[i + 1:end] if end != -1 else ''
                if not (digits.isascii() and digits.isdigit()):
                    raise PathError(f"Invalid array index in path {text!r}")
                parts.append(int(digits))
                i = end + 1
            expect_key = False
            bracketed = True
            continue
        if ch == ']':
            raise PathError(f"Unbalanced ']' in path {text!r}")
        buf.append(ch)
        expect_key = False
        bracketed = False
        i += 1

    if buf:
        parts.append(''.join(buf))
    elif expect_key:
        raise PathError(f"Path {text!r} ends with an empty key")
    return tuple(parts)
