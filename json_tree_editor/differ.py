"""Line-oriented comparison of two JSON values for side-by-side display.

Both values are serialized with a fixed indent and diffed line by line. This
is not a structural diff: a key and its value on one line count once, and a
value whose line count changes inside an array can make neighbouring
unchanged lines show up as "modified". That is accepted for a
human-scannable view.
"""

from __future__ import annotations

import difflib
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from . import config

logger = logging.getLogger(__name__)


class SegmentKind(Enum):
    UNCHANGED = ' '
    ADDED = '+'
    REMOVED = '-'


@dataclass(frozen=True)
class DiffSegment:
    kind: SegmentKind
    text: str


@dataclass
class DiffResult:
    segments: List[DiffSegment] = field(default_factory=list)
    added: int = 0
    removed: int = 0
    modified: int = 0
    identical: bool = True

    @property
    def has_changes(self) -> bool:
        return not self.identical

    def summary(self) -> str:
        if self.identical:
            return "No differences"
        parts = []
        if self.modified:
            parts.append(f"{self.modified} modified")
        if self.added:
            parts.append(f"{self.added} added")
        if self.removed:
            parts.append(f"{self.removed} removed")
        return "Changes: " + ", ".join(parts)


def serialize(value: Any, indent: int = config.INDENT) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def _count_modified(segments: List[DiffSegment]) -> int:
    # An unchanged line touching an added/removed line counts as modified.
    changed = [s.kind is not SegmentKind.UNCHANGED for s in segments]
    modified = 0
    for i, seg in enumerate(segments):
        if seg.kind is not SegmentKind.UNCHANGED:
            continue
        if (i > 0 and changed[i - 1]) or (i + 1 < len(segments) and changed[i + 1]):
            modified += 1
    return modified


def diff_values(original: Any, current: Any, indent: int = config.INDENT) -> DiffResult:
    """Compare two JSON values line by line."""
    left = serialize(original, indent)
    right = serialize(current, indent)
    if left == right:
        return DiffResult(
            segments=[DiffSegment(SegmentKind.UNCHANGED, line) for line in left.splitlines()],
        )

    a = left.splitlines()
    b = right.splitlines()
    segments: List[DiffSegment] = []
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            segments.extend(DiffSegment(SegmentKind.UNCHANGED, line) for line in a[i1:i2])
            continue
        if tag in ('delete', 'replace'):
            segments.extend(DiffSegment(SegmentKind.REMOVED, line) for line in a[i1:i2])
        if tag in ('insert', 'replace'):
            segments.extend(DiffSegment(SegmentKind.ADDED, line) for line in b[j1:j2])

    result = DiffResult(
        segments=segments,
        added=sum(1 for s in segments if s.kind is SegmentKind.ADDED),
        removed=sum(1 for s in segments if s.kind is SegmentKind.REMOVED),
        identical=False,
    )
    result.modified = _count_modified(segments)
    logger.debug("diff: +%d -%d ~%d", result.added, result.removed, result.modified)
    return result


def render_unified(result: DiffResult) -> str:
    return '\n'.join(f"{seg.kind.value} {seg.text}" for seg in result.segments)


def side_by_side(result: DiffResult) -> List[Tuple[Optional[str], Optional[str]]]:
    """Pair lines into (original, current) rows.

    A run of removed lines followed by added lines is zipped row by row; the
    shorter side is padded with None.
    """
    rows: List[Tuple[Optional[str], Optional[str]]] = []
    removed: List[str] = []
    added: List[str] = []

    def flush():
        for i in range(max(len(removed), len(added))):
            rows.append((
                removed[i] if i < len(removed) else None,
                added[i] if i < len(added) else None,
            ))
        removed.clear()
        added.clear()

    for seg in result.segments:
        if seg.kind is SegmentKind.REMOVED:
            if added:
                flush()
            removed.append(seg.text)
        elif seg.kind is SegmentKind.ADDED:
            added.append(seg.text)
        else:
            flush()
            rows.append((seg.text, seg.text))
    flush()
    return rows
