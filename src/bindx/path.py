"""Property paths: dot-separated keys resolved against a data graph.

A path is ASCII identifier segments joined by ".", with no escaping and no
index segments: list elements cannot be addressed by path.

Resolution is strict. Reading through a key that does not exist, or through
a value that is not a record, raises MissingSegmentError rather than
producing a placeholder value.
"""

from __future__ import annotations

import re
from typing import Any

from bindx.errors import MissingSegmentError, PathSyntaxError
from bindx.observable import ReactiveProperty, is_record

_SEGMENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def split_path(path: str) -> list[str]:
    """Split path into segments, rejecting anything that is not a valid path."""
    if not isinstance(path, str) or not path:
        raise PathSyntaxError(f"path must be a non-empty string, got {path!r}", str(path))
    segments = path.split(".")
    for index, segment in enumerate(segments):
        if not _SEGMENT.match(segment):
            raise PathSyntaxError(
                f"{path!r}: segment {index} ({segment!r}) is not an identifier", path
            )
    return segments


def _read(node: Any, segment: str, path: str, index: int) -> Any:
    if not is_record(node) or segment not in node:
        raise MissingSegmentError(path, segment, index)
    value = node[segment]
    if isinstance(value, ReactiveProperty):
        return value.get()
    return value


def resolve_read(root: Any, path: str) -> Any:
    """Value at path. Every reactive property on the way is a tracked read."""
    node = root
    for index, segment in enumerate(split_path(path)):
        node = _read(node, segment, path, index)
    return node


def resolve_write(root: Any, path: str, value: Any) -> None:
    """Assign value at path.

    The final key need not exist. If it holds a ReactiveProperty the write
    goes through its setter; otherwise the key is assigned directly and the
    new entry is not reactive.
    """
    segments = split_path(path)
    node = root
    for index, segment in enumerate(segments[:-1]):
        node = _read(node, segment, path, index)
    last = segments[-1]
    if not is_record(node):
        raise MissingSegmentError(path, last, len(segments) - 1)
    current = node.get(last)
    if isinstance(current, ReactiveProperty):
        current.set(value)
    else:
        node[last] = value
