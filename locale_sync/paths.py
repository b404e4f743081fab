"""
paths.py

Leaf addresses for nested locale documents.

A path is written the way it reads in the document: keys joined with "."
and list positions in brackets, e.g. `menu.items[0].label`. Keys that
themselves contain ".", "[", "]" or "\\" are written with a backslash
escape, so `{"a.b": "x"}` flattens to `a\\.b` instead of colliding with
`{"a": {"b": "x"}}`.
"""

import re
from typing import Union

from .errors import MalformedPathError

Segment = Union[str, int]

_ESCAPE_RE = re.compile(r"([.\[\]\\])")
_INDEX_RE = re.compile(r"[0-9]+")


def escape_key(key: str) -> str:
    return _ESCAPE_RE.sub(r"\\\1", key)


def child_key(prefix: str, key: str) -> str:
    """Path of mapping entry `key` under `prefix` ("" is the root)."""
    if not key:
        raise MalformedPathError(prefix, "empty key")
    escaped = escape_key(key)
    return f"{prefix}.{escaped}" if prefix else escaped


def child_index(prefix: str, index: int) -> str:
    """Path of list element `index` under `prefix` ("" is the root)."""
    return f"{prefix}[{index}]"


def encode_path(segments) -> str:
    if not segments:
        raise MalformedPathError(segments, "empty path")
    path = ""
    for seg in segments:
        # bool is an int subclass, and True is not an index
        if isinstance(seg, bool) or not isinstance(seg, (str, int)):
            raise MalformedPathError(segments, f"invalid segment {seg!r}")
        if isinstance(seg, int):
            if seg < 0:
                raise MalformedPathError(segments, f"negative index {seg}")
            path = child_index(path, seg)
        else:
            path = child_key(path, seg)
    return path


def _read_key(path: str, pos: int) -> tuple[str, int]:
    """Read an (escaped) key starting at `pos`; stop before '.' or '['."""
    buf: list[str] = []
    while pos < len(path):
        c = path[pos]
        if c == "\\":
            if pos + 1 >= len(path):
                raise MalformedPathError(path, "dangling escape at end of path")
            buf.append(path[pos + 1])
            pos += 2
        elif c in ".[":
            break
        elif c == "]":
            raise MalformedPathError(path, f"unmatched ']' at offset {pos}")
        else:
            buf.append(c)
            pos += 1
    return "".join(buf), pos


def decode_path(path: str) -> list[Segment]:
    """
    Split `path` into keys (str) and indices (int).

    Raises MalformedPathError for an empty path, unterminated or unmatched
    brackets, non-numeric indices and empty keys.
    """
    if not isinstance(path, str) or not path:
        raise MalformedPathError(path, "empty path")

    segments: list[Segment] = []
    pos = 0
    while pos < len(path):
        c = path[pos]
        if c == "[":
            end = path.find("]", pos + 1)
            if end == -1:
                raise MalformedPathError(path, f"unterminated '[' at offset {pos}")
            digits = path[pos + 1 : end]
            if not _INDEX_RE.fullmatch(digits):
                raise MalformedPathError(path, f"non-numeric index [{digits}]")
            segments.append(int(digits))
            pos = end + 1
        elif c == "]":
            raise MalformedPathError(path, f"unmatched ']' at offset {pos}")
        elif c == ".":
            if not segments:
                raise MalformedPathError(path, "path starts with '.'")
            key, pos = _read_key(path, pos + 1)
            if not key:
                raise MalformedPathError(path, f"empty key at offset {pos}")
            segments.append(key)
        else:
            # a key at the start of the path or right after ']'
            key, pos = _read_key(path, pos)
            segments.append(key)
    return segments


def is_valid_path(path: str) -> bool:
    try:
        decode_path(path)
    except MalformedPathError:
        return False
    return True
