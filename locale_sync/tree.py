"""
tree.py

Conversion between nested locale documents and flat {path: text} mappings.

Only string leaves are kept. Numbers, booleans and nulls are skipped by
flatten() and so never come back from inflate(); neither do empty dicts or
lists, since they hold no leaves.
"""

import sys
from typing import Any, Union

from .errors import MalformedPathError, PathConflictError
from .paths import Segment, child_index, child_key, decode_path, encode_path

Tree = Union[str, list, dict]

_MISSING = object()


# ── Flatten ────────────────────────────────────────────────────────────────────

def flatten(tree: Any, strict: bool = True) -> dict[str, str]:
    """
    Map every string leaf of `tree` to its path, in document order.

    >>> flatten({"a": {"b": "Hello"}, "list": ["x", "y"], "n": 3})
    {'a.b': 'Hello', 'list[0]': 'x', 'list[1]': 'y'}

    A root that is not a dict or a list has no addressable leaves. With
    strict=False, entries under a key that has no path (the empty key) are
    skipped with a warning instead of raising MalformedPathError.
    """
    out: dict[str, str] = {}
    _walk(tree, "", out, strict)
    return out


def _children(node: Any, prefix: str, strict: bool):
    if isinstance(node, list):
        for i, value in enumerate(node):
            yield child_index(prefix, i), value
        return
    for key, value in node.items():
        try:
            path = child_key(prefix, key)
        except MalformedPathError:
            if strict:
                raise
            print(f"[WARN] Skipping entry with empty key under {prefix or '<root>'!r}",
                  file=sys.stderr)
            continue
        yield path, value


def _walk(node: Any, prefix: str, out: dict[str, str], strict: bool) -> None:
    if not isinstance(node, (dict, list)):
        return
    for path, value in _children(node, prefix, strict):
        if isinstance(value, str):
            out[path] = value
        elif isinstance(value, (dict, list)):
            _walk(value, path, out, strict)


# ── Inflate ────────────────────────────────────────────────────────────────────

def inflate(flat: dict[str, str]) -> Tree:
    """
    Rebuild a nested document from {path: text}.

    Intermediate containers are created on demand: a list when the next
    segment is an index, a dict otherwise. Gaps in lists are filled with
    None. Raises PathConflictError when two paths disagree about what sits
    at the same position, e.g. `a.b` and `a[0]`.
    """
    root: Any = None
    for path, value in flat.items():
        segments = decode_path(path)
        if root is None:
            root = [] if isinstance(segments[0], int) else {}
        elif isinstance(root, list) != isinstance(segments[0], int):
            raise PathConflictError(
                path, f"root is a {_kind(root)}, path needs a {_kind_for(segments[0])}"
            )
        _assign(root, segments, value, path)
    return root if root is not None else {}


def _assign(root: Any, segments: list[Segment], value: str, path: str) -> None:
    container = root
    for depth, seg in enumerate(segments[:-1]):
        wanted = list if isinstance(segments[depth + 1], int) else dict
        child = _get(container, seg)
        if child is _MISSING:
            child = wanted()
            _put(container, seg, child)
        elif not isinstance(child, wanted):
            raise PathConflictError(
                encode_path(segments[: depth + 1]),
                f"holds a {_kind(child)}, {path!r} needs a {wanted.__name__}",
            )
        container = child

    last = segments[-1]
    existing = _get(container, last)
    if existing is not _MISSING:
        raise PathConflictError(path, f"already holds a {_kind(existing)}")
    _put(container, last, value)


def _get(container: Any, seg: Segment) -> Any:
    if isinstance(container, list):
        if seg < len(container) and container[seg] is not None:
            return container[seg]
        return _MISSING
    return container.get(seg, _MISSING)


def _put(container: Any, seg: Segment, value: Any) -> None:
    if isinstance(container, list):
        if seg >= len(container):
            container.extend([None] * (seg + 1 - len(container)))
    container[seg] = value


def _kind(node: Any) -> str:
    if isinstance(node, dict):
        return "dict"
    if isinstance(node, list):
        return "list"
    return "string"


def _kind_for(seg: Segment) -> str:
    return "list" if isinstance(seg, int) else "dict"
