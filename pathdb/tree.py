from __future__ import annotations

import math
from typing import Any, Union

from .errors import DatabaseError, ErrorCode

DocumentNode = Union[None, bool, int, float, str, list["DocumentNode"], dict[str, "DocumentNode"]]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def split_path(path: Any) -> list[str]:
    if not isinstance(path, str) or path == "":
        raise DatabaseError("Unapproved key!", ErrorCode.INVALID_KEY)
    segments = path.split(".")
    if any(s == "" for s in segments):
        raise DatabaseError(f"Unapproved key {path!r}: empty path segment.", ErrorCode.INVALID_KEY)
    return segments


def _as_index(segment: str) -> int | None:
    return int(segment) if segment.isascii() and segment.isdigit() else None


def lookup(doc: dict[str, Any], path: str) -> Any:
    """Resolve a dotted path. Returns MISSING when any segment is absent."""
    cur: Any = doc
    for seg in split_path(path):
        if isinstance(cur, dict):
            if seg not in cur:
                return MISSING
            cur = cur[seg]
        elif isinstance(cur, list):
            idx = _as_index(seg)
            if idx is None or idx >= len(cur):
                return MISSING
            cur = cur[idx]
        else:
            return MISSING
    return cur


def get_path(doc: dict[str, Any], path: str, default: Any = None) -> Any:
    found = lookup(doc, path)
    return default if found is MISSING else found


def _fits(container: Any, segment: str) -> bool:
    if isinstance(container, dict):
        return True
    return isinstance(container, list) and _as_index(segment) is not None


def _assign(container: dict[str, Any] | list[Any], segment: str, value: Any) -> None:
    if isinstance(container, dict):
        container[segment] = value
        return
    idx = _as_index(segment)
    if idx is None:
        raise DatabaseError(f"Cannot address an array with {segment!r}.", ErrorCode.INVALID_KEY)
    if idx < len(container):
        container[idx] = value
    elif idx == len(container):
        container.append(value)
    else:
        raise DatabaseError(
            f"Array index {idx} is out of range (length {len(container)}).", ErrorCode.INVALID_KEY
        )


def set_path(doc: dict[str, Any], path: str, value: Any) -> None:
    """
    Write `value` at `path`, creating intermediate objects.

    Intermediates that cannot hold the next segment (scalars, or arrays addressed
    by a non-index segment) are replaced by an empty object.
    """
    segments = split_path(path)
    cur: Any = doc
    for seg, nxt_seg in zip(segments, segments[1:]):
        child = MISSING
        if isinstance(cur, dict):
            child = cur.get(seg, MISSING)
        else:
            idx = _as_index(seg)
            if idx is not None and idx < len(cur):
                child = cur[idx]
        if child is MISSING or not _fits(child, nxt_seg):
            child = {}
            _assign(cur, seg, child)
        cur = child
    _assign(cur, segments[-1], value)


def _remove_child(container: Any, segment: str) -> bool:
    if isinstance(container, dict):
        if segment in container:
            del container[segment]
            return True
        return False
    if isinstance(container, list):
        idx = _as_index(segment)
        if idx is not None and idx < len(container):
            container.pop(idx)
            return True
    return False


def unset_path(doc: dict[str, Any], path: str) -> bool:
    """
    Remove the node at `path`. Returns False when there was nothing to remove.

    Objects left empty by the removal are pruned up to the root, so a top-level
    key disappears once nothing survives beneath it. Arrays, and the
    elements inside them, are never pruned.
    """
    segments = split_path(path)
    chain: list[Any] = [doc]
    for seg in segments[:-1]:
        nxt = lookup(chain[-1], seg) if isinstance(chain[-1], (dict, list)) else MISSING
        if nxt is MISSING:
            return False
        chain.append(nxt)

    if not _remove_child(chain[-1], segments[-1]):
        return False

    for depth in range(len(chain) - 1, 0, -1):
        node = chain[depth]
        parent = chain[depth - 1]
        if not (isinstance(node, dict) and not node) or isinstance(parent, list):
            break
        _remove_child(parent, segments[depth - 1])
    return True


def node_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise DatabaseError(f"Unsupported value type {type(value).__name__}.", ErrorCode.INVALID_VALUE)


def to_node(value: Any) -> DocumentNode:
    """
    Validate `value` as a document tree and return a detached copy of it.

    Tuples become lists; non-string keys, NaN/inf and foreign types are rejected.
    """
    kind = node_type(value)
    if kind == "number" and isinstance(value, float) and not math.isfinite(value):
        raise DatabaseError("Numbers must be finite.", ErrorCode.INVALID_VALUE)
    if kind == "array":
        return [to_node(v) for v in value]
    if kind == "object":
        out: dict[str, DocumentNode] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise DatabaseError(f"Object keys must be strings, got {k!r}.", ErrorCode.INVALID_VALUE)
            out[k] = to_node(v)
        return out
    return value
