from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .errors import DatabaseError, ErrorCode
from .files import atomic_write_text, read_text, remove_file
from .formats import DECODE_ERRORS
from .interfaces import Codec, DocumentStore
from .locks import GLOBAL_PATH_LOCKS

logger = logging.getLogger(__name__)


def _string_keys(node: Any) -> Any:
    """YAML allows non-string keys (`42:`); paths and entry IDs are always strings."""
    if isinstance(node, dict):
        return {str(k): _string_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_string_keys(v) for v in node]
    return node


class DiskDocumentStore(DocumentStore):
    """
    Stores a single document on disk at a fixed path, encoded by `codec`.

    - Returns an empty dict for a missing or blank file.
    - Raises DatabaseError(DECODE_ERROR) for content the codec cannot parse or a
      root that is not a mapping.
    - Writes atomically.
    """

    def __init__(self, path: Path, codec: Codec):
        self._path = path
        self._codec = codec

    @property
    def path(self) -> Path:
        return self._path

    @property
    def codec(self) -> Codec:
        return self._codec

    def load(self) -> dict[str, Any]:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                raw = read_text(self._path)
            except UnicodeDecodeError as e:
                logger.warning("DOCUMENT LOAD: %s is not valid UTF-8: %r", self._path, e)
                raise DatabaseError(f"{self._path} is not valid UTF-8 text.", ErrorCode.DECODE_ERROR) from e
            except OSError as e:
                logger.warning("DOCUMENT LOAD: failed to read %s: %r", self._path, e)
                raise DatabaseError(f"Could not read {self._path}: {e}", ErrorCode.IO_ERROR) from e
            if raw is None:
                return {}
            try:
                doc = self._codec.decode(raw)
            except DECODE_ERRORS as e:
                logger.warning("DOCUMENT LOAD: failed to decode %s: %r", self._path, e)
                raise DatabaseError(
                    f"{self._path} is not a valid {self._codec.name} document.", ErrorCode.DECODE_ERROR
                ) from e
        if doc is None:
            return {}
        if not isinstance(doc, dict):
            raise DatabaseError(
                f"{self._path} must hold a mapping at its root, got {type(doc).__name__}.",
                ErrorCode.DECODE_ERROR,
            )
        return _string_keys(doc)

    def save(self, doc: dict[str, Any]) -> None:
        text = self._codec.encode(doc)
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                atomic_write_text(self._path, text)
            except OSError as e:
                logger.warning("DOCUMENT SAVE: failed to write %s: %r", self._path, e)
                raise DatabaseError(f"Could not write {self._path}: {e}", ErrorCode.IO_ERROR) from e
        logger.debug("DOCUMENT SAVE: wrote %d top-level keys to %s", len(doc), self._path)

    def clear(self) -> None:
        self.save({})

    def remove(self) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                remove_file(self._path)
            except OSError as e:
                logger.warning("DOCUMENT REMOVE: failed to remove %s: %r", self._path, e)
                raise DatabaseError(f"Could not remove {self._path}: {e}", ErrorCode.IO_ERROR) from e
