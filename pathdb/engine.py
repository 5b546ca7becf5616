from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable

from .disk_store import DiskDocumentStore
from .errors import DatabaseError, ErrorCode
from .interfaces import Codec
from .locks import GLOBAL_PATH_LOCKS
from .models import Entry, StoreInfo, StoreOptions
from .paths import DEFAULT_NAME, resolve_database_path
from .settings import Settings, get_settings
from .tree import MISSING, get_path, lookup, node_type, set_path, split_path, to_node, unset_path
from .version import __version__

logger = logging.getLogger(__name__)


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or key == "":
        raise DatabaseError("Unapproved key!", ErrorCode.INVALID_KEY)
    return key


def _check_flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise DatabaseError(f"{name} parameter must be true or false!", ErrorCode.INVALID_FLAG)
    return value


class StoreEngine:
    """
    A handle on one document file.

    Every call re-reads the whole document through the codec; mutations write the
    whole document back unless `auto_persist=False`. `size` is the number of
    top-level keys after the last call that touched the document.
    """

    def __init__(
        self,
        database_path: str | os.PathLike[str] | None = None,
        max_data_size: int | float | None = None,
        *,
        codec: Codec,
        base_dir: Path | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        if database_path is None:
            database_path = f"databases/{DEFAULT_NAME}{codec.extensions[0]}"
        if isinstance(database_path, os.PathLike):
            database_path = os.fspath(database_path)
        if max_data_size is None:
            max_data_size = settings.max_data_size

        options = StoreOptions.parse(database_path=database_path, max_data_size=max_data_size)

        try:
            self.path = resolve_database_path(options.database_path, codec, base_dir=base_dir)
        except OSError as e:
            logger.warning("PATH RESOLVE: failed for %s: %r", options.database_path, e)
            raise DatabaseError(f"Could not prepare {options.database_path}: {e}", ErrorCode.IO_ERROR) from e

        self.codec = codec
        self.max_data_size = options.max_data_size
        self._store = DiskDocumentStore(self.path, codec)
        self._lock = GLOBAL_PATH_LOCKS.lock_for(self.path)
        self.size = len(self._store.load())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self.path)!r}, size={self.size})"

    def set(self, key: str, value: Any, auto_persist: bool = True) -> Any:
        split_path(key)
        if value is None or (isinstance(value, str) and value == ""):
            raise DatabaseError("Unapproved value!", ErrorCode.INVALID_VALUE)
        node = to_node(value)
        _check_flag("auto_persist", auto_persist)

        top = key.split(".", 1)[0]
        with self._lock:
            doc = self._store.load()
            if self.max_data_size is not None and top not in doc and len(doc) >= self.max_data_size:
                raise DatabaseError("Data limit exceeded!", ErrorCode.LIMIT_EXCEEDED)
            set_path(doc, key, node)
            if auto_persist:
                self._store.save(doc)
            self.size = len(doc)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        split_path(key)
        return get_path(self._store.load(), key, default)

    def fetch(self, key: str, default: Any = None) -> Any:
        return self.get(key, default)

    def exists(self, key: str) -> bool:
        """True iff `key` is a top-level key. Dots are not resolved here."""
        return _check_key(key) in self._store.load()

    def has(self, key: str) -> bool:
        return self.exists(key)

    def delete(self, key: str, auto_persist: bool = True) -> None:
        split_path(key)
        _check_flag("auto_persist", auto_persist)
        with self._lock:
            doc = self._store.load()
            removed = unset_path(doc, key)
            if auto_persist and removed:
                self._store.save(doc)
            self.size = len(doc)

    def delete_all(self) -> None:
        with self._lock:
            self._store.clear()
            self.size = 0

    def destroy(self) -> None:
        with self._lock:
            self._store.remove()
            self.size = 0
        logger.debug("DOCUMENT REMOVE: destroyed %s", self.path)

    def all(self, limit: int = 0) -> list[Entry]:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise DatabaseError("Must be of limit number type!", ErrorCode.INVALID_VALUE)
        entries = [Entry(ID=k, data=v) for k, v in self._store.load().items()]
        return entries[:limit] if limit > 0 else entries

    def fetch_all(self, limit: int = 0) -> list[Entry]:
        return self.all(limit)

    def to_dict(self, limit: int = 0) -> dict[str, Any]:
        return {e.id: e.data for e in self.all(limit)}

    def type(self, key: str) -> str:
        """One of null/boolean/number/string/array/object, or "undefined" if absent."""
        split_path(key)
        found = lookup(self._store.load(), key)
        return "undefined" if found is MISSING else node_type(found)

    @property
    def info(self) -> StoreInfo:
        return StoreInfo(
            size=self.size,
            version=__version__,
            path=str(self.path),
            max_data_size=self.max_data_size,
        )

    def _remove_top_level(self, keys: Iterable[str]) -> int:
        """Delete literal top-level keys in one write. Returns how many were present."""
        with self._lock:
            doc = self._store.load()
            removed = 0
            for k in keys:
                if k in doc:
                    del doc[k]
                    removed += 1
            if removed:
                self._store.save(doc)
            self.size = len(doc)
        return removed
