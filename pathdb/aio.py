from __future__ import annotations

import asyncio
from typing import Any, Literal

from .database import Database, EntryComparator, EntryPredicate, NodePredicate, Operator
from .models import Entry, StoreInfo


class AsyncDatabase:
    """
    Async wrapper around a disk-backed database.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    @property
    def database(self) -> Database:
        return self._db

    @property
    def info(self) -> StoreInfo:
        return self._db.info

    async def get(self, key: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self._db.get, key, default)

    async def fetch(self, key: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self._db.fetch, key, default)

    async def set(self, key: str, value: Any, auto_persist: bool = True) -> Any:
        return await asyncio.to_thread(self._db.set, key, value, auto_persist)

    async def delete(self, key: str, auto_persist: bool = True) -> None:
        await asyncio.to_thread(self._db.delete, key, auto_persist)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._db.exists, key)

    async def has(self, key: str) -> bool:
        return await self.exists(key)

    async def all(self, limit: int = 0) -> list[Entry]:
        return await asyncio.to_thread(self._db.all, limit)

    async def fetch_all(self, limit: int = 0) -> list[Entry]:
        return await asyncio.to_thread(self._db.fetch_all, limit)

    async def to_dict(self, limit: int = 0) -> dict[str, Any]:
        return await asyncio.to_thread(self._db.to_dict, limit)

    async def type(self, key: str) -> str:
        return await asyncio.to_thread(self._db.type, key)

    async def delete_all(self) -> None:
        await asyncio.to_thread(self._db.delete_all)

    async def destroy(self) -> None:
        await asyncio.to_thread(self._db.destroy)

    async def math(self, key: str, operator: Operator, value: Any, allow_negative: bool = False) -> Any:
        return await asyncio.to_thread(self._db.math, key, operator, value, allow_negative)

    async def add(self, key: str, value: Any) -> Any:
        return await asyncio.to_thread(self._db.add, key, value)

    async def subtract(self, key: str, value: Any, allow_negative: bool = False) -> Any:
        return await asyncio.to_thread(self._db.subtract, key, value, allow_negative)

    async def push(self, key: str, value: Any) -> list[Any]:
        return await asyncio.to_thread(self._db.push, key, value)

    async def pull(self, key: str, predicate: NodePredicate, multiple: bool = False) -> list[Any] | Literal[False]:
        return await asyncio.to_thread(self._db.pull, key, predicate, multiple)

    async def includes(self, text: str) -> list[Entry]:
        return await asyncio.to_thread(self._db.includes, text)

    async def starts_with(self, prefix: str) -> list[Entry]:
        return await asyncio.to_thread(self._db.starts_with, prefix)

    async def filter(self, predicate: EntryPredicate) -> list[Entry]:
        return await asyncio.to_thread(self._db.filter, predicate)

    async def sort(self, comparator: EntryComparator) -> list[Entry]:
        return await asyncio.to_thread(self._db.sort, comparator)

    async def find_and_delete(self, predicate: EntryPredicate) -> int:
        return await asyncio.to_thread(self._db.find_and_delete, predicate)

    async def key_array(self) -> list[str]:
        return await asyncio.to_thread(self._db.key_array)

    async def value_array(self) -> list[Any]:
        return await asyncio.to_thread(self._db.value_array)
