from __future__ import annotations

import math as _math
import operator as _operator
import os
from functools import cmp_to_key
from pathlib import Path
from typing import Any, Callable, Literal

from .engine import StoreEngine, _check_flag
from .errors import DatabaseError, ErrorCode
from .formats import JsonCodec, YamlCodec
from .models import Entry
from .settings import Settings, get_settings
from .tree import MISSING, DocumentNode

Operator = Literal["+", "-", "*", "/", "%"]
EntryPredicate = Callable[[Entry], bool]
EntryComparator = Callable[[Entry, Entry], int]
NodePredicate = Callable[[DocumentNode], bool]

OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "+": _operator.add,
    "-": _operator.sub,
    "*": _operator.mul,
    "/": _operator.truediv,
    "%": _operator.mod,
}


def _to_number(value: Any) -> int | float:
    if isinstance(value, bool):  # bool is subclass of int in Python
        raise DatabaseError("The type of value is not a number.", ErrorCode.INVALID_VALUE)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str) and value.strip():
        try:
            number = int(value)
        except ValueError:
            try:
                number = float(value)
            except ValueError:
                raise DatabaseError("The type of value is not a number.", ErrorCode.INVALID_VALUE) from None
    else:
        raise DatabaseError("The type of value is not a number.", ErrorCode.INVALID_VALUE)
    if not _math.isfinite(number) or number <= 0:
        raise DatabaseError("Value must be a positive number.", ErrorCode.INVALID_VALUE)
    return number


class Database(StoreEngine):
    """
    StoreEngine plus the operations built from its primitives: arithmetic,
    array push/pull and queries over the top-level entries.
    """

    def math(self, key: str, operator: Operator, value: Any, allow_negative: bool = False) -> Any:
        if operator not in OPERATORS:
            raise DatabaseError(f"Unknown operator {operator!r}.", ErrorCode.INVALID_VALUE)
        number = _to_number(value)
        _check_flag("allow_negative", allow_negative)

        with self._lock:
            current = self.get(key)
            if current is None:
                return self.set(key, number)
            if isinstance(current, bool) or not isinstance(current, (int, float)):
                raise DatabaseError(f"{key} ID data is not a number type data.", ErrorCode.WRONG_SHAPE)

            result = OPERATORS[operator](current, number)
            if operator == "-" and not allow_negative and result < 1:
                result = 0
            if isinstance(result, float) and result.is_integer():
                result = int(result)
            return self.set(key, result)

    def add(self, key: str, value: Any) -> Any:
        return self.math(key, "+", value)

    def subtract(self, key: str, value: Any, allow_negative: bool = False) -> Any:
        return self.math(key, "-", value, allow_negative)

    def push(self, key: str, value: Any) -> list[Any]:
        with self._lock:
            current = self.get(key)
            items = [*current, value] if isinstance(current, list) else [value]
            return self.set(key, items)

    def pull(self, key: str, predicate: NodePredicate, multiple: bool = False) -> list[Any] | Literal[False]:
        _check_flag("multiple", multiple)
        if not callable(predicate):
            raise DatabaseError("predicate must be callable.", ErrorCode.INVALID_VALUE)

        with self._lock:
            current = self.get(key, MISSING)
            if current is MISSING or current is None:
                return False
            if not isinstance(current, list):
                raise DatabaseError(f"{key} is not an array.", ErrorCode.WRONG_SHAPE)

            if multiple:
                kept = [item for item in current if not predicate(item)]
            else:
                kept = list(current)
                idx = next((i for i, item in enumerate(current) if predicate(item)), None)
                if idx is not None:
                    del kept[idx]
            return self.set(key, kept)

    def includes(self, text: str) -> list[Entry]:
        if not isinstance(text, str):
            raise DatabaseError("Unapproved key!", ErrorCode.INVALID_KEY)
        return self.filter(lambda e: text in e.id)

    def starts_with(self, prefix: str) -> list[Entry]:
        if not isinstance(prefix, str):
            raise DatabaseError("Unapproved key!", ErrorCode.INVALID_KEY)
        return self.filter(lambda e: e.id.startswith(prefix))

    def filter(self, predicate: EntryPredicate) -> list[Entry]:
        return [e for e in self.all() if predicate(e)]

    def sort(self, comparator: EntryComparator) -> list[Entry]:
        return sorted(self.all(), key=cmp_to_key(comparator))

    def find_and_delete(self, predicate: EntryPredicate) -> int:
        with self._lock:
            doomed = [e.id for e in self.all() if predicate(e)]
            return self._remove_top_level(doomed)

    def key_array(self) -> list[str]:
        return [e.id for e in self.all()]

    def value_array(self) -> list[Any]:
        return [e.data for e in self.all()]


class JsonDatabase(Database):
    def __init__(
        self,
        database_path: str | os.PathLike[str] | None = None,
        max_data_size: int | float | None = None,
        *,
        base_dir: Path | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        super().__init__(
            settings.json_path if database_path is None else database_path,
            max_data_size,
            codec=JsonCodec(indent=settings.json_indent, sort_keys=settings.sort_keys),
            base_dir=base_dir,
            settings=settings,
        )


class YamlDatabase(Database):
    def __init__(
        self,
        database_path: str | os.PathLike[str] | None = None,
        max_data_size: int | float | None = None,
        *,
        base_dir: Path | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        super().__init__(
            settings.yaml_path if database_path is None else database_path,
            max_data_size,
            codec=YamlCodec(sort_keys=settings.sort_keys),
            base_dir=base_dir,
            settings=settings,
        )
