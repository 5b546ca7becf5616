from __future__ import annotations

from .aio import AsyncDatabase
from .database import Database, JsonDatabase, YamlDatabase
from .engine import StoreEngine
from .errors import DatabaseError, ErrorCode
from .formats import JsonCodec, YamlCodec
from .models import Entry, StoreInfo, StoreOptions
from .settings import Settings, get_settings
from .version import __version__

__all__ = [
    "AsyncDatabase",
    "Database",
    "JsonDatabase",
    "YamlDatabase",
    "StoreEngine",
    "DatabaseError",
    "ErrorCode",
    "JsonCodec",
    "YamlCodec",
    "Entry",
    "StoreInfo",
    "StoreOptions",
    "Settings",
    "get_settings",
    "__version__",
]
