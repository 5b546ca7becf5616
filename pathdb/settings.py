from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Default document locations, relative to the working directory
    json_path: str
    yaml_path: str

    # None means unlimited
    max_data_size: int | None

    # Serialization
    json_indent: int
    sort_keys: bool


def get_settings(env_file: str | None = None) -> Settings:
    if env_file is not None:
        load_dotenv(env_file)

    json_path = os.getenv("PATHDB_JSON_PATH", "databases/db.json").strip()
    yaml_path = os.getenv("PATHDB_YAML_PATH", "databases/db.yml").strip()

    max_data_size = _env_int("PATHDB_MAX_DATA_SIZE", None)

    json_indent = _env_int("PATHDB_JSON_INDENT", 4)
    sort_keys = _env_bool("PATHDB_SORT_KEYS", False)

    return Settings(
        json_path=json_path,
        yaml_path=yaml_path,
        max_data_size=max_data_size,
        json_indent=4 if json_indent is None else json_indent,
        sort_keys=sort_keys,
    )
