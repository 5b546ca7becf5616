from __future__ import annotations

import logging
import os
from pathlib import Path

from .files import atomic_write_text
from .interfaces import Codec

logger = logging.getLogger(__name__)

DEFAULT_NAME = "db"


def normalize_database_path(
    database_path: str,
    extensions: tuple[str, ...],
    *,
    base_dir: Path,
    default_name: str = DEFAULT_NAME,
) -> str:
    """
    Turn a caller-supplied location into a path relative to `base_dir`, always
    starting with a separator and ending in one of `extensions`.

      "/abs/cwd/data/x.json" -> "/data/x.json"
      "./data/x"             -> "/data/x.json"
      "data/"                -> "/data/db.json"
    """
    sep = os.sep
    path = database_path

    base = str(base_dir)
    if path == base or path.startswith(base + sep):
        path = path[len(base):]

    if path.startswith(f".{sep}"):
        path = path[1:]

    if not path.startswith(sep):
        path = sep + path

    if not path.endswith(extensions):
        if path.endswith(sep):
            path += default_name + extensions[0]
        else:
            path += extensions[0]

    return path


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_database_path(
    database_path: str,
    codec: Codec,
    *,
    base_dir: Path | None = None,
) -> Path:
    """
    Resolve `database_path` under `base_dir` (the working directory by default),
    create the missing parent directories and seed an empty document if the file
    does not exist yet. Idempotent.
    """
    base = Path.cwd() if base_dir is None else Path(base_dir)
    normalized = normalize_database_path(database_path, codec.extensions, base_dir=base)

    segments = [s for s in normalized.split(os.sep) if s]
    target = base.joinpath(*segments)

    if not target.parent.exists():
        logger.debug("PATH RESOLVE: creating %s", target.parent)
    ensure_dir(target.parent)

    if not target.exists():
        logger.debug("PATH RESOLVE: seeding empty %s document at %s", codec.name, target)
        atomic_write_text(target, codec.encode({}))

    return target
