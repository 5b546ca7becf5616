from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str | None:
    """
    Read a document file from disk.

    Returns None for missing or blank files. Other OS errors propagate.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return None
    return raw


def atomic_write_text(path: Path, text: str) -> None:
    """
    Atomically write text to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(text)
        if not text.endswith("\n"):
            f.write("\n")
    tmp_path.replace(path)


def remove_file(path: Path) -> None:
    path.unlink()
