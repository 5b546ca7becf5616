from __future__ import annotations

from typing import Any, Protocol


class Codec(Protocol):
    """
    A serialization format for the whole document.

    `extensions[0]` is the one appended to paths that carry none.
    """

    name: str
    extensions: tuple[str, ...]

    def decode(self, text: str) -> Any:
        """Parse text into a document tree. Raises the format library's own error."""
        ...

    def encode(self, doc: dict[str, Any]) -> str:
        ...


class DocumentStore(Protocol):
    """
    Minimal interface: a single document persisted at one location.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...
