from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DatabaseError, ErrorCode


class StoreOptions(BaseModel):
    """
    Constructor options for a database handle.

    Validated eagerly so a bad limit fails before any directory or file is created.
    """

    model_config = ConfigDict(frozen=True)

    database_path: str
    max_data_size: float | int | None = None

    @field_validator("database_path", mode="before")
    @classmethod
    def _check_path(cls, v: Any) -> Any:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("The database path must be a non-empty string!")
        return v

    @field_validator("max_data_size", mode="before")
    @classmethod
    def _check_limit(cls, v: Any) -> Any:
        if v is None:
            return None
        # bool is an int subclass
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("The maximum limit must be in number type!")
        if math.isnan(v) or v < 1:
            raise ValueError("Inappropriate range for the limit!")
        return v

    @classmethod
    def parse(cls, **kwargs: Any) -> "StoreOptions":
        try:
            return cls.model_validate(kwargs)
        except ValidationError as e:
            msg = e.errors()[0].get("msg", str(e)).removeprefix("Value error, ")
            raise DatabaseError(msg, ErrorCode.INVALID_OPTION) from e


class Entry(BaseModel):
    """One top-level key of the document: {"ID": key, "data": value}."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="ID")
    data: Any = None

    def to_doc(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class StoreInfo(BaseModel):
    size: int
    version: str
    path: str
    max_data_size: float | int | None = None
