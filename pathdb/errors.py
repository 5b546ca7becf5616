from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    INVALID_KEY = "invalid_key"
    INVALID_VALUE = "invalid_value"
    INVALID_FLAG = "invalid_flag"
    LIMIT_EXCEEDED = "limit_exceeded"
    WRONG_SHAPE = "wrong_shape"
    INVALID_OPTION = "invalid_option"
    DECODE_ERROR = "decode_error"
    IO_ERROR = "io_error"


class DatabaseError(Exception):
    """
    The only error raised by pathdb.

    `code` tells callers which kind of failure happened without parsing the message.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_VALUE):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"DatabaseError({self.message!r}, code={self.code.value!r})"
