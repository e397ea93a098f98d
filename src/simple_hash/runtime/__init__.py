"""Runtime helpers for simple-hash"""

from .errors import (
    ErrorCode,
    SimpleHashError,
    EncodingError,
    IntegerRangeError,
    UnsupportedShapeError,
    HasherFinalizedError,
)

__all__ = [
    "ErrorCode",
    "SimpleHashError",
    "EncodingError",
    "IntegerRangeError",
    "UnsupportedShapeError",
    "HasherFinalizedError",
]
