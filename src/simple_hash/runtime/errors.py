"""
simple-hash Error Model

Error taxonomy for canonical encoding and digest computation. Definition-time
failures (unsupported record shapes) are kept apart from the runtime misuse
errors raised when a value has no encoding rule or an accumulator is reused.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """simple-hash error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INTEGER_RANGE = 101

    # Definition errors (200-299)
    UNSUPPORTED_SHAPE = 200

    # Digest engine errors (300-399)
    HASHER_FINALIZED = 300


class SimpleHashError(Exception):
    """
    Base class for all simple-hash errors.

    Carries a structured code, optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a simple-hash error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimpleHashError':
        """Create error from dictionary representation."""
        try:
            code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        except ValueError:
            code = ErrorCode.UNKNOWN
        message = data.get("message", "Unknown error")
        details = data.get("details")
        return cls(message, code, details)


class EncodingError(SimpleHashError):
    """A value has no canonical encoding."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class IntegerRangeError(EncodingError, ValueError):
    """Integer does not fit the declared fixed width."""

    def __init__(self, message: str = "Integer out of range",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INTEGER_RANGE, details, cause)


class UnsupportedShapeError(SimpleHashError, TypeError):
    """Type cannot be given a structural encoding. Raised when the type is declared."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNSUPPORTED_SHAPE, details, cause)


class HasherFinalizedError(SimpleHashError):
    """Accumulator used after finish()."""

    def __init__(self, message: str = "Hasher already finalized",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.HASHER_FINALIZED, details, cause)


__all__ = [
    "ErrorCode",
    "SimpleHashError",
    "EncodingError",
    "IntegerRangeError",
    "UnsupportedShapeError",
    "HasherFinalizedError",
]
