"""
Fixed-width integer shapes.

Python integers carry no width, so every integer that takes part in an
encoding declares one through these classes. Each width is packed
little-endian, two's complement for the signed variants.

    U8(9).digest()                      # one byte: 09
    I16(-2).digest()                    # two bytes: fe ff

The classes double as record field annotations (``count: U32``) and as
pydantic field types.
"""

from __future__ import annotations
import operator
import struct
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from ..runtime.errors import EncodingError, IntegerRangeError
from .hashable import Hashable
from .hashes import Hasher


class FixedInt(int, Hashable):
    """
    Integer with a declared bit width and signedness.

    Subclasses declare ``bits``, ``signed`` and the little-endian ``struct``
    format that packs exactly ``bits`` bits. Values outside the width are
    rejected, never truncated.
    """

    __slots__ = ()

    bits: ClassVar[int]
    signed: ClassVar[bool]
    min_value: ClassVar[int]
    max_value: ClassVar[int]
    _format: ClassVar[str]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if struct.calcsize(cls._format) * 8 != cls.bits:
            raise TypeError(f"{cls.__name__}: format {cls._format!r} does not pack {cls.bits} bits")
        if cls.signed:
            cls.min_value = -(1 << (cls.bits - 1))
            cls.max_value = (1 << (cls.bits - 1)) - 1
        else:
            cls.min_value = 0
            cls.max_value = (1 << cls.bits) - 1

    def __new__(cls, value: Any = 0):
        return super().__new__(cls, cls.check(value))

    @classmethod
    def check(cls, value: Any) -> int:
        """
        Validate that ``value`` is an integer inside this width.

        Args:
            value: Candidate integer

        Returns:
            The value as a plain int

        Raises:
            EncodingError: If the value is not an integer
            IntegerRangeError: If the value does not fit
        """
        if isinstance(value, bool):
            raise EncodingError(f"{cls.__name__} requires an integer, got bool")
        try:
            number = operator.index(value)
        except TypeError as e:
            raise EncodingError(
                f"{cls.__name__} requires an integer, got {type(value).__name__}", cause=e
            )
        if not cls.min_value <= number <= cls.max_value:
            raise IntegerRangeError(
                f"{number} does not fit in {cls.__name__}",
                details={"min": cls.min_value, "max": cls.max_value},
            )
        return number

    @classmethod
    def pack(cls, value: Any) -> bytes:
        """
        Pack an integer into its little-endian fixed-width bytes.

        Args:
            value: Integer inside this width

        Returns:
            ``bits // 8`` bytes
        """
        return struct.pack(cls._format, cls.check(value))

    def update(self, hasher: Hasher) -> None:
        hasher.update(struct.pack(self._format, int(self)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({int(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Return a Pydantic CoreSchema that validates into this width."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> "FixedInt":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{cls.__name__} requires an integer, got {type(value).__name__}")
        return cls(value)


class U8(FixedInt):
    """Unsigned 8-bit integer."""
    __slots__ = ()
    bits = 8
    signed = False
    _format = "<B"


class I8(FixedInt):
    """Signed 8-bit integer."""
    __slots__ = ()
    bits = 8
    signed = True
    _format = "<b"


class U16(FixedInt):
    """Unsigned 16-bit integer, little-endian."""
    __slots__ = ()
    bits = 16
    signed = False
    _format = "<H"


class I16(FixedInt):
    """Signed 16-bit integer, little-endian."""
    __slots__ = ()
    bits = 16
    signed = True
    _format = "<h"


class U32(FixedInt):
    """Unsigned 32-bit integer, little-endian."""
    __slots__ = ()
    bits = 32
    signed = False
    _format = "<I"


class I32(FixedInt):
    """Signed 32-bit integer, little-endian."""
    __slots__ = ()
    bits = 32
    signed = True
    _format = "<i"


class U64(FixedInt):
    """Unsigned 64-bit integer, little-endian."""
    __slots__ = ()
    bits = 64
    signed = False
    _format = "<Q"


class I64(FixedInt):
    """Signed 64-bit integer, little-endian."""
    __slots__ = ()
    bits = 64
    signed = True
    _format = "<q"


__all__ = [
    "FixedInt",
    "U8",
    "I8",
    "U16",
    "I16",
    "U32",
    "I32",
    "U64",
    "I64",
]
