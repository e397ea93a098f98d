"""
simple-hash

Stable digests of structured Python values. Values are turned into a
canonical byte stream (fixed-width little-endian integers, raw UTF-8 text,
concatenated sequences, records in field declaration order) and fed to a
pluggable digest engine.

    from dataclasses import dataclass
    from typing import List
    from simple_hash import U8, U16, U32, hashable, hexdigest

    @hashable
    @dataclass
    class Foo:
        a: U8
        b: U16
        c: List[U32]

    hexdigest(Foo(a=8, b=99, c=[0, 1, 2, 3]))
    # '929863ce588951eae0cc88755216f96951d431e7d15adbb836d8f1960bb65a9d'
"""

from typing import Any, Type

from .codec import *
from .codec import Hasher, Sha256Hasher
from .runtime.errors import *

__version__ = "0.1.0"


def digest(value: Any, hasher: Type[Hasher] = Sha256Hasher) -> bytes:
    """
    Compute the digest of an encodable value.

    Args:
        value: Encodable value
        hasher: Digest engine class

    Returns:
        Digest bytes, ``hasher.digest_size`` long
    """
    return hasher.digest(value)


def hexdigest(value: Any, hasher: Type[Hasher] = Sha256Hasher) -> str:
    """Compute the digest of an encodable value as a hex string."""
    return hasher.digest(value).hex()


__all__ = [
    "digest",
    "hexdigest",

    # Digest engines
    "Hasher",
    "Sha256Hasher",
    "CryptographyHasher",
    "Sha512Hasher",
    "Sha3_256Hasher",
    "Blake2bHasher",
    "BinaryWriter",
    "encode",

    # Value protocol
    "Hashable",
    "FixedInt",
    "U8",
    "I8",
    "U16",
    "I16",
    "U32",
    "I32",
    "U64",
    "I64",
    "encode_value",
    "encoder_for",
    "register_encoder",

    # Structural encoding
    "RecordField",
    "hashable",
    "record_fields",

    # Errors
    "ErrorCode",
    "SimpleHashError",
    "EncodingError",
    "IntegerRangeError",
    "UnsupportedShapeError",
    "HasherFinalizedError",
]
