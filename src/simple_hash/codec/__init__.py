"""
simple-hash Codec Module

Canonical byte encoding of structured values and the digest engines that
consume it.

Key components:
- hashes.py: Hasher accumulator interface and digest engines (SHA-256 default)
- writer.py: BinaryWriter identity accumulator and encode()
- hashable.py: Hashable capability interface
- primitives.py: fixed-width integer shapes U8 ... I64
- encoders.py: canonical rules per value shape, encoder resolution from annotations
- record.py: @hashable structural encoding generator for record types
"""

from .hashes import (
    Hasher,
    Sha256Hasher,
    CryptographyHasher,
    Sha512Hasher,
    Sha3_256Hasher,
    Blake2bHasher,
)
from .writer import BinaryWriter, encode
from .hashable import Hashable
from .primitives import FixedInt, U8, I8, U16, I16, U32, I32, U64, I64
from .encoders import encode_value, encoder_for, register_encoder
from .record import RecordField, hashable, record_fields

__all__ = [
    "Hasher",
    "Sha256Hasher",
    "CryptographyHasher",
    "Sha512Hasher",
    "Sha3_256Hasher",
    "Blake2bHasher",
    "BinaryWriter",
    "encode",
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
    "RecordField",
    "hashable",
    "record_fields",
]
