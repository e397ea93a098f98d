"""
Test bootstrap:
- Shared record types used across the codec tests
- Byte-level helpers for comparing encodings with hashlib digests
"""
import hashlib
from dataclasses import dataclass
from typing import List

import pytest

from simple_hash import U8, U16, U32, BinaryWriter, hashable


@hashable
@dataclass
class Foo:
    a: U8
    b: U16
    c: List[U32]


@pytest.fixture
def foo():
    """The reference record: a=8, b=99, c=[0, 1, 2, 3]."""
    return Foo(a=8, b=99, c=[0, 1, 2, 3])


@pytest.fixture
def foo_bytes():
    """Canonical encoding of the reference record."""
    return (
        b"\x08"
        + b"\x63\x00"
        + b"\x00\x00\x00\x00"
        + b"\x01\x00\x00\x00"
        + b"\x02\x00\x00\x00"
        + b"\x03\x00\x00\x00"
    )


@pytest.fixture
def writer():
    """Provide a fresh identity accumulator."""
    return BinaryWriter()


@pytest.fixture
def sha256():
    """One-shot SHA-256 of raw bytes, for comparing against encodings."""
    def _sha256(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()
    return _sha256
