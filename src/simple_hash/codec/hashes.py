"""
Digest Engines

A Hasher is an accumulator tied to one algorithm instance: it receives byte
chunks through update() and is consumed by finish(). The adapters add no
framing of their own, so update(a); update(b) hashes exactly a + b.

SHA-256 is the bundled default. Further algorithms are independent Hasher
subclasses and never touch the value encoding rules.
"""

from __future__ import annotations
import hashlib
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional, Union

from cryptography.hazmat.primitives import hashes

from ..runtime.errors import HasherFinalizedError

BytesLike = Union[bytes, bytearray, memoryview]


class Hasher(ABC):
    """
    Base digest engine.

    Subclasses implement _update() and _finalize(); this class enforces the
    single-use lifecycle of the accumulator.
    """

    name: ClassVar[str]
    digest_size: ClassVar[Optional[int]]

    def __init__(self):
        self._finished = False

    @abstractmethod
    def _update(self, data: BytesLike) -> None:
        pass

    @abstractmethod
    def _finalize(self) -> bytes:
        pass

    @property
    def finished(self) -> bool:
        """True once finish() has consumed the accumulator."""
        return self._finished

    def update(self, data: BytesLike) -> None:
        """
        Append a chunk to the accumulator.

        Args:
            data: Bytes-like chunk

        Raises:
            HasherFinalizedError: If finish() was already called
        """
        if self._finished:
            raise HasherFinalizedError(f"{self.name} hasher cannot be updated after finish()")
        self._update(data)

    def finish(self) -> bytes:
        """
        Consume the accumulator and return the digest.

        Returns:
            Digest over every chunk passed to update(), in order

        Raises:
            HasherFinalizedError: If finish() was already called
        """
        if self._finished:
            raise HasherFinalizedError(f"{self.name} hasher already finished")
        self._finished = True
        return self._finalize()

    @classmethod
    def digest(cls, value: Any) -> bytes:
        """
        Compute the digest of an encodable value.

        Creates a fresh accumulator, encodes the value into it and finishes it.

        Args:
            value: Encodable value

        Returns:
            Digest bytes
        """
        # Import here to avoid circular imports
        from .encoders import encode_value

        hasher = cls()
        encode_value(value, hasher)
        return hasher.finish()

    @classmethod
    def hexdigest(cls, value: Any) -> str:
        """Compute the digest of an encodable value as a hex string."""
        return cls.digest(value).hex()

    def __repr__(self) -> str:
        state = "finished" if self._finished else "open"
        return f"<{self.__class__.__name__} {self.name} {state}>"


class Sha256Hasher(Hasher):
    """SHA-256 engine, 32-byte output. The bundled default."""

    name = "sha256"
    digest_size = 32

    def __init__(self):
        super().__init__()
        self._sha = hashlib.sha256()

    def _update(self, data: BytesLike) -> None:
        self._sha.update(data)

    def _finalize(self) -> bytes:
        return self._sha.digest()


class CryptographyHasher(Hasher):
    """
    Engine backed by a cryptography hash algorithm.

    Subclasses set ``algorithm`` to a factory returning a
    ``cryptography.hazmat.primitives.hashes.HashAlgorithm``.
    """

    algorithm: ClassVar[Any]

    def __init__(self):
        super().__init__()
        self._ctx = hashes.Hash(self.algorithm())

    def _update(self, data: BytesLike) -> None:
        self._ctx.update(data)

    def _finalize(self) -> bytes:
        return self._ctx.finalize()


class Sha512Hasher(CryptographyHasher):
    """SHA-512 engine, 64-byte output."""

    name = "sha512"
    digest_size = 64
    algorithm = hashes.SHA512


class Sha3_256Hasher(CryptographyHasher):
    """SHA3-256 engine, 32-byte output."""

    name = "sha3-256"
    digest_size = 32
    algorithm = hashes.SHA3_256


class Blake2bHasher(CryptographyHasher):
    """BLAKE2b engine, 64-byte output."""

    name = "blake2b"
    digest_size = 64

    @staticmethod
    def algorithm() -> hashes.HashAlgorithm:
        return hashes.BLAKE2b(64)


__all__ = [
    "Hasher",
    "Sha256Hasher",
    "CryptographyHasher",
    "Sha512Hasher",
    "Sha3_256Hasher",
    "Blake2bHasher",
]
