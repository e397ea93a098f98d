"""
Binary Writer

An accumulator that keeps the canonical byte stream itself instead of hashing
it. Useful for inspecting exactly what a value feeds into a digest engine.
"""

from typing import Any

from .hashes import BytesLike, Hasher


class BinaryWriter(Hasher):
    """
    Identity accumulator.

    finish() returns every byte passed to update(), in order. The output has
    no fixed size.
    """

    name = "identity"
    digest_size = None

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        super().__init__()
        self._bb = bytearray()

    def _update(self, data: BytesLike) -> None:
        self._bb += memoryview(data)

    def _finalize(self) -> bytes:
        return bytes(self._bb)

    def to_bytes(self) -> bytes:
        """
        Return the bytes accumulated so far without consuming the writer.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)

    def __len__(self) -> int:
        return len(self._bb)


def encode(value: Any) -> bytes:
    """
    Return the canonical encoding of a value.

    Args:
        value: Encodable value

    Returns:
        The exact bytes a digest engine would receive for ``value``
    """
    return BinaryWriter.digest(value)


__all__ = ["BinaryWriter", "encode"]
