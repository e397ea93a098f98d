"""
Hashable capability.

A Hashable value knows how to append its canonical bytes to any Hasher.
Fixed-width integers and @hashable records are Hashable; user classes may
implement update() by hand.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Type

from .hashes import Hasher, Sha256Hasher


class Hashable(ABC):
    """
    Base Hashable interface.

    update() must append the same bytes every time it is called on the same
    logical value.
    """

    __slots__ = ()

    @abstractmethod
    def update(self, hasher: Hasher) -> None:
        """
        Append this value's canonical encoding to ``hasher``.

        Args:
            hasher: Accumulator to feed
        """
        pass

    def digest(self, hasher: Type[Hasher] = Sha256Hasher) -> bytes:
        """
        Digest this value with a fresh accumulator.

        Args:
            hasher: Digest engine class

        Returns:
            Digest bytes
        """
        return hasher.digest(self)

    def hexdigest(self, hasher: Type[Hasher] = Sha256Hasher) -> str:
        """Digest this value and render it as hex."""
        return hasher.digest(self).hex()


__all__ = ["Hashable"]
