"""
Encodable Value Protocol

Canonical byte rules for every supported value shape:

- fixed-width integers (U8 ... I64): 1/2/4/8 bytes, little-endian
- bool: 0x00 or 0x01
- str: raw UTF-8 bytes
- bytes, bytearray, memoryview: raw bytes
- list, tuple and other sequences: element encodings concatenated in order
- @hashable records: field encodings concatenated in declaration order

Nothing is length-prefixed and nothing is separated, so ["ab", "c"] and
["a", "bc"] encode to the same bytes.

Two entry points share these rules. encode_value() dispatches on the runtime
type of a value. encoder_for() resolves a type annotation once into an
encoder function, which is what record fields use.
"""

from __future__ import annotations
import collections.abc
import logging
import types
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Callable, Dict, Optional, TypeVar, Union, get_args, get_origin

from ..runtime.errors import EncodingError, UnsupportedShapeError
from .hashable import Hashable
from .hashes import Hasher
from .primitives import FixedInt

logger = logging.getLogger(__name__)

Encoder = Callable[[Any, Hasher], None]

_REGISTRY: Dict[type, Encoder] = {}

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)

_UNION_TYPES = (Union, types.UnionType)

# Item layouts that are single bytes regardless of platform.
_BYTE_FORMATS = ("B", "b", "c")


@lru_cache(maxsize=None)
def _resolve(annotation: Any) -> Encoder:
    return _build(annotation)


def clear_encoder_cache() -> None:
    """Forget every resolved annotation encoder."""
    _resolve.cache_clear()


def register_encoder(py_type: type) -> Callable[[Encoder], Encoder]:
    """
    Register the canonical encoding of a primitive type.

    The encoder is used both for values of ``py_type`` (and its subclasses)
    and for record fields annotated with it.

    Args:
        py_type: Type the encoder handles

    Returns:
        Decorator that registers and returns the encoder

    Raises:
        UnsupportedShapeError: If ``py_type`` is an Enum or already Hashable
    """
    if issubclass(py_type, Enum):
        raise UnsupportedShapeError(f"{py_type.__qualname__} is a multi-variant type and has no structural encoding")
    if issubclass(py_type, Hashable) or hasattr(py_type, "__hash_encoder__"):
        raise UnsupportedShapeError(f"{py_type.__qualname__} is Hashable and already encodes itself")

    def decorator(encoder: Encoder) -> Encoder:
        _REGISTRY[py_type] = encoder
        clear_encoder_cache()
        logger.debug("Registered encoder for %s", py_type.__qualname__)
        return encoder
    return decorator


def _registered(py_type: type) -> Optional[Encoder]:
    for klass in py_type.__mro__:
        encoder = _REGISTRY.get(klass)
        if encoder is not None:
            return encoder
    return None


@register_encoder(bool)
def _encode_bool(value: Any, hasher: Hasher) -> None:
    if not isinstance(value, bool):
        raise EncodingError(f"Expected bool, got {type(value).__name__}")
    hasher.update(b"\x01" if value else b"\x00")


@register_encoder(str)
def _encode_str(value: Any, hasher: Hasher) -> None:
    if not isinstance(value, str):
        raise EncodingError(f"Expected str, got {type(value).__name__}")
    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError("Text is not valid UTF-8", cause=e)
    hasher.update(data)


@register_encoder(bytes)
@register_encoder(bytearray)
@register_encoder(memoryview)
def _encode_bytes(value: Any, hasher: Hasher) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise EncodingError(f"Expected bytes, got {type(value).__name__}")
    if isinstance(value, memoryview) and value.format not in _BYTE_FORMATS:
        raise EncodingError(f"Expected a view of bytes, got format {value.format!r}")
    hasher.update(bytes(value))


def encode_value(value: Any, hasher: Hasher) -> None:
    """
    Append the canonical encoding of ``value`` to ``hasher``.

    Args:
        value: Encodable value
        hasher: Accumulator to feed

    Raises:
        EncodingError: If the value has no canonical encoding
    """
    if isinstance(value, Hashable):
        value.update(hasher)
        return

    if isinstance(value, Enum):
        raise EncodingError(f"{type(value).__name__} is a multi-variant type and has no canonical encoding")

    encoder = _registered(type(value))
    if encoder is not None:
        encoder(value, hasher)
        return

    if isinstance(value, (list, tuple)):
        for item in value:
            encode_value(item, hasher)
        return

    if isinstance(value, int):
        raise EncodingError(
            f"Integer {value} has no declared width; wrap it in U8, I8, U16, I16, U32, I32, U64 or I64"
        )
    if hasattr(type(value), "__dataclass_fields__") or hasattr(type(value), "model_fields"):
        raise EncodingError(f"{type(value).__name__} is not hashable; decorate the class with @hashable")
    raise EncodingError(f"No canonical encoding for {type(value).__name__}")


def _sequence_encoder(element: Encoder) -> Encoder:
    def encode_sequence(value: Any, hasher: Hasher) -> None:
        if isinstance(value, str) or not isinstance(value, collections.abc.Sequence):
            raise EncodingError(f"Expected a sequence, got {type(value).__name__}")
        for item in value:
            element(item, hasher)
    return encode_sequence


def _fixed_int_encoder(width: type) -> Encoder:
    def encode_fixed(value: Any, hasher: Hasher) -> None:
        hasher.update(width.pack(value))
    return encode_fixed


def _record_encoder(record: type) -> Encoder:
    # Looked up per call so a record can refer to itself while it is generated.
    def encode_record(value: Any, hasher: Hasher) -> None:
        record.__hash_encoder__(value, hasher)
    return encode_record


def _typevar_encoder(var: TypeVar) -> Encoder:
    if var.__bound__ is not None:
        encoder_for(var.__bound__)
    for constraint in var.__constraints__:
        encoder_for(constraint)
    return encode_value


def _element_annotation(annotation: Any, origin: Any) -> Any:
    args = get_args(annotation)
    if origin is tuple:
        if not args:
            return Any
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        raise UnsupportedShapeError(
            f"{annotation!r} is a heterogeneous tuple; use Tuple[T, ...] or a @hashable NamedTuple"
        )
    return args[0] if args else Any


def _build(annotation: Any) -> Encoder:
    if annotation is Any or annotation is object or annotation is Hashable:
        return encode_value

    if isinstance(annotation, TypeVar):
        return _typevar_encoder(annotation)

    origin = get_origin(annotation)

    if origin is Annotated:
        base, *metadata = get_args(annotation)
        widths = [m for m in metadata if isinstance(m, type) and issubclass(m, FixedInt)]
        if widths:
            if not (isinstance(base, type) and issubclass(base, int)) or base is bool:
                raise UnsupportedShapeError(f"Width {widths[0].__name__} annotates non-integer {base!r}")
            return _fixed_int_encoder(widths[0])
        return encoder_for(base)

    if origin in _UNION_TYPES:
        raise UnsupportedShapeError(f"{annotation!r} is a multi-variant type and has no structural encoding")

    if origin in _SEQUENCE_ORIGINS:
        return _sequence_encoder(encoder_for(_element_annotation(annotation, origin)))

    if origin is not None and hasattr(origin, "__hash_fields__"):
        # Import here to avoid circular imports
        from .record import specialize
        return specialize(origin, get_args(annotation))

    if isinstance(annotation, type):
        if issubclass(annotation, FixedInt):
            return _fixed_int_encoder(annotation)
        if annotation in (list, tuple):
            return _sequence_encoder(encode_value)
        if issubclass(annotation, Enum):
            raise UnsupportedShapeError(f"{annotation.__name__} is a multi-variant type and has no structural encoding")
        # Same precedence as encode_value(): Hashable before the registry.
        if hasattr(annotation, "__hash_encoder__"):
            return _record_encoder(annotation)
        if issubclass(annotation, Hashable):
            return encode_value
        registered = _registered(annotation)
        if registered is not None:
            return registered
        if annotation is int:
            raise UnsupportedShapeError("Integer fields must declare a width: U8, I8, U16, I16, U32, I32, U64 or I64")

    raise UnsupportedShapeError(f"No canonical encoding for {annotation!r}")


def encoder_for(annotation: Any) -> Encoder:
    """
    Resolve a type annotation into an encoder function.

    Resolution happens once per annotation; the result is cached.

    Args:
        annotation: Type annotation, e.g. ``U16`` or ``List[U32]``

    Returns:
        Function ``(value, hasher) -> None``

    Raises:
        UnsupportedShapeError: If the annotation has no canonical encoding
    """
    try:
        hash(annotation)
    except TypeError:
        return _build(annotation)
    return _resolve(annotation)


__all__ = [
    "Encoder",
    "encode_value",
    "encoder_for",
    "register_encoder",
]
