"""
Structural Encoding Generator

@hashable turns a single-variant record type into a Hashable. The traversal
is generated once, when the class is decorated: every field is resolved to an
encoder up front and visited in declaration order on each update().

    @hashable
    @dataclass
    class Foo:
        a: U8
        b: U16
        c: List[U32]

    Foo(8, 99, [0, 1, 2, 3]).digest()

Supported shapes are dataclasses, NamedTuples (positional, visited by index),
pydantic models and plain annotated classes. Enums, fieldless classes and
fields without an encoding are rejected with UnsupportedShapeError at
decoration time.
"""

from __future__ import annotations
import dataclasses
import logging
import operator
import sys
from enum import Enum
from typing import Annotated, Any, Callable, ClassVar, Dict, Tuple, TypeVar, get_origin, get_type_hints

from pydantic import BaseModel

from ..runtime.errors import UnsupportedShapeError
from .encoders import Encoder, clear_encoder_cache, encoder_for
from .hashable import Hashable
from .hashes import Hasher

logger = logging.getLogger(__name__)

_INJECTED = ("update", "digest", "hexdigest")


@dataclasses.dataclass(frozen=True)
class RecordField:
    """
    One field of a hashable record.

    ``index`` is the visiting position. Positional records are read by
    ``index``; named records by ``name``. Neither is part of the encoding.
    """

    name: str
    index: int
    annotation: Any
    positional: bool = False

    def accessor(self) -> Callable[[Any], Any]:
        if self.positional:
            return operator.itemgetter(self.index)
        return operator.attrgetter(self.name)


def _is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _is_classvar(annotation: Any) -> bool:
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _type_hints(cls: type) -> Dict[str, Any]:
    module = sys.modules.get(cls.__module__)
    globalns = vars(module) if module is not None else {}
    try:
        return get_type_hints(cls, globalns=globalns, localns={cls.__name__: cls}, include_extras=True)
    except NameError as e:
        raise UnsupportedShapeError(f"{cls.__qualname__} has an unresolvable field annotation: {e}", cause=e)


def _model_annotations(cls: type) -> Dict[str, Any]:
    # pydantic keeps Annotated metadata apart from the field annotation.
    hints = {}
    for name, info in cls.model_fields.items():
        if info.metadata:
            hints[name] = Annotated[(info.annotation, *info.metadata)]
        else:
            hints[name] = info.annotation
    return hints


def _declared_fields(cls: type) -> Tuple[RecordField, ...]:
    positional = False
    if issubclass(cls, BaseModel):
        hints = _model_annotations(cls)
        names = list(hints)
    else:
        hints = _type_hints(cls)
        if dataclasses.is_dataclass(cls):
            names = [f.name for f in dataclasses.fields(cls)]
        elif _is_namedtuple(cls):
            names = list(cls._fields)
            positional = True
        else:
            names = [name for name, annotation in hints.items() if not _is_classvar(annotation)]

    missing = [name for name in names if name not in hints]
    if missing:
        raise UnsupportedShapeError(f"{cls.__qualname__} has fields without annotations: {missing}")

    return tuple(
        RecordField(name, index, hints[name], positional)
        for index, name in enumerate(names)
    )


def _compile(owner: str, fields: Tuple[RecordField, ...],
             resolve: Callable[[RecordField], Any]) -> Encoder:
    steps = []
    for f in fields:
        annotation = resolve(f)
        try:
            encoder = encoder_for(annotation)
        except UnsupportedShapeError as e:
            raise UnsupportedShapeError(
                f"{owner}.{f.name}: {e.message}",
                details={"field": f.name, "annotation": repr(annotation)},
                cause=e,
            )
        steps.append((f.accessor(), encoder))
    steps = tuple(steps)

    def encode_record(value: Any, hasher: Hasher) -> None:
        for get, encode in steps:
            encode(get(value), hasher)

    return encode_record


def _unfinished(value: Any, hasher: Hasher) -> None:
    raise UnsupportedShapeError(f"{type(value).__qualname__} is still being declared")


def _record_update(self, hasher: Hasher) -> None:
    type(self).__hash_encoder__(self, hasher)


def hashable(cls: type) -> type:
    """
    Generate the structural encoding of a record class.

    Apply it outside any class decorator that builds the class, e.g. above
    ``@dataclass``.

    Args:
        cls: Single-variant record class

    Returns:
        The same class, now Hashable

    Raises:
        UnsupportedShapeError: If the class has no structural encoding
    """
    if not isinstance(cls, type):
        raise UnsupportedShapeError(f"@hashable applies to classes, got {cls!r}")
    if issubclass(cls, Enum):
        raise UnsupportedShapeError(f"{cls.__qualname__} is a multi-variant type and has no structural encoding")

    fields = _declared_fields(cls)
    if not fields:
        raise UnsupportedShapeError(f"{cls.__qualname__} has no fields")

    clashes = [f.name for f in fields if f.name in _INJECTED]
    clashes += [name for name in _INJECTED if name in vars(cls)]
    if clashes:
        raise UnsupportedShapeError(
            f"{cls.__qualname__} defines {sorted(set(clashes))}, which @hashable provides"
        )

    previous = vars(cls).get("__hash_encoder__")
    cls.__hash_encoder__ = staticmethod(_unfinished)
    try:
        encoder = _compile(cls.__qualname__, fields, lambda f: f.annotation)
    except UnsupportedShapeError:
        if previous is None:
            del cls.__hash_encoder__
        else:
            cls.__hash_encoder__ = previous
        # Fields that referred to cls resolved against the placeholder.
        clear_encoder_cache()
        raise

    cls.__hash_encoder__ = staticmethod(encoder)
    cls.__hash_fields__ = fields
    cls.update = _record_update
    cls.digest = Hashable.digest
    cls.hexdigest = Hashable.hexdigest
    Hashable.register(cls)

    logger.debug("Generated structural encoder for %s: %s", cls.__qualname__, [f.name for f in fields])
    return cls


def _substitute(annotation: Any, mapping: Dict[TypeVar, Any]) -> Any:
    if isinstance(annotation, TypeVar):
        return mapping.get(annotation, annotation)
    parameters = getattr(annotation, "__parameters__", ())
    if parameters and get_origin(annotation) is not None:
        return annotation[tuple(mapping.get(p, p) for p in parameters)]
    return annotation


def specialize(cls: type, args: Tuple[Any, ...]) -> Encoder:
    """
    Build the encoder of a generic record for concrete type arguments.

    Called through encoder_for(), which caches the result per alias.

    Args:
        cls: @hashable generic record class
        args: Type arguments, e.g. ``(U8,)`` for ``Pair[U8]``

    Returns:
        Encoder with every TypeVar field bound to its argument
    """
    parameters = getattr(cls, "__parameters__", ())
    if len(parameters) != len(args):
        raise UnsupportedShapeError(
            f"{cls.__qualname__} takes {len(parameters)} type arguments, got {len(args)}"
        )
    mapping = dict(zip(parameters, args))
    encoder = _compile(cls.__qualname__, cls.__hash_fields__, lambda f: _substitute(f.annotation, mapping))
    logger.debug("Specialized %s for %s", cls.__qualname__, args)
    return encoder


def record_fields(cls: type) -> Tuple[RecordField, ...]:
    """
    Return the fields of a @hashable record in visiting order.

    Raises:
        UnsupportedShapeError: If ``cls`` was not decorated with @hashable
    """
    fields = getattr(cls, "__hash_fields__", None)
    if fields is None:
        raise UnsupportedShapeError(f"{getattr(cls, '__qualname__', cls)!r} is not a @hashable record")
    return fields


__all__ = ["RecordField", "hashable", "specialize", "record_fields"]
