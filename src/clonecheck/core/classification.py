"""Type classification for field annotations.

Decides whether a declared field type is *simple* (compared with ``==``) or
*composite* (needs a delegated verifier), and supplies zero values for value
types so the default-value-leak check knows what an un-copied field looks like.

Usage:
    classify(int)            # TypeInfo(kind=SIMPLE, zero=0, nullable_value=False)
    classify(int | None)     # TypeInfo(kind=SIMPLE, zero=NO_ZERO, nullable_value=True)
    classify(list[str])      # TypeInfo(kind=COMPOSITE, zero=NO_ZERO, nullable_value=False)
"""

from __future__ import annotations

import collections.abc
import dataclasses
import datetime
import types
import typing
import uuid
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from typing import Annotated, Any, Literal, Union, get_args, get_origin


class _NoZero:
    """Sentinel for types that have no zero value (reference types)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_ZERO"

    def __bool__(self) -> bool:
        return False


NO_ZERO: Any = _NoZero()

# Leaf types compared by value. Subclasses count too (IntEnum, str subclasses, ...).
_SIMPLE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    Enum,
)

# Looked up along the MRO, so datetime must resolve before date and bool before int.
_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    Decimal: Decimal(0),
    Fraction: Fraction(0),
    datetime.timedelta: datetime.timedelta(0),
    datetime.datetime: datetime.datetime.min,
    datetime.date: datetime.date.min,
    datetime.time: datetime.time.min,
    uuid.UUID: uuid.UUID(int=0),
}


class FieldKind(Enum):
    """How a field is compared between original and copy."""

    SIMPLE = auto()  # Direct equality
    COMPOSITE = auto()  # Delegated verifier


@dataclass(frozen=True, slots=True)
class TypeInfo:
    """Classification of one declared field type, computed once per field.

    Attributes:
        kind: SIMPLE or COMPOSITE.
        zero: Zero value of the type, or NO_ZERO for reference types.
        nullable_value: True for ``X | None`` where X is a value type.
    """

    kind: FieldKind
    zero: Any
    nullable_value: bool

    @property
    def is_value_type(self) -> bool:
        return self.zero is not NO_ZERO


def unwrap(annotation: Any) -> Any:
    """Strip Annotated metadata, NewType wrappers and ``type`` aliases."""
    while True:
        if get_origin(annotation) is Annotated:
            annotation = get_args(annotation)[0]
        elif isinstance(annotation, typing.NewType):
            annotation = annotation.__supertype__
        elif isinstance(annotation, typing.TypeAliasType):
            annotation = annotation.__value__
        else:
            return annotation


def _union_members(annotation: Any) -> tuple[Any, ...] | None:
    if get_origin(annotation) in (Union, types.UnionType):
        return get_args(annotation)
    return None


def optional_inner(annotation: Any) -> Any | None:
    """Return X for ``X | None`` (or ``Optional[X]``), None for anything else."""
    members = _union_members(unwrap(annotation))
    if members is None or type(None) not in members:
        return None
    others = [m for m in members if m is not type(None)]
    if len(others) != 1:
        return None
    return others[0]


def is_simple_type(annotation: Any) -> bool:
    """Check whether values of this type can be compared by plain equality.

    Args:
        annotation: Declared type of a field.

    Returns:
        True for primitives, enums, well-known immutable value types, Literal,
        None, and unions made only of simple members. False otherwise.
    """
    annotation = unwrap(annotation)
    if annotation is None or annotation is type(None):
        return True
    origin = get_origin(annotation)
    if origin is Literal:
        return True
    members = _union_members(annotation)
    if members is not None:
        return all(is_simple_type(m) for m in members)
    if origin is not None:
        # Parameterized generics (list[int], dict[str, X], ...) are containers
        return False
    return isinstance(annotation, type) and issubclass(annotation, _SIMPLE_TYPES)


def simple_sequence_element(annotation: Any) -> Any | None:
    """Return X for an ordered sequence of simple X (``list[X]``, ``tuple[X, ...]``, ``Sequence[X]``).

    Returns None for any other annotation, including fixed-shape tuples.
    """
    annotation = unwrap(annotation)
    origin = get_origin(annotation)
    if origin not in (list, tuple, collections.abc.Sequence, collections.abc.MutableSequence):
        return None
    args = get_args(annotation)
    if origin is tuple:
        if len(args) != 2 or args[1] is not Ellipsis:
            return None
        args = args[:1]
    if len(args) != 1 or not is_simple_type(args[0]):
        return None
    return args[0]


def zero_value(annotation: Any) -> Any:
    """Get the zero value of a value type.

    Args:
        annotation: Declared type of a field.

    Returns:
        The zero value, or NO_ZERO if the type is a reference type or has no
        natural zero (e.g. an Enum without a 0 member).
    """
    annotation = unwrap(annotation)
    if get_origin(annotation) is not None or not isinstance(annotation, type):
        return NO_ZERO
    if issubclass(annotation, Enum):
        try:
            return annotation(0)
        except ValueError:
            return NO_ZERO
    for base in annotation.__mro__:
        if base in _ZERO_VALUES:
            return _ZERO_VALUES[base]
    if dataclasses.is_dataclass(annotation) and annotation.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return _zero_instance(annotation)
    return NO_ZERO


def _zero_instance(cls: type) -> Any:
    """Build the all-zero instance of a frozen dataclass, if every init field has a zero."""
    hints = typing.get_type_hints(cls, include_extras=True)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        zero = zero_value(hints.get(f.name, f.type))
        if zero is NO_ZERO:
            return NO_ZERO
        kwargs[f.name] = zero
    try:
        return cls(**kwargs)
    except Exception:
        # Construction rejected the zero state: no zero instance exists
        return NO_ZERO


def classify(annotation: Any) -> TypeInfo:
    """Classify a declared field type.

    Args:
        annotation: Declared type of a field.

    Returns:
        TypeInfo with kind, zero value and nullable-value flag.
    """
    kind = FieldKind.SIMPLE if is_simple_type(annotation) else FieldKind.COMPOSITE
    inner = optional_inner(annotation)
    nullable_value = inner is not None and zero_value(inner) is not NO_ZERO
    return TypeInfo(kind=kind, zero=zero_value(annotation), nullable_value=nullable_value)
