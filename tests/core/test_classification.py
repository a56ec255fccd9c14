"""Tests for simple/composite classification and zero values.

Why these tests exist:
- Misclassifying a composite as simple silently replaces structural checks with ==
- A wrong zero value either hides un-copied fields or flags real data
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum, Flag, IntEnum
from typing import Annotated, Any, Literal, NewType, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from clonecheck import CopyVerifier, VerifierSettings
from clonecheck.core.classification import (
    NO_ZERO,
    FieldKind,
    classify,
    is_simple_type,
    optional_inner,
    simple_sequence_element,
    zero_value,
)


class Color(Enum):
    RED = "red"
    BLUE = "blue"


class Priority(IntEnum):
    NONE = 0
    HIGH = 1


class Permission(Flag):
    READ = 1
    WRITE = 2


class Code(str):
    pass


UserId = NewType("UserId", int)

type Score = float


@dataclass(frozen=True)
class Point:
    x: int
    y: float


@dataclass(frozen=True)
class Label:
    text: str


@dataclass(frozen=True)
class PositiveAmount:
    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("amount must be positive")


@dataclass
class MutablePoint:
    x: int
    y: int


@pytest.mark.parametrize(
    "annotation",
    [
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        Decimal,
        datetime,
        date,
        time,
        timedelta,
        uuid.UUID,
        Color,
        Priority,
        Code,
        UserId,
        Score,
        Literal["a", "b"],
        Annotated[int, "meta"],
        int | None,
        Optional[datetime],
        int | str,
        None,
    ],
)
def test_simple_types(annotation: Any) -> None:
    """Primitives, enums, well-known value types and simple unions compare by equality."""
    assert is_simple_type(annotation)
    assert classify(annotation).kind is FieldKind.SIMPLE


@pytest.mark.parametrize(
    "annotation",
    [
        list,
        list[int],
        dict[str, int],
        tuple[int, ...],
        set[str],
        Point,
        MutablePoint,
        MutablePoint | None,
        int | list[int],
        Any,
        object,
    ],
)
def test_composite_types(annotation: Any) -> None:
    """Records, collections and unknown types need a delegated verifier."""
    assert not is_simple_type(annotation)
    assert classify(annotation).kind is FieldKind.COMPOSITE


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (bool, False),
        (int, 0),
        (float, 0.0),
        (Decimal, Decimal(0)),
        (timedelta, timedelta(0)),
        (datetime, datetime.min),
        (date, date.min),
        (time, time.min),
        (uuid.UUID, uuid.UUID(int=0)),
        (UserId, 0),
        (Annotated[float, "unit"], 0.0),
        (Priority, Priority.NONE),
        (Permission, Permission(0)),
        (Point, Point(0, 0.0)),
    ],
)
def test_zero_values(annotation: Any, expected: Any) -> None:
    zero = zero_value(annotation)
    assert zero == expected
    assert type(zero) is type(expected)


def test_datetime_zero_is_not_date_zero() -> None:
    """datetime subclasses date; its zero must still be a datetime."""
    assert isinstance(zero_value(datetime), datetime)


@pytest.mark.parametrize(
    "annotation",
    [str, bytes, Color, Label, PositiveAmount, MutablePoint, list[int], int | None, Any],
)
def test_reference_types_have_no_zero(annotation: Any) -> None:
    """Strings, collections, enums without a 0 member and non-zeroable records have no zero."""
    assert zero_value(annotation) is NO_ZERO
    assert not classify(annotation).is_value_type


def test_optional_inner() -> None:
    assert optional_inner(int | None) is int
    assert optional_inner(Optional[str]) is str
    assert optional_inner(int) is None
    assert optional_inner(int | str | None) is None


@pytest.mark.parametrize(
    ("annotation", "nullable"),
    [
        (int | None, True),
        (Optional[datetime], True),
        (Point | None, True),
        (str | None, False),
        (list[int] | None, False),
        (int, False),
    ],
)
def test_nullable_value_flag(annotation: Any, nullable: bool) -> None:
    """Only optional *value* types switch the leak check to 'is None'."""
    assert classify(annotation).nullable_value is nullable


@pytest.mark.parametrize(
    ("annotation", "element"),
    [
        (list[str], str),
        (tuple[int, ...], int),
        (Sequence[Decimal], Decimal),
        (list[int | None], int | None),
        (tuple[int, str], None),
        (list[MutablePoint], None),
        (dict[str, int], None),
        (set[int], None),
        (str, None),
    ],
)
def test_simple_sequence_element(annotation: Any, element: Any) -> None:
    assert simple_sequence_element(annotation) == element


@given(st.sampled_from([bool, int, float, Decimal, timedelta, datetime, uuid.UUID, Priority]))
def test_value_types_are_simple_and_have_zero(annotation: Any) -> None:
    """PROPERTY: every built-in value type is simple and carries a zero value."""
    info = classify(annotation)
    assert info.kind is FieldKind.SIMPLE
    assert info.is_value_type
    assert not info.nullable_value


@given(st.sampled_from([int, float, Decimal, timedelta, datetime, Priority]))
def test_optional_value_types_use_none_as_empty(annotation: Any) -> None:
    """PROPERTY: X | None of a value type is simple, nullable and has no zero of its own."""
    info = classify(annotation | None)
    assert info.kind is FieldKind.SIMPLE
    assert info.nullable_value
    assert info.zero is NO_ZERO


class InvalidMoney(Exception):
    pass


@dataclass(frozen=True)
class Money:
    cents: int

    def __post_init__(self) -> None:
        if self.cents == 0:
            raise InvalidMoney("money must not be zero")


@dataclass
class Invoice:
    number: int
    total: Money


def test_record_rejecting_zero_with_custom_exception_has_no_zero() -> None:
    """Any failure building the zero instance means the type has no zero."""
    assert zero_value(Money) is NO_ZERO
    assert not classify(Money).is_value_type


def test_verifier_builds_for_record_rejecting_zero() -> None:
    verifier = CopyVerifier(Invoice, settings=VerifierSettings(_env_file=None))

    assert verifier.fields["total"].zero is NO_ZERO
