"""Collection wrappers that lift an element verifier to sequence fields.

These are pure functions returning verifiers. They are what
``with_verifier_for_sequence_field()`` and
``with_verifier_for_keyed_sequence_field()`` install on a descriptor, and can
also be used directly as delegated verifiers.

Usage:
    items_verifier = sequence_verifier(CopyVerifier(LineItem), field="items")
    items_verifier(original.items, copy.items)
"""

from __future__ import annotations

import cmath
import reprlib
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from clonecheck.core.errors import FieldMismatchError, LengthMismatchError
from clonecheck.core.verifier.models import Verifier


def short_repr(value: Any, limit: int = 120) -> str:
    """repr() of a value, truncated for failure messages."""
    r = reprlib.Repr()
    r.maxstring = limit
    r.maxother = limit
    r.maxlong = limit
    text = r.repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, (float, complex)):
        return cmath.isnan(value)
    return False


def same_value(original: Any, copy: Any) -> bool:
    """Equality for copied simple values. Two NaNs of the same type are equal."""
    if original is copy:
        return True
    if type(original) is type(copy) and _is_nan(original) and _is_nan(copy):
        return True
    return bool(original == copy)


def _label(field: str | None) -> str:
    return field if field is not None else "sequence"


def check_counts(field: str | None, original: list[Any], copy: list[Any]) -> None:
    """Assert two materialized sequences have the same number of elements.

    Raises:
        LengthMismatchError: Naming the field and both counts.
    """
    if len(original) != len(copy):
        raise LengthMismatchError(
            f"{_label(field)} count was not copied: original has {len(original)} "
            f"elements, copy has {len(copy)}",
            field=field,
            expected_count=len(original),
            actual_count=len(copy),
        )


def _both_absent(field: str | None, original: Any, copy: Any) -> bool:
    """True if both sides are None; raise if only one is."""
    if original is None and copy is None:
        return True
    if original is None or copy is None:
        raise FieldMismatchError(
            f"{_label(field)} was not copied: "
            f"{'original' if original is None else 'copy'} is None",
            field=_label(field),
            expected=original,
            actual=copy,
        )
    return False


def _pairs(value: Iterable[Any] | Mapping[Any, Any]) -> list[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    return [(k, v) for k, v in value]


def equality_verifier(field: str | None = None, max_repr_length: int = 120) -> Verifier[Any]:
    """Verifier asserting ``copy == original``, for simple elements of collections."""

    def verify(original: Any, copy: Any) -> None:
        if not same_value(original, copy):
            raise FieldMismatchError(
                f"{_label(field)} element was not copied: expected "
                f"{short_repr(original, max_repr_length)}, got {short_repr(copy, max_repr_length)}",
                field=_label(field),
                expected=original,
                actual=copy,
            )

    return verify


def sequence_verifier[E](element_verifier: Verifier[E], field: str | None = None) -> Verifier[Iterable[E]]:
    """Wrap an element verifier so it compares two ordered sequences positionally.

    Args:
        element_verifier: Verifier applied to each (original, copy) element pair.
        field: Field name used in failure messages.

    Returns:
        Verifier over two iterables. Counts are checked before any element.
    """

    def verify(original: Iterable[E], copy: Iterable[E]) -> None:
        if _both_absent(field, original, copy):
            return
        original_items = list(original)
        copy_items = list(copy)
        check_counts(field, original_items, copy_items)
        for o, c in zip(original_items, copy_items, strict=True):
            element_verifier(o, c)

    return verify


def keyed_sequence_verifier[K, E](
    element_verifier: Verifier[E], field: str | None = None
) -> Verifier[Iterable[tuple[K, E]] | Mapping[K, E]]:
    """Wrap an element verifier for mappings or sequences of (key, value) pairs.

    Pairs are matched by position, and only the values are handed to
    ``element_verifier``. Keys are not compared.

    Args:
        element_verifier: Verifier applied to each (original, copy) value pair.
        field: Field name used in failure messages.

    Returns:
        Verifier over two mappings (or iterables of pairs).
    """

    def verify(
        original: Iterable[tuple[K, E]] | Mapping[K, E],
        copy: Iterable[tuple[K, E]] | Mapping[K, E],
    ) -> None:
        if _both_absent(field, original, copy):
            return
        original_pairs = _pairs(original)
        copy_pairs = _pairs(copy)
        check_counts(field, original_pairs, copy_pairs)
        for (_, o), (_, c) in zip(original_pairs, copy_pairs, strict=True):
            element_verifier(o, c)

    return verify
